"""Unit tests for ParseSession."""

import pytest

from semantica_core.analysis.parser.factory import ParserFactory
from semantica_core.analysis.parser.session import ParseSession


@pytest.fixture
def go_parser():
    return ParserFactory.get_parser("go")


class TestParseSession:
    """Tree ownership across the session lifetime."""

    def test_root_available_inside(self, go_parser):
        """Test the root node is usable while the session is open."""
        with ParseSession(go_parser, b"package main\n") as session:
            assert session.is_open
            assert session.root.type == "source_file"
            assert session.source == b"package main\n"

    def test_closed_after_exit(self, go_parser):
        """Test the tree is released on exit."""
        with ParseSession(go_parser, b"package main\n") as session:
            pass

        assert not session.is_open
        with pytest.raises(RuntimeError, match="not open"):
            session.root

    def test_closed_when_body_raises(self, go_parser):
        """Test the tree is released when the body fails."""
        session = ParseSession(go_parser, b"package main\n")

        with pytest.raises(KeyError):
            with session:
                raise KeyError("boom")

        assert not session.is_open

    def test_not_open_before_enter(self, go_parser):
        """Test nothing is parsed until the session is entered."""
        session = ParseSession(go_parser, b"package main\n")

        assert not session.is_open
        with pytest.raises(RuntimeError):
            session.root

    def test_close_twice(self, go_parser):
        """Test close is safe to repeat."""
        with ParseSession(go_parser, b"package main\n") as session:
            session.close()
            session.close()

        assert not session.is_open
