"""
ParseSession - scoped ownership of one parsed tree.

Nodes borrowed from a tree are only valid while the tree is alive. A
session parses on entry and drops the tree on every exit path, so no node
escapes the extraction that produced it.

Author: Goncharenko Anton aka alienxs2
License: MIT
"""

from types import TracebackType
from typing import Optional, Type

import structlog
from tree_sitter import Node, Tree

from .base import BaseLanguageParser

logger = structlog.get_logger(__name__)


class ParseSession:
    """
    Context manager owning a single syntax tree.

    Example:
        with ParseSession(parser, source) as session:
            for node in session.root.children:
                ...

    Raises on entry:
        ParseError / LanguageNotSupportedError from the parser.
    """

    def __init__(self, parser: BaseLanguageParser, source: bytes) -> None:
        self._parser = parser
        self._source = source
        self._tree: Optional[Tree] = None

    def __enter__(self) -> "ParseSession":
        self._tree = self._parser.parse(self._source)
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.close()

    @property
    def is_open(self) -> bool:
        return self._tree is not None

    @property
    def root(self) -> Node:
        """Root node of the owned tree."""
        if self._tree is None:
            raise RuntimeError("ParseSession is not open")
        return self._tree.root_node

    @property
    def source(self) -> bytes:
        return self._source

    def close(self) -> None:
        """Release the tree. Safe to call more than once."""
        if self._tree is not None:
            logger.debug("parse_session_closed", language=self._parser.language_name)
        self._tree = None


__all__ = ["ParseSession"]
