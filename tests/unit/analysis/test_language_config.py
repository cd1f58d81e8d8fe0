"""Unit tests for semantica_core.analysis.config."""

import pytest

from semantica_core.analysis.config import (
    EXTENSION_TO_LANGUAGE,
    GRAMMAR_BY_LANGUAGE,
    LANGUAGE_DISPLAY_NAMES,
    LANGUAGE_EXTENSIONS,
    get_config_stats,
    get_display_name,
    get_extensions_by_language,
    get_grammar_name,
    get_language_by_extension,
    is_supported_extension,
    normalize_extension,
)
from semantica_core.analysis.extractors import DEFAULT_EXTRACTORS


class TestExtensionTable:
    """Tests for the extension -> language contract."""

    @pytest.mark.parametrize(
        "extension, language",
        [
            ("php", "php"),
            ("mjs", "javascript"),
            ("cjs", "javascript"),
            ("jsx", "jsx"),
            ("ts", "typescript"),
            ("tsx", "tsx"),
            ("py", "python"),
            ("kts", "kotlin"),
            ("sc", "scala"),
            ("gsh", "groovy"),
            ("edn", "clojure"),
            ("zsh", "bash"),
            ("t", "perl"),
            ("r", "r"),
            ("R", "r"),
            ("mm", "objc"),
            ("h", "c"),
            ("hxx", "cpp"),
            ("exs", "elixir"),
            ("lhs", "haskell"),
            ("mli", "ocaml"),
            ("fsx", "fsharp"),
            ("htm", "html"),
            ("sass", "scss"),
            ("yml", "yaml"),
            ("sql", "sql"),
        ],
    )
    def test_lookup(self, extension, language):
        """Test representative extensions."""
        assert get_language_by_extension(extension) == language

    def test_leading_dot_and_whitespace(self):
        """Test a leading dot and surrounding spaces are ignored."""
        assert get_language_by_extension(".py") == "python"
        assert get_language_by_extension(" go ") == "go"
        assert normalize_extension(".R") == "R"

    def test_lookup_is_case_sensitive(self):
        """Test only listed case variants resolve."""
        assert get_language_by_extension("PY") is None
        assert get_language_by_extension("Go") is None

    @pytest.mark.parametrize("extension", ["xyz", "", ".", "txt", "json"])
    def test_unknown(self, extension):
        """Test unmapped extensions."""
        assert get_language_by_extension(extension) is None
        assert is_supported_extension(extension) is False

    def test_every_extension_belongs_to_one_language(self):
        """Test the reverse table loses no extension."""
        total = sum(len(exts) for exts in LANGUAGE_EXTENSIONS.values())

        assert len(EXTENSION_TO_LANGUAGE) == total

    def test_repeated_lookup_is_stable(self):
        """Test lookups are pure."""
        assert {get_language_by_extension("rb") for _ in range(5)} == {"ruby"}

    def test_tables_are_read_only(self):
        """Test tables cannot be mutated by callers."""
        with pytest.raises(TypeError):
            EXTENSION_TO_LANGUAGE["xyz"] = "python"  # type: ignore[index]

    def test_extensions_by_language(self):
        """Test forward lookup."""
        assert get_extensions_by_language("cpp") == ("cpp", "cc", "cxx", "hpp", "hxx")
        assert get_extensions_by_language("cobol") == ()


class TestGrammarAndDisplayNames:
    """Tests for grammar and display-name tables."""

    def test_tree_languages_have_display_names(self):
        """Test every tree-backed language has a display name."""
        assert set(GRAMMAR_BY_LANGUAGE) <= set(LANGUAGE_DISPLAY_NAMES)

    def test_grammar_names(self):
        """Test dialects share grammars where they should."""
        assert get_grammar_name("jsx") == "javascript"
        assert get_grammar_name("tsx") == "tsx"
        assert get_grammar_name("kotlin") is None

    def test_display_names(self):
        """Test display names used in parse failure messages."""
        assert get_display_name("csharp") == "C#"
        assert get_display_name("cpp") == "C++"
        assert get_display_name("zig") == "zig"

    def test_every_language_has_an_extractor(self):
        """Test the default extractor table covers every language."""
        assert set(DEFAULT_EXTRACTORS) == set(LANGUAGE_EXTENSIONS)

    def test_config_stats(self):
        """Test summary counts."""
        stats = get_config_stats()

        assert stats["total_languages"] == len(LANGUAGE_EXTENSIONS)
        assert stats["total_extensions"] == len(EXTENSION_TO_LANGUAGE)
        assert stats["tree_backed_languages"] == 23
