"""
Analysis configuration module.

Contains the extension -> language table, grammar and display-name
mappings, and the keyword denylists used by the regex extractors. All
tables are immutable and safe to share across concurrent calls.
"""

from types import MappingProxyType
from typing import Dict, FrozenSet, Mapping, Optional, Tuple


# =============================================================================
# LANGUAGE EXTENSIONS MAPPING
# =============================================================================
# Maps canonical language identifiers to their file extensions (no dot).
# This is a wire contract with the calling system: every extension belongs
# to exactly one language. Case variants are listed explicitly.

_LANGUAGE_EXTENSIONS: Dict[str, Tuple[str, ...]] = {
    # -------------------------------------------------------------------------
    # Core languages
    # -------------------------------------------------------------------------
    "php": ("php",),
    "javascript": ("js", "mjs", "cjs"),
    "jsx": ("jsx",),
    "typescript": ("ts",),
    "tsx": ("tsx",),
    "python": ("py",),
    "go": ("go",),
    "rust": ("rs",),
    # -------------------------------------------------------------------------
    # JVM / .NET
    # -------------------------------------------------------------------------
    "java": ("java",),
    "kotlin": ("kt", "kts"),
    "scala": ("scala", "sc"),
    "groovy": ("groovy", "gvy", "gy", "gsh"),
    "clojure": ("clj", "cljs", "cljc", "edn"),
    "csharp": ("cs",),
    # -------------------------------------------------------------------------
    # Dynamic / scripting
    # -------------------------------------------------------------------------
    "ruby": ("rb",),
    "bash": ("sh", "bash", "zsh"),
    "lua": ("lua",),
    "perl": ("pl", "pm", "t"),
    "r": ("r", "R"),
    "julia": ("jl",),
    # -------------------------------------------------------------------------
    # Apple / mobile / systems
    # -------------------------------------------------------------------------
    "swift": ("swift",),
    "objc": ("m", "mm"),
    "dart": ("dart",),
    "c": ("c", "h"),
    "cpp": ("cpp", "cc", "cxx", "hpp", "hxx"),
    "zig": ("zig",),
    # -------------------------------------------------------------------------
    # Functional
    # -------------------------------------------------------------------------
    "elixir": ("ex", "exs"),
    "haskell": ("hs", "lhs"),
    "ocaml": ("ml", "mli"),
    "fsharp": ("fs", "fsi", "fsx"),
    # -------------------------------------------------------------------------
    # Web
    # -------------------------------------------------------------------------
    "vue": ("vue",),
    "svelte": ("svelte",),
    "html": ("html", "htm"),
    "css": ("css",),
    "scss": ("scss", "sass"),
    # -------------------------------------------------------------------------
    # Data & configuration
    # -------------------------------------------------------------------------
    "sql": ("sql",),
    "yaml": ("yaml", "yml"),
}

LANGUAGE_EXTENSIONS: Mapping[str, Tuple[str, ...]] = MappingProxyType(_LANGUAGE_EXTENSIONS)


# =============================================================================
# EXTENSION TO LANGUAGE MAPPING (Reverse Lookup)
# =============================================================================

EXTENSION_TO_LANGUAGE: Mapping[str, str] = MappingProxyType(
    {ext: lang for lang, extensions in _LANGUAGE_EXTENSIONS.items() for ext in extensions}
)


# =============================================================================
# TREE-SITTER GRAMMARS
# =============================================================================
# Canonical language -> grammar name in tree-sitter-language-pack.
# Languages absent here are handled by regex or composite extractors.

GRAMMAR_BY_LANGUAGE: Mapping[str, str] = MappingProxyType(
    {
        "php": "php",
        "javascript": "javascript",
        "jsx": "javascript",
        "typescript": "typescript",
        "tsx": "tsx",
        "python": "python",
        "go": "go",
        "rust": "rust",
        "java": "java",
        "csharp": "csharp",
        "ruby": "ruby",
        "swift": "swift",
        "c": "c",
        "cpp": "cpp",
        "html": "html",
        "css": "css",
        "scss": "scss",
        "yaml": "yaml",
        "bash": "bash",
        "scala": "scala",
        "elixir": "elixir",
        "lua": "lua",
        "ocaml": "ocaml",
    }
)

# Human-readable names used in "failed to parse <Name>" messages.
LANGUAGE_DISPLAY_NAMES: Mapping[str, str] = MappingProxyType(
    {
        "php": "PHP",
        "javascript": "JavaScript",
        "jsx": "JavaScript",
        "typescript": "TypeScript",
        "tsx": "TypeScript",
        "python": "Python",
        "go": "Go",
        "rust": "Rust",
        "java": "Java",
        "csharp": "C#",
        "ruby": "Ruby",
        "swift": "Swift",
        "c": "C",
        "cpp": "C++",
        "html": "HTML",
        "css": "CSS",
        "scss": "SCSS",
        "yaml": "YAML",
        "bash": "Bash",
        "scala": "Scala",
        "elixir": "Elixir",
        "lua": "Lua",
        "ocaml": "OCaml",
    }
)


# =============================================================================
# KEYWORD DENYLISTS
# =============================================================================
# Words that regex declaration patterns can capture in a name position but
# that are control-flow or declaration keywords, never names.

DART_KEYWORDS: FrozenSet[str] = frozenset(
    {"class", "if", "while", "for", "switch", "catch", "else", "return", "new", "await"}
)

GROOVY_KEYWORDS: FrozenSet[str] = frozenset(
    {"class", "interface", "if", "while", "for", "switch", "catch", "trait"}
)

GROOVY_TYPE_KEYWORDS: FrozenSet[str] = frozenset({"class", "interface", "trait"})

# Statement keywords that look like a type in "Type name(" or "Type name =".
GROOVY_STATEMENT_KEYWORDS: FrozenSet[str] = frozenset(
    {"return", "new", "throw", "else", "case", "assert", "import", "package"}
)

HASKELL_SIGNATURE_KEYWORDS: FrozenSet[str] = frozenset(
    {"class", "instance", "data", "type", "newtype"}
)

HASKELL_KEYWORDS: FrozenSet[str] = frozenset(
    {
        "module", "import", "data", "type", "newtype", "class", "instance",
        "where", "let", "in", "if", "then", "else",
    }
)

# "ON UPDATE CASCADE", "AFTER UPDATE ON t", "DO UPDATE SET": UPDATE is not a statement there.
SQL_UPDATE_CONTEXT_KEYWORDS: FrozenSet[str] = frozenset(
    {"ON", "BEFORE", "AFTER", "OF", "OR", "FOR", "DO", "INSTEAD"}
)


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def normalize_extension(extension: str) -> str:
    """
    Strip surrounding whitespace and a single leading dot.

    Case is preserved: "R" and "r" are distinct table entries.
    """
    extension = extension.strip()
    if extension.startswith("."):
        extension = extension[1:]
    return extension


def get_language_by_extension(extension: str) -> Optional[str]:
    """
    Get the canonical language identifier for a file extension.

    Args:
        extension: File extension with or without leading dot.
                   Examples: "py", ".py", "R"

    Returns:
        Language identifier if found, None otherwise.

    Examples:
        >>> get_language_by_extension("py")
        'python'
        >>> get_language_by_extension(".tsx")
        'tsx'
        >>> get_language_by_extension("xyz") is None
        True
    """
    return EXTENSION_TO_LANGUAGE.get(normalize_extension(extension))


def get_extensions_by_language(language: str) -> Tuple[str, ...]:
    """
    Get all file extensions associated with a language.

    Examples:
        >>> get_extensions_by_language("cpp")
        ('cpp', 'cc', 'cxx', 'hpp', 'hxx')
    """
    return LANGUAGE_EXTENSIONS.get(language, ())


def is_supported_extension(extension: str) -> bool:
    """Check if a file extension maps to a language."""
    return get_language_by_extension(extension) is not None


def get_grammar_name(language: str) -> Optional[str]:
    """Return the tree-sitter grammar name for a language, if tree-backed."""
    return GRAMMAR_BY_LANGUAGE.get(language)


def get_display_name(language: str) -> str:
    """Return the human-readable language name, falling back to the identifier."""
    return LANGUAGE_DISPLAY_NAMES.get(language, language)


def get_config_stats() -> Dict[str, int]:
    """
    Get statistics about the configuration.

    Returns:
        Dictionary with total_languages, total_extensions and
        tree_backed_languages counts.
    """
    return {
        "total_languages": len(LANGUAGE_EXTENSIONS),
        "total_extensions": len(EXTENSION_TO_LANGUAGE),
        "tree_backed_languages": len(GRAMMAR_BY_LANGUAGE),
    }
