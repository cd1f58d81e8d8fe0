"""Semantic extractors for every supported language.

Three families share the BaseExtractor.analyze() contract:

Tree extractors (tree-sitter grammar):
    PHPExtractor, JavaScriptExtractor, TypeScriptExtractor, PythonExtractor,
    GoExtractor, RustExtractor, JavaExtractor, CSharpExtractor,
    RubyExtractor, SwiftExtractor, CExtractor, HTMLExtractor, CSSExtractor,
    YAMLExtractor, BashExtractor, ScalaExtractor, ElixirExtractor,
    LuaExtractor, OCamlExtractor.

Regex extractors (heuristic, no grammar):
    KotlinExtractor, GroovyExtractor, ClojureExtractor, HaskellExtractor,
    FSharpExtractor, PerlExtractor, RExtractor, JuliaExtractor,
    DartExtractor, ObjCExtractor, ZigExtractor, SQLExtractor.

Composite extractors (single-file components):
    VueExtractor, SvelteExtractor.

Registration:
    DEFAULT_EXTRACTORS maps each canonical language to a factory.
    register_default_extractors() fills a LanguageParserRegistry from it;
    nothing registers on import.

Author: Goncharenko Anton aka alienxs2
License: MIT
"""

from types import MappingProxyType
from typing import Callable, Mapping, Optional

import structlog

from ..parser.registry import LanguageParserRegistry
from .base import BaseExtractor, BaseTreeExtractor
from .bash import BashExtractor
from .c import CExtractor
from .clojure import ClojureExtractor
from .composite import SvelteExtractor, VueExtractor
from .csharp import CSharpExtractor
from .css import CSSExtractor
from .dart import DartExtractor
from .elixir import ElixirExtractor
from .fsharp import FSharpExtractor
from .go import GoExtractor
from .groovy import GroovyExtractor
from .haskell import HaskellExtractor
from .html import HTMLExtractor
from .java import JavaExtractor
from .javascript import JavaScriptExtractor
from .julia import JuliaExtractor
from .kotlin import KotlinExtractor
from .lua import LuaExtractor
from .objc import ObjCExtractor
from .ocaml import OCamlExtractor
from .perl import PerlExtractor
from .php import PHPExtractor
from .python import PythonExtractor
from .r import RExtractor
from .regex_base import BaseRegexExtractor
from .ruby import RubyExtractor
from .rust import RustExtractor
from .scala import ScalaExtractor
from .sql import SQLExtractor
from .swift import SwiftExtractor
from .typescript import TypeScriptExtractor
from .yaml import YAMLExtractor
from .zig import ZigExtractor

logger = structlog.get_logger(__name__)

ExtractorFactory = Callable[[], BaseExtractor]

# =============================================================================
# DEFAULT EXTRACTOR TABLE
# =============================================================================
# Canonical language -> factory. Every language in LANGUAGE_EXTENSIONS
# appears here exactly once.

DEFAULT_EXTRACTORS: Mapping[str, ExtractorFactory] = MappingProxyType(
    {
        # Tree-sitter
        "php": PHPExtractor,
        "javascript": lambda: JavaScriptExtractor("javascript"),
        "jsx": lambda: JavaScriptExtractor("jsx"),
        "typescript": lambda: TypeScriptExtractor("typescript"),
        "tsx": lambda: TypeScriptExtractor("tsx"),
        "python": PythonExtractor,
        "go": GoExtractor,
        "rust": RustExtractor,
        "java": JavaExtractor,
        "csharp": CSharpExtractor,
        "ruby": RubyExtractor,
        "swift": SwiftExtractor,
        "c": lambda: CExtractor("c"),
        "cpp": lambda: CExtractor("cpp"),
        "html": HTMLExtractor,
        "css": lambda: CSSExtractor("css"),
        "scss": lambda: CSSExtractor("scss"),
        "yaml": YAMLExtractor,
        "bash": BashExtractor,
        "scala": ScalaExtractor,
        "elixir": ElixirExtractor,
        "lua": LuaExtractor,
        "ocaml": OCamlExtractor,
        # Regex
        "kotlin": KotlinExtractor,
        "groovy": GroovyExtractor,
        "clojure": ClojureExtractor,
        "haskell": HaskellExtractor,
        "fsharp": FSharpExtractor,
        "perl": PerlExtractor,
        "r": RExtractor,
        "julia": JuliaExtractor,
        "dart": DartExtractor,
        "objc": ObjCExtractor,
        "zig": ZigExtractor,
        "sql": SQLExtractor,
        # Composite
        "vue": VueExtractor,
        "svelte": SvelteExtractor,
    }
)


def register_default_extractors(registry: Optional[LanguageParserRegistry] = None) -> int:
    """
    Register one extractor instance per canonical language.

    Languages that already have an extractor keep it, so tests and callers
    can pre-register replacements.

    Args:
        registry: Target registry (default: the process-wide singleton)

    Returns:
        Number of extractors newly registered
    """
    registry = registry or LanguageParserRegistry()
    registered = set(registry.list_registered_extractors())

    count = 0
    for language, factory in DEFAULT_EXTRACTORS.items():
        if language in registered:
            continue
        registry.register_extractor(language, factory())
        count += 1

    logger.debug("default_extractors_registered", count=count)
    return count


__all__ = [
    # Bases
    "BaseExtractor",
    "BaseTreeExtractor",
    "BaseRegexExtractor",
    # Tree-sitter
    "PHPExtractor",
    "JavaScriptExtractor",
    "TypeScriptExtractor",
    "PythonExtractor",
    "GoExtractor",
    "RustExtractor",
    "JavaExtractor",
    "CSharpExtractor",
    "RubyExtractor",
    "SwiftExtractor",
    "CExtractor",
    "HTMLExtractor",
    "CSSExtractor",
    "YAMLExtractor",
    "BashExtractor",
    "ScalaExtractor",
    "ElixirExtractor",
    "LuaExtractor",
    "OCamlExtractor",
    # Regex
    "KotlinExtractor",
    "GroovyExtractor",
    "ClojureExtractor",
    "HaskellExtractor",
    "FSharpExtractor",
    "PerlExtractor",
    "RExtractor",
    "JuliaExtractor",
    "DartExtractor",
    "ObjCExtractor",
    "ZigExtractor",
    "SQLExtractor",
    # Composite
    "VueExtractor",
    "SvelteExtractor",
    # Registration
    "DEFAULT_EXTRACTORS",
    "register_default_extractors",
]
