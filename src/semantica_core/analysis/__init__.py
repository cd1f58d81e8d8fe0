"""
Semantic analysis for Semantica.

Turns one source file into a normalized inventory of the functions,
classes, imports, exports, calls and symbols it declares, for 37
languages.

Key components:
- config: Extension and grammar tables, keyword denylists
- models: Result and request models (the wire contract)
- exceptions: Parsing and lookup exceptions
- parser: Parser factory, registry and parse sessions
- extractors: Tree, regex and composite extractors
- analyzer: Extension-driven dispatcher
"""

from semantica_core.analysis.analyzer import (
    UNKNOWN_LANGUAGE,
    SemanticAnalyzer,
    analyze,
    get_analyzer,
    reset_analyzer,
)
from semantica_core.analysis.config import (
    EXTENSION_TO_LANGUAGE,
    GRAMMAR_BY_LANGUAGE,
    LANGUAGE_EXTENSIONS,
    get_config_stats,
    get_extensions_by_language,
    get_language_by_extension,
    is_supported_extension,
)
from semantica_core.analysis.exceptions import (
    ExtractorNotFoundError,
    LanguageNotSupportedError,
    ParseError,
    TreeSitterError,
    UnsupportedExtensionError,
)
from semantica_core.analysis.extractors import (
    DEFAULT_EXTRACTORS,
    BaseExtractor,
    register_default_extractors,
)
from semantica_core.analysis.models import (
    AnalysisRequest,
    AnalysisResult,
    CallInfo,
    ClassInfo,
    ExportInfo,
    FunctionInfo,
    ImportInfo,
    ParameterInfo,
    PropertyInfo,
    SymbolInfo,
    SyntaxErrorInfo,
)
from semantica_core.analysis.parser import (
    LanguageParserRegistry,
    ParserFactory,
    ParseSession,
)

__all__ = [
    # Dispatcher
    "SemanticAnalyzer",
    "UNKNOWN_LANGUAGE",
    "analyze",
    "get_analyzer",
    "reset_analyzer",
    # Config
    "LANGUAGE_EXTENSIONS",
    "EXTENSION_TO_LANGUAGE",
    "GRAMMAR_BY_LANGUAGE",
    "get_language_by_extension",
    "get_extensions_by_language",
    "is_supported_extension",
    "get_config_stats",
    # Exceptions
    "TreeSitterError",
    "LanguageNotSupportedError",
    "ParseError",
    "ExtractorNotFoundError",
    "UnsupportedExtensionError",
    # Extractors
    "BaseExtractor",
    "DEFAULT_EXTRACTORS",
    "register_default_extractors",
    # Models
    "ParameterInfo",
    "FunctionInfo",
    "PropertyInfo",
    "ClassInfo",
    "ImportInfo",
    "ExportInfo",
    "CallInfo",
    "SymbolInfo",
    "SyntaxErrorInfo",
    "AnalysisResult",
    "AnalysisRequest",
    # Parser
    "LanguageParserRegistry",
    "ParserFactory",
    "ParseSession",
]
