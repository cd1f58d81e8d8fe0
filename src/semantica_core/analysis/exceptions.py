"""
Exception hierarchy for the analysis layer.

Covers parser construction, parsing, extractor lookup and extension
lookup. Every class here derives from ProcessingError; none of them is
transient, since grammar availability and source text do not change
between retries.

Author: Goncharenko Anton aka alienxs2
License: MIT
"""

from typing import Optional

from semantica_core.exceptions import ProcessingError


class TreeSitterError(ProcessingError):
    """
    Base exception for tree-sitter parsing and extraction failures.

    Error Code: TS_001
    """

    def __init__(
        self,
        message: str = "Tree-sitter operation failed",
        error_code: str = "TS_001",
        **kwargs,
    ):
        super().__init__(message=message, error_code=error_code, **kwargs)
        self.is_transient = False


class LanguageNotSupportedError(TreeSitterError):
    """
    Raised when tree-sitter-language-pack has no grammar for a language.

    Error Code: TS_002

    Example:
        raise LanguageNotSupportedError(language="ocaml", details={"error": "..."})
    """

    def __init__(
        self,
        language: str,
        message: Optional[str] = None,
        error_code: str = "TS_002",
        **kwargs,
    ):
        self.language = language
        if message is None:
            message = f"Language '{language}' is not supported by tree-sitter-language-pack"

        details = kwargs.pop("details", {})
        details["language"] = language

        super().__init__(message=message, error_code=error_code, details=details, **kwargs)


class ParseError(TreeSitterError):
    """
    Raised when the parser raises or returns no tree.

    The tree extractor turns this into a result carrying a single
    "failed to parse <Display>" error.

    Error Code: TS_003
    """

    def __init__(
        self,
        language: str,
        parse_details: Optional[str] = None,
        message: Optional[str] = None,
        error_code: str = "TS_003",
        **kwargs,
    ):
        self.language = language
        self.parse_details = parse_details

        if message is None:
            if parse_details:
                message = f"Failed to parse {language} source: {parse_details}"
            else:
                message = f"Failed to parse {language} source"

        details = kwargs.pop("details", {})
        details["language"] = language
        if parse_details:
            details["parse_details"] = parse_details

        super().__init__(message=message, error_code=error_code, details=details, **kwargs)


class ExtractorNotFoundError(TreeSitterError):
    """
    Raised when a known language has no registered extractor.

    Error Code: TS_004
    """

    def __init__(
        self,
        language: str,
        message: Optional[str] = None,
        error_code: str = "TS_004",
        **kwargs,
    ):
        self.language = language
        if message is None:
            message = f"language not yet implemented: {language}"

        details = kwargs.pop("details", {})
        details["language"] = language

        super().__init__(message=message, error_code=error_code, details=details, **kwargs)


class UnsupportedExtensionError(ProcessingError):
    """
    Raised when a file extension maps to no known language.

    Error Code: TS_005
    """

    def __init__(
        self,
        extension: str,
        message: Optional[str] = None,
        error_code: str = "TS_005",
        **kwargs,
    ):
        self.extension = extension
        if message is None:
            message = f"unsupported file extension: {extension}"

        details = kwargs.pop("details", {})
        details["extension"] = extension

        super().__init__(message=message, error_code=error_code, details=details, **kwargs)


__all__ = [
    "TreeSitterError",
    "LanguageNotSupportedError",
    "ParseError",
    "ExtractorNotFoundError",
    "UnsupportedExtensionError",
]
