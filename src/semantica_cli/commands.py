"""
Command implementations for the Semantica CLI.

Each command writes exactly one JSON document to stdout and never fails
the process: malformed input becomes a response with language "unknown"
and one "invalid request: ..." error. Logs go to stderr.
"""

import json
import sys
from pathlib import Path
from typing import Any, Optional, TextIO

import structlog
from pydantic import ValidationError as PydanticValidationError

from semantica_core.analysis import (
    EXTENSION_TO_LANGUAGE,
    UNKNOWN_LANGUAGE,
    AnalysisRequest,
    AnalysisResult,
    SemanticAnalyzer,
)
from semantica_core.config import SemanticaSettings
from semantica_core.exceptions import ValidationError

logger = structlog.get_logger(__name__)


def invalid_request(reason: str) -> AnalysisResult:
    """Response for input that could not be turned into a request."""
    return AnalysisResult.failure(UNKNOWN_LANGUAGE, f"invalid request: {reason}")


def parse_request(raw: str) -> AnalysisRequest:
    """
    Validate a JSON request body.

    Raises:
        ValidationError: With a one-line reason when the body is not a valid request
    """
    try:
        return AnalysisRequest.model_validate_json(raw)
    except PydanticValidationError as e:
        errors = e.errors()
        reason = errors[0]["msg"] if errors else str(e)
        raise ValidationError(reason, details={"errors": len(errors)}) from e


def load_settings() -> SemanticaSettings:
    """
    Load settings from the environment.

    Raises:
        ValidationError: With a one-line reason when a SEMANTICA_* variable is invalid
    """
    try:
        return SemanticaSettings()
    except PydanticValidationError as e:
        errors = e.errors()
        reason = errors[0]["msg"] if errors else str(e)
        raise ValidationError(reason, details={"errors": len(errors)}) from e


def read_file_request(path: Path) -> AnalysisRequest:
    """
    Build a request from a file on disk; the extension comes from the path.

    Raises:
        ValidationError: If the file cannot be read (VAL_002)
    """
    try:
        content = path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise ValidationError(
            f"cannot read {path}: {e.strerror or e}", error_code="VAL_002", original_exception=e
        ) from e
    return AnalysisRequest(filename=path.name, content=content, extension=path.suffix)


def write_json(payload: Any, pretty: bool, stream: Optional[TextIO] = None) -> None:
    stream = stream or sys.stdout
    stream.write(json.dumps(payload, indent=2 if pretty else None, ensure_ascii=False))
    stream.write("\n")
    stream.flush()


def analyze_command(
    settings: SemanticaSettings,
    file_path: Optional[Path] = None,
    pretty: bool = False,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
) -> int:
    """
    Analyze one request from stdin, or one file with --file.

    Args:
        settings: Loaded settings (size limit, output defaults)
        file_path: Analyze this file instead of reading a request from stdin
        pretty: Indent the JSON response
        stdin: Input stream (default: sys.stdin)
        stdout: Output stream (default: sys.stdout)

    Returns:
        Exit status, always 0
    """
    pretty = pretty or settings.pretty_output

    try:
        if file_path is not None:
            request = read_file_request(file_path)
        else:
            request = parse_request((stdin or sys.stdin).read())
    except ValidationError as e:
        logger.info("invalid_request", reason=e.message, error_code=e.error_code)
        write_json(invalid_request(e.message).to_wire(), pretty, stdout)
        return 0

    result = SemanticAnalyzer(settings=settings).analyze_request(request)
    write_json(result.to_wire(), pretty, stdout)
    return 0


def languages_command(pretty: bool = False, stdout: Optional[TextIO] = None) -> int:
    """Print every extension -> language pair, sorted by extension."""
    write_json(dict(sorted(EXTENSION_TO_LANGUAGE.items())), pretty, stdout)
    return 0


__all__ = [
    "analyze_command",
    "invalid_request",
    "languages_command",
    "load_settings",
    "parse_request",
    "read_file_request",
    "write_json",
]
