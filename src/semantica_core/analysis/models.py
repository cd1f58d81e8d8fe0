"""Pydantic models for semantic analysis results.

Every model maps one-to-one onto the JSON wire schema. Optional scalar
fields are omitted from the wire form when empty; collections are always
emitted (possibly empty). Line and column numbers are 1-based.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _empty_to_none(value: Any) -> Any:
    """Collapse empty strings so that exclude_none drops them from the wire."""
    if isinstance(value, str) and not value:
        return None
    return value


class ParameterInfo(BaseModel):
    """A function or method parameter."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(..., min_length=1, description="Parameter name")
    type_annotation: Optional[str] = Field(
        default=None,
        serialization_alias="type",
        description="Parameter type text if present (e.g., 'int', 'List[str]')",
    )

    _normalize = field_validator("type_annotation", mode="before")(_empty_to_none)


class FunctionInfo(BaseModel):
    """A function, method or closure declaration.

    The name may be empty for anonymous closures; such entries still carry
    their position and parameters.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(default="", description="Function name, empty if anonymous")
    line_start: int = Field(..., ge=1, description="First line (1-based)")
    line_end: int = Field(..., ge=1, description="Last line (1-based)")
    parameters: List[ParameterInfo] = Field(default_factory=list)
    return_type: Optional[str] = Field(default=None, description="Return type text")
    visibility: Optional[str] = Field(
        default=None,
        description="Visibility tag (public, private, protected, internal, ...)",
    )
    is_async: bool = Field(default=False)
    is_static: bool = Field(default=False)
    docstring: Optional[str] = Field(default=None, description="Leading documentation")

    _normalize = field_validator("return_type", "visibility", "docstring", mode="before")(
        _empty_to_none
    )

    def shift_lines(self, offset: int) -> "FunctionInfo":
        """Return a copy with every line moved down by offset."""
        if not offset:
            return self
        return self.model_copy(
            update={"line_start": self.line_start + offset, "line_end": self.line_end + offset}
        )


class PropertyInfo(BaseModel):
    """A field or property owned by a type."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(..., min_length=1)
    type_annotation: Optional[str] = Field(default=None, serialization_alias="type")
    visibility: Optional[str] = Field(default=None)

    _normalize = field_validator("type_annotation", "visibility", mode="before")(_empty_to_none)


class ClassInfo(BaseModel):
    """A class, struct, interface, trait, record or module."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    line_start: int = Field(..., ge=1)
    line_end: int = Field(..., ge=1)
    extends: Optional[str] = Field(default=None, description="Single supertype name")
    implements: List[str] = Field(default_factory=list)
    methods: List[FunctionInfo] = Field(default_factory=list)
    properties: List[PropertyInfo] = Field(default_factory=list)

    _normalize = field_validator("extends", mode="before")(_empty_to_none)

    def shift_lines(self, offset: int) -> "ClassInfo":
        """Return a copy with own and member lines moved down by offset."""
        if not offset:
            return self
        return self.model_copy(
            update={
                "line_start": self.line_start + offset,
                "line_end": self.line_end + offset,
                "methods": [m.shift_lines(offset) for m in self.methods],
            }
        )


class ImportInfo(BaseModel):
    """An import, include, require or use directive."""

    model_config = ConfigDict(frozen=True)

    module: str = Field(..., description="Module or path string")
    symbols: List[str] = Field(default_factory=list, description="Imported names")
    line: int = Field(..., ge=1)
    is_default: bool = Field(default=False, description="Default import (JS/TS)")

    def shift_lines(self, offset: int) -> "ImportInfo":
        """Return a copy moved down by offset lines."""
        return self.model_copy(update={"line": self.line + offset}) if offset else self


class ExportInfo(BaseModel):
    """An exported name. "default" marks an unnamed default export."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    line: int = Field(..., ge=1)

    def shift_lines(self, offset: int) -> "ExportInfo":
        """Return a copy moved down by offset lines."""
        return self.model_copy(update={"line": self.line + offset}) if offset else self


class CallInfo(BaseModel):
    """A call site."""

    model_config = ConfigDict(frozen=True)

    caller_function: Optional[str] = Field(
        default=None, description="Name of the enclosing function, if any"
    )
    callee: str = Field(..., min_length=1)
    line: int = Field(..., ge=1)
    arguments_count: int = Field(default=0, ge=0)
    is_method_call: bool = Field(default=False)
    receiver: Optional[str] = Field(default=None, description="Receiver expression text")

    _normalize = field_validator("caller_function", "receiver", mode="before")(_empty_to_none)

    def shift_lines(self, offset: int) -> "CallInfo":
        """Return a copy moved down by offset lines."""
        return self.model_copy(update={"line": self.line + offset}) if offset else self


class SymbolInfo(BaseModel):
    """A notable named entity with a free-form kind tag."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    kind: str = Field(..., min_length=1, description="variable, selector, key, component, ...")
    line: int = Field(..., ge=1)

    def shift_lines(self, offset: int) -> "SymbolInfo":
        """Return a copy moved down by offset lines."""
        return self.model_copy(update={"line": self.line + offset}) if offset else self


class SyntaxErrorInfo(BaseModel):
    """A reported defect.

    Defects found in a tree carry 1-based positions. Messages produced
    without a node (dispatch or parse failures) carry line and column 0.
    """

    model_config = ConfigDict(frozen=True)

    line: int = Field(default=0, ge=0)
    column: int = Field(default=0, ge=0)
    message: str = Field(..., min_length=1)


class AnalysisResult(BaseModel):
    """Normalized semantic inventory of one source file."""

    model_config = ConfigDict(validate_assignment=True)

    language: str = Field(..., min_length=1, description="Canonical language identifier")
    functions: List[FunctionInfo] = Field(default_factory=list)
    classes: List[ClassInfo] = Field(default_factory=list)
    imports: List[ImportInfo] = Field(default_factory=list)
    exports: List[ExportInfo] = Field(default_factory=list)
    calls: List[CallInfo] = Field(default_factory=list)
    symbols: List[SymbolInfo] = Field(default_factory=list)
    errors: List[SyntaxErrorInfo] = Field(default_factory=list)

    @classmethod
    def failure(cls, language: str, message: str) -> "AnalysisResult":
        """Build a result that carries only a language and one message."""
        return cls(language=language, errors=[SyntaxErrorInfo(message=message)])

    def merge(self, other: "AnalysisResult", offset: int = 0) -> None:
        """Append another result's entities, moving their lines by offset.

        Symbols and errors are not merged; callers decide which sections
        contribute those.
        """
        self.functions.extend(f.shift_lines(offset) for f in other.functions)
        self.classes.extend(c.shift_lines(offset) for c in other.classes)
        self.imports.extend(i.shift_lines(offset) for i in other.imports)
        self.exports.extend(e.shift_lines(offset) for e in other.exports)
        self.calls.extend(c.shift_lines(offset) for c in other.calls)

    def to_wire(self) -> Dict[str, Any]:
        """Return the JSON-ready dict with empty optional fields omitted."""
        return self.model_dump(by_alias=True, exclude_none=True)

    def to_json(self, indent: Optional[int] = None) -> str:
        """Serialize to the wire JSON string."""
        return self.model_dump_json(by_alias=True, exclude_none=True, indent=indent)


class AnalysisRequest(BaseModel):
    """Incoming request: one file to analyze.

    The filename is advisory; the extension selects the language.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    filename: str = Field(default="")
    content: str = Field(default="")
    extension: str = Field(default="")


__all__ = [
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
]
