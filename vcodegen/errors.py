# vcodegen/errors.py
"""
Code Generator Error Types

Generation is a pure function of (tree, options), so every error raised here
is fatal for the unit being generated: the caller discards any partial
output and fixes the IR or the options upstream.

Error Hierarchy:
────────────────
┌──────────────────────────────────────────────────────────────────────┐
│  CodegenError                                                        │
│  ├── MalformedIRError          IR violates the transform contract    │
│  │   ├── UnknownNodeTypeError  node kind missing from the dispatch   │
│  │   ├── UnknownHelperError    helper symbol has no runtime name     │
│  │   └── IRLoadError           JSON document cannot become a tree    │
│  └── InvalidOptionsError       unknown option or mode value          │
└──────────────────────────────────────────────────────────────────────┘

Codes are written ``VCG-NNNN``:
  - 1xxx: options
  - 4xxx: code generation and IR loading
  - 9xxx: internal

Example:
────────
    from vcodegen.errors import CodegenError

    try:
        result = generate(root)
    except CodegenError as exc:
        print(exc.to_gcc_format(), file=sys.stderr)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto, unique
from typing import Any, Dict, List, Optional

__all__ = [
    "ErrorSeverity",
    "ErrorPhase",
    "ErrorCategory",
    "ErrorCode",
    "CodegenErrorCodes",
    "SourceSpan",
    "ErrorNote",
    "ErrorMessage",
    "CodegenError",
    "MalformedIRError",
    "UnknownNodeTypeError",
    "UnknownHelperError",
    "IRLoadError",
    "InvalidOptionsError",
]


# ═══════════════════════════════════════════════════════════════════════════════
# CLASSIFICATION
# ═══════════════════════════════════════════════════════════════════════════════

@unique
class ErrorSeverity(Enum):
    FATAL = "fatal"        # aborts the whole unit
    ERROR = "error"
    WARNING = "warning"

    def is_error(self) -> bool:
        return self is not ErrorSeverity.WARNING


@unique
class ErrorPhase(Enum):
    """Where in the pipeline the error was detected."""

    OPTIONS = "options"
    CODEGEN = "codegen"
    LOADING = "loading"
    INTERNAL = "internal"


@unique
class ErrorCategory(Enum):
    INVALID_OPTION = auto()
    UNKNOWN_OPTION = auto()
    UNKNOWN_NODE_TYPE = auto()
    UNKNOWN_HELPER = auto()
    INVALID_DOCUMENT = auto()
    INTERNAL_ERROR = auto()


@dataclass(frozen=True, eq=False)
class ErrorCode:
    """A stable ``PREFIX-NNNN`` identifier; compares equal to its string form."""

    prefix: str
    number: int
    category: ErrorCategory
    phase: ErrorPhase
    default_severity: ErrorSeverity = ErrorSeverity.FATAL

    @property
    def code(self) -> str:
        return f"{self.prefix}-{self.number:04d}"

    def __str__(self) -> str:
        return self.code

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ErrorCode):
            return self.code == other.code
        if isinstance(other, str):
            return self.code == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.code)


class CodegenErrorCodes:
    """Every code the generator can raise."""

    INVALID_OPTION = ErrorCode("VCG", 1001, ErrorCategory.INVALID_OPTION, ErrorPhase.OPTIONS)
    UNKNOWN_OPTION = ErrorCode("VCG", 1002, ErrorCategory.UNKNOWN_OPTION, ErrorPhase.OPTIONS)

    UNKNOWN_NODE_TYPE = ErrorCode("VCG", 4001, ErrorCategory.UNKNOWN_NODE_TYPE, ErrorPhase.CODEGEN)
    UNKNOWN_HELPER = ErrorCode("VCG", 4002, ErrorCategory.UNKNOWN_HELPER, ErrorPhase.CODEGEN)
    INVALID_DOCUMENT = ErrorCode("VCG", 4003, ErrorCategory.INVALID_DOCUMENT, ErrorPhase.LOADING)

    INTERNAL_ERROR = ErrorCode("VCG", 9001, ErrorCategory.INTERNAL_ERROR, ErrorPhase.INTERNAL)


# ═══════════════════════════════════════════════════════════════════════════════
# LOCATIONS AND MESSAGES
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class SourceSpan:
    """Template position an error points at.

    The generator never reads template source; the span is copied from the
    ``loc`` the parser recorded on the offending node.  Line 0 means unknown.
    """

    line: int = 0
    column: int = 0
    end_line: int = 0
    end_column: int = 0
    source: str = ""

    @classmethod
    def from_node(cls, node: Any) -> "SourceSpan":
        loc = getattr(node, "loc", None)
        if loc is None:
            return cls()
        start, end = loc.start, loc.end
        return cls(
            line=start.line,
            column=start.column,
            end_line=end.line,
            end_column=end.column,
            source=loc.source,
        )

    def __str__(self) -> str:
        if self.line <= 0:
            return "<unknown location>"
        if self.column <= 0:
            return str(self.line)
        return f"{self.line}:{self.column}"


@dataclass
class ErrorNote:
    message: str
    label: str = "note"

    def __str__(self) -> str:
        return f"{self.label}: {self.message}" if self.label else self.message


@dataclass
class ErrorMessage:
    """Structured payload of a :class:`CodegenError`."""

    code: ErrorCode
    message: str
    span: SourceSpan = field(default_factory=SourceSpan)
    severity: Optional[ErrorSeverity] = None
    notes: List[ErrorNote] = field(default_factory=list)
    hint: str = ""

    def __post_init__(self) -> None:
        if self.severity is None:
            self.severity = self.code.default_severity

    def to_gcc_format(self) -> str:
        """``<line>:<col>: <severity>: <message> [<code>]`` plus notes / hint."""
        out = [f"{self.span}: {self.severity.value}: {self.message} [{self.code}]"]
        out.extend(str(note) for note in self.notes)
        if self.hint:
            out.append(f"hint: {self.hint}")
        return "\n".join(out)

    def to_json(self) -> Dict[str, Any]:
        span = self.span
        return {
            "code": self.code.code,
            "category": self.code.category.name,
            "phase": self.code.phase.value,
            "severity": self.severity.value,
            "message": self.message,
            "location": {
                "line": span.line,
                "column": span.column,
                "end_line": span.end_line,
                "end_column": span.end_column,
            },
            "notes": [{"label": n.label, "message": n.message} for n in self.notes],
            "hint": self.hint,
        }


# ═══════════════════════════════════════════════════════════════════════════════
# EXCEPTIONS
# ═══════════════════════════════════════════════════════════════════════════════

class CodegenError(Exception):
    """Base class of everything the generator raises on purpose."""

    def __init__(
        self,
        message: str,
        code: Optional[ErrorCode] = None,
        span: Optional[SourceSpan] = None,
        severity: Optional[ErrorSeverity] = None,
        cause: Optional[Exception] = None,
        notes: Optional[List[ErrorNote]] = None,
        hint: str = "",
    ) -> None:
        super().__init__(message)
        self.error_message = ErrorMessage(
            code=code or CodegenErrorCodes.INTERNAL_ERROR,
            message=message,
            span=span or SourceSpan(),
            severity=severity,
            notes=list(notes or ()),
            hint=hint,
        )
        self.cause = cause

    @property
    def code(self) -> ErrorCode:
        return self.error_message.code

    @property
    def span(self) -> SourceSpan:
        return self.error_message.span

    @property
    def severity(self) -> ErrorSeverity:
        return self.error_message.severity

    def add_note(self, message: str, label: str = "note") -> "CodegenError":
        self.error_message.notes.append(ErrorNote(message, label))
        return self

    def with_hint(self, hint: str) -> "CodegenError":
        self.error_message.hint = hint
        return self

    def to_gcc_format(self) -> str:
        return self.error_message.to_gcc_format()

    def __str__(self) -> str:
        return self.to_gcc_format()


class MalformedIRError(CodegenError):
    """The tree handed over by the transform stage breaks its contract."""


class UnknownNodeTypeError(MalformedIRError):
    def __init__(self, node: Any, span: Optional[SourceSpan] = None) -> None:
        node_type = getattr(node, "type", None)
        type_name = getattr(node_type, "name", None) or type(node).__name__
        super().__init__(
            f"unhandled codegen node type: {type_name}",
            code=CodegenErrorCodes.UNKNOWN_NODE_TYPE,
            span=span or SourceSpan.from_node(node),
            hint="the transform stage produced a node the generator cannot print",
        )
        self.node = node
        self.node_type = type_name


class UnknownHelperError(MalformedIRError):
    def __init__(self, helper: Any) -> None:
        super().__init__(
            f"runtime helper {helper!r} has no registered name",
            code=CodegenErrorCodes.UNKNOWN_HELPER,
            hint="register it with vcodegen.runtime_helpers.register_runtime_helpers()",
        )
        self.helper = helper


class IRLoadError(MalformedIRError):
    """A serialized IR document cannot be turned into nodes."""

    def __init__(self, message: str, cause: Optional[Exception] = None) -> None:
        super().__init__(message, code=CodegenErrorCodes.INVALID_DOCUMENT, cause=cause)


class InvalidOptionsError(CodegenError):
    def __init__(
        self,
        message: str,
        code: Optional[ErrorCode] = None,
        hint: str = "",
    ) -> None:
        super().__init__(message, code=code or CodegenErrorCodes.INVALID_OPTION, hint=hint)
