"""Exceptions for component sub-templates.

Exception Hierarchy:
SubtemplateError (base)
├── TemplateNotFoundError     # Sub-template file missing at bind time
├── MissingTemplateError      # Component has no main template and no call()
└── TemplateSyntaxError       # Template source failed to compile
    ├── DuplicateParameterError   # Same name declared twice in locals
    └── InvalidParameterError     # Declared name cannot be a keyword argument

Argument errors raised when calling a generated ``call_<name>`` entry point
are plain ``TypeError`` from Python's own argument binding, and undefined
names inside a template surface as Mako's ``NameError`` at render time.
Neither is wrapped here.

Example:
    ```
    S-PAR-001: Duplicate parameter 'title' in locals declaration
      --> components/card/header.html.mako:1
       |
      1 | <%# locals: (title:, title:) -%>
       |
    ```

"""

from __future__ import annotations

from enum import Enum
from pathlib import Path


class ErrorCode(Enum):
    """Searchable error codes for sub-template errors.

    Format: S-{CATEGORY}-{NUMBER}
    Categories: TPL (template files), PAR (declared parameters),
    CMP (component compilation)
    """

    TEMPLATE_NOT_FOUND = "S-TPL-001"
    SYNTAX_ERROR = "S-TPL-002"

    DUPLICATE_PARAMETER = "S-PAR-001"
    INVALID_PARAMETER = "S-PAR-002"

    MISSING_TEMPLATE = "S-CMP-001"

    @property
    def category(self) -> str:
        """Error category (e.g., 'template', 'parameters', 'component')."""
        prefix = self.value.split("-")[1]
        return {
            "TPL": "template",
            "PAR": "parameters",
            "CMP": "component",
        }.get(prefix, "unknown")


class SubtemplateError(Exception):
    """Base exception for all sub-template errors.

    Catch this to handle any failure raised while discovering, compiling or
    binding sub-templates:

        >>> try:
        ...     MyComponent.compile()
        ... except SubtemplateError as e:
        ...     log.error(e.format_compact())

    Attributes:
        code: Optional ErrorCode for searchable error identification.
    """

    code: ErrorCode | None = None

    def format_compact(self) -> str:
        """Format error as a one-block summary prefixed with its code."""
        header = str(self)
        if self.code and self.code.value not in header:
            header = f"{self.code.value}: {header}"
        return header


class TemplateNotFoundError(SubtemplateError):
    """Sub-template file does not exist when it is bound.

    Indicates a packaging or programming error upstream (the file vanished
    between discovery and binding, or a SubTemplate was built by hand with a
    wrong path). Never retried.

    Attributes:
        path: Resolved path that was looked up.
    """

    code: ErrorCode | None = ErrorCode.TEMPLATE_NOT_FOUND

    def __init__(self, message: str, path: str | Path | None = None):
        self.path = Path(path) if path is not None else None
        super().__init__(message)


class MissingTemplateError(SubtemplateError):
    """Component defines neither a main template file nor a ``call()`` method."""

    code: ErrorCode | None = ErrorCode.MISSING_TEMPLATE


class TemplateSyntaxError(SubtemplateError):
    """Template source could not be compiled.

    When ``source`` and ``lineno`` are provided, the message includes a
    snippet of the offending line.
    """

    code: ErrorCode | None = ErrorCode.SYNTAX_ERROR

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        filename: str | None = None,
        source: str | None = None,
    ):
        self.message = message
        self.lineno = lineno
        self.filename = filename
        self.source = source
        super().__init__(self._format_message())

    @property
    def location(self) -> str:
        location = self.filename or "<template>"
        if self.lineno:
            location += f":{self.lineno}"
        return location

    def _format_message(self) -> str:
        header = f"{self.message}\n  --> {self.location}"
        if self.source and self.lineno:
            lines = self.source.splitlines()
            if 0 < self.lineno <= len(lines):
                return header + f"\n   |\n{self.lineno:>3} | {lines[self.lineno - 1]}\n   |"
        return header


class DuplicateParameterError(TemplateSyntaxError):
    """A locals declaration names the same parameter more than once."""

    code: ErrorCode | None = ErrorCode.DUPLICATE_PARAMETER


class InvalidParameterError(TemplateSyntaxError):
    """A declared parameter cannot become a keyword argument.

    Raised for Python keywords, ``self``, names that are not identifiers, and
    names the template runtime reserves for itself.
    """

    code: ErrorCode | None = ErrorCode.INVALID_PARAMETER
