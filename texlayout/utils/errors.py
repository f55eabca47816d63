"""
Centralized error handling for texlayout.

Provides a hierarchy of custom exceptions with user-friendly messages,
suggestions for fixes, and error recovery hints.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, List


class ErrorSeverity(Enum):
    """Severity levels for errors."""

    INFO = auto()  # Informational, layout may have partially succeeded
    WARNING = auto()  # Non-fatal, a best-effort layout was produced
    ERROR = auto()  # Layout failed for this formula
    CRITICAL = auto()  # Unrecoverable error


@dataclass
class ErrorContext:
    """
    Rich context for error reporting.

    Provides user-friendly information beyond the raw exception.
    """

    title: str  # Short title for a status line
    message: str  # User-friendly message
    technical_details: Optional[str]  # Debug info
    suggestions: List[str]  # Actionable suggestions
    severity: ErrorSeverity
    recoverable: bool = True  # Can the caller retry?

    @classmethod
    def from_exception(cls, exc: Exception, context: str = "") -> "ErrorContext":
        """Create ErrorContext from any exception."""
        if isinstance(exc, TexLayoutError):
            return exc.to_context()

        exc_type = type(exc).__name__
        exc_msg = str(exc)

        if isinstance(exc, (KeyError, LookupError)):
            return cls(
                title="Lookup Error",
                message=f"A required table entry is missing: {exc_msg}",
                technical_details=f"{exc_type}: {exc_msg}\nContext: {context}",
                suggestions=["Check the font metrics and symbol tables"],
                severity=ErrorSeverity.ERROR,
            )

        return cls(
            title="Error",
            message=f"An unexpected error occurred: {exc_msg}",
            technical_details=f"{exc_type}: {exc_msg}\nContext: {context}",
            suggestions=["Try again with a simpler formula"],
            severity=ErrorSeverity.ERROR,
        )


class TexLayoutError(Exception):
    """
    Base exception for all texlayout errors.

    Subclasses provide rich error context for user-friendly reporting.
    """

    default_title = "Error"
    default_suggestions: List[str] = []
    default_severity = ErrorSeverity.ERROR

    def __init__(
        self,
        message: str,
        *,
        suggestions: Optional[List[str]] = None,
        technical_details: Optional[str] = None,
        severity: Optional[ErrorSeverity] = None,
    ):
        super().__init__(message)
        self.user_message = message
        self.suggestions = suggestions or self.default_suggestions.copy()
        self.technical_details = technical_details
        self.severity = severity or self.default_severity

    def to_context(self) -> ErrorContext:
        """Convert to ErrorContext for display."""
        return ErrorContext(
            title=self.default_title,
            message=self.user_message,
            technical_details=self.technical_details,
            suggestions=self.suggestions,
            severity=self.severity,
            recoverable=self.severity != ErrorSeverity.CRITICAL,
        )


# === Parameter Errors ===


class InvalidParameterError(TexLayoutError):
    """Raised when an atom or configuration value is not supported."""

    default_title = "Invalid Parameter"
    default_suggestions = [
        "Check the value against the documented options",
    ]


class InvalidAtomTypeError(InvalidParameterError):
    """Raised when an atom type name is unknown."""

    default_title = "Invalid Atom Type"

    def __init__(self, name: str):
        super().__init__(
            f"'{name}' is not a valid atom type",
            suggestions=[
                "Use one of: ord, op, bin, rel, open, close, punct, inner, acc",
            ],
        )
        self.name = name


class InvalidUnitError(InvalidParameterError):
    """Raised when a dimension uses an unknown unit."""

    default_title = "Invalid Unit"

    def __init__(self, text: str):
        super().__init__(
            f"Invalid dimension: '{text}'",
            suggestions=[
                "Use a number followed by em, ex, pt, px, pc, mu, cm, mm, in or bp",
            ],
        )
        self.text = text


# === Symbol Errors ===


class SymbolNotFoundError(TexLayoutError):
    """Raised when a delimiter, accent or symbol name is unknown."""

    default_title = "Symbol Not Found"
    default_suggestions = [
        "Check the spelling of the symbol name",
        "Register the symbol in the symbol table",
    ]

    def __init__(self, name: str, **kwargs):
        message = kwargs.pop("message", None) or f"Unknown symbol: '{name}'"
        super().__init__(message, **kwargs)
        self.name = name


class InvalidSymbolTypeError(SymbolNotFoundError):
    """Raised when a symbol exists but has the wrong type (e.g. a non-accent used as accent)."""

    default_title = "Invalid Symbol Type"
    default_suggestions = [
        "Use a symbol defined with type 'acc' as accent",
    ]


class InvalidFormulaError(SymbolNotFoundError):
    """Raised when a formula used as a symbol does not hold exactly one symbol."""

    default_title = "Invalid Formula"
    default_suggestions = [
        "Pass a formula whose root is a single symbol",
    ]


# === Formula Errors ===


class FormulaNotFoundError(TexLayoutError):
    """Raised when a predefined formula name is not registered."""

    default_title = "Formula Not Found"
    default_suggestions = [
        "Register the formula with LayoutContext.register_formula()",
    ]

    def __init__(self, name: str):
        super().__init__(f"No predefined formula named '{name}'")
        self.name = name


# === Parser Errors ===


class ParseError(TexLayoutError):
    """Raised when LaTeX input text is malformed."""

    default_title = "Parse Error"
    default_suggestions = [
        "Check for missing or extra braces { }",
        "Verify LaTeX commands are spelled correctly",
        "Parse in partial mode to get a best-effort layout",
    ]

    def __init__(
        self,
        message: str,
        *,
        latex: str = "",
        suggestion: Optional[str] = None,
        **kwargs,
    ):
        # Add specific suggestion to front of list if provided
        suggestions = kwargs.pop("suggestions", None) or self.default_suggestions.copy()
        if suggestion:
            suggestions.insert(0, suggestion)

        super().__init__(message, suggestions=suggestions, **kwargs)
        self.latex = latex


# === Utility functions ===


def format_error_for_user(exc: Exception, context: str = "") -> str:
    """
    Format an exception into a user-friendly string.

    Returns a single string suitable for a status line or stderr.
    """
    ctx = ErrorContext.from_exception(exc, context)

    result = ctx.message
    if ctx.suggestions:
        result += f" Try: {ctx.suggestions[0]}"

    return result
