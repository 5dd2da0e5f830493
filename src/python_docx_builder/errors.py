"""
Custom exception classes for python_docx_builder package.

Every fallible public operation raises a subclass of DocxError. Each error
records the operation that failed (``op``) and a machine-readable ``code`` so
callers can branch on the failure kind without parsing messages. When a
mid-layer operation re-raises a lower-layer failure it chains the original
with ``raise ... from`` so the cause stays inspectable.
"""

from typing import Any

# Error codes
VALIDATION_ERROR = "VALIDATION_ERROR"
NOT_FOUND = "NOT_FOUND"
INVALID_STATE = "INVALID_STATE"
IO_ERROR = "IO_ERROR"
XML_ERROR = "XML_ERROR"
UNSUPPORTED = "UNSUPPORTED"
INTERNAL_ERROR = "INTERNAL_ERROR"


class DocxError(Exception):
    """Base exception for all python_docx_builder errors.

    Attributes:
        op: Name of the operation that failed (e.g., "Paragraph.set_indent")
        code: One of the module-level error codes
        message: Human readable description of the failure
    """

    code = INTERNAL_ERROR

    def __init__(self, op: str, message: str) -> None:
        self.op = op
        self.message = message
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error as "op: message"."""
        if self.op:
            return f"{self.op}: {self.message}"
        return self.message


class ValidationError(DocxError, ValueError):
    """Raised when an argument is out of range, malformed or conflicting.

    Attributes:
        field: Name of the offending argument
        value: The rejected value
    """

    code = VALIDATION_ERROR

    def __init__(self, op: str, field: str, value: Any, message: str) -> None:
        self.field = field
        self.value = value
        super().__init__(op, message)

    def _format_message(self) -> str:
        """Format a message naming the field and the rejected value."""
        return f"{self.op}: invalid {self.field} {self.value!r}: {self.message}"


class NotFoundError(DocxError):
    """Raised when a lookup by ID or key finds nothing.

    Attributes:
        item: Description of what was looked up (e.g., "relationship 'rId9'")
    """

    code = NOT_FOUND

    def __init__(self, op: str, item: str) -> None:
        self.item = item
        super().__init__(op, f"{item} not found")


class InvalidStateError(DocxError):
    """Raised when an operation is attempted on an empty or inconsistent document."""

    code = INVALID_STATE


class DocxIOError(DocxError, OSError):
    """Raised when reading or writing bytes fails."""

    code = IO_ERROR


class XMLError(DocxError):
    """Raised when a package part cannot be parsed as XML."""

    code = XML_ERROR


class UnsupportedError(DocxError):
    """Raised for features that are intentionally not implemented.

    Attributes:
        feature: Short description of the unsupported feature
    """

    code = UNSUPPORTED

    def __init__(self, op: str, feature: str) -> None:
        self.feature = feature
        super().__init__(op, f"{feature} is not supported")


class InternalError(DocxError):
    """Raised when a lower layer fails in an unexpected way."""

    code = INTERNAL_ERROR


def wrap(error: DocxError, op: str) -> DocxError:
    """Re-issue a DocxError under an outer operation name.

    The returned error has the same class and payload as ``error`` but names
    ``op`` as the failing operation. Callers raise it with ``from error`` so
    the original remains available as ``__cause__``.

    Args:
        error: The lower-layer failure
        op: Name of the operation that is propagating it

    Returns:
        A new error of the same kind
    """
    wrapped = _copy_error(error)
    wrapped.op = op
    wrapped.message = f"{error.op}: {error.message}" if error.op else error.message
    wrapped.args = (wrapped._format_message(),)
    return wrapped


def _copy_error(error: DocxError) -> DocxError:
    if isinstance(error, ValidationError):
        return ValidationError(error.op, error.field, error.value, error.message)
    if isinstance(error, NotFoundError):
        return NotFoundError(error.op, error.item)
    if isinstance(error, UnsupportedError):
        return UnsupportedError(error.op, error.feature)
    return type(error)(error.op, error.message)
