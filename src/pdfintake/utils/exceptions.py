"""
PdfIntake - Custom Exceptions Module

This module defines custom exception classes for the intake pipeline:
document validation failures and worklist contract violations.
"""

from enum import Enum, auto


class FailureKind(Enum):
    """Classification of a document validation failure."""

    WRONG_TYPE = auto()
    READ_FAILURE = auto()
    PARSE_FAILURE = auto()
    EMPTY_DOCUMENT = auto()
    INVALID_GEOMETRY = auto()


class PdfIntakeError(Exception):
    """Base exception for all PdfIntake errors.

    All custom exceptions should inherit from this class to allow
    catching any PdfIntake-specific error.
    """

    def __init__(self, message: str, details: str | None = None) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error message
            details: Optional technical details for debugging
        """
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} ({self.details})"
        return self.message


# ---------------------------------------------------------------------------
# Validation failures
# ---------------------------------------------------------------------------


class IntakeError(PdfIntakeError):
    """Raised when a submitted document fails validation.

    ``message`` is what the user sees; ``kind`` classifies the failure.
    """

    kind: FailureKind

    def __init__(self, file_name: str, message: str, details: str | None = None) -> None:
        self.file_name = file_name
        super().__init__(message, details=details)


class WrongTypeError(IntakeError):
    """Raised when the declared type of a file is not the accepted type."""

    kind = FailureKind.WRONG_TYPE

    def __init__(self, file_name: str, type_label: str, declared_type: str = "") -> None:
        self.type_label = type_label
        self.declared_type = declared_type
        super().__init__(
            file_name,
            f"{file_name} is not a {type_label} file",
            details=f"type={declared_type or 'unknown'}",
        )


class ReadFailureError(IntakeError):
    """Raised when the content of a file cannot be read."""

    kind = FailureKind.READ_FAILURE

    def __init__(self, file_name: str, reason: str | None = None) -> None:
        self.reason = reason
        super().__init__(file_name, "Failed to read file", details=reason)


class ParseFailureError(IntakeError):
    """Raised when the byte content is not a loadable document."""

    kind = FailureKind.PARSE_FAILURE

    def __init__(self, file_name: str, reason: str | None = None) -> None:
        self.reason = reason
        super().__init__(file_name, reason or "Invalid or corrupted file")


class EmptyDocumentError(IntakeError):
    """Raised when a document has no pages."""

    kind = FailureKind.EMPTY_DOCUMENT

    def __init__(self, file_name: str, type_label: str) -> None:
        super().__init__(file_name, f"{type_label} has no pages")


class InvalidGeometryError(IntakeError):
    """Raised when the first page does not have a positive width and height."""

    kind = FailureKind.INVALID_GEOMETRY

    def __init__(
        self,
        file_name: str,
        width: float | None = None,
        height: float | None = None,
        total_pages: int | None = None,
    ) -> None:
        self.width = width
        self.height = height
        self.total_pages = total_pages
        super().__init__(
            file_name,
            "Invalid page dimensions",
            details=f"width={width}, height={height}",
        )


# ---------------------------------------------------------------------------
# Worklist contract violations
# ---------------------------------------------------------------------------


class WorklistError(PdfIntakeError):
    """Raised when a worklist operation violates its contract."""


class UnknownItemError(WorklistError):
    """Raised when no item with the given identity is in the worklist."""

    def __init__(self, item_id: str) -> None:
        self.item_id = item_id
        super().__init__(f"No item with id '{item_id}'")


class DuplicateItemError(WorklistError):
    """Raised when an identity is already present or was used before."""

    def __init__(self, item_id: str) -> None:
        self.item_id = item_id
        super().__init__(f"Item id '{item_id}' has already been used")


class ItemStateError(WorklistError):
    """Raised when an item is not in the state an operation requires."""

    def __init__(self, item_id: str, status: str, operation: str) -> None:
        self.item_id = item_id
        self.status = status
        self.operation = operation
        super().__init__(
            f"Cannot {operation} item '{item_id}' with status '{status}'",
        )


class PageSelectionError(WorklistError):
    """Raised when a page selection is empty, repeats a page, or is out of range."""

    def __init__(self, pages: list[int], total_pages: int | None, reason: str) -> None:
        self.pages = pages
        self.total_pages = total_pages
        self.reason = reason
        super().__init__(
            f"Invalid page selection: {reason}",
            details=f"pages={pages}, total_pages={total_pages}",
        )


# Exception hierarchy summary:
# PdfIntakeError (base)
# ├── IntakeError
# │   ├── WrongTypeError
# │   ├── ReadFailureError
# │   ├── ParseFailureError
# │   ├── EmptyDocumentError
# │   └── InvalidGeometryError
# └── WorklistError
#     ├── UnknownItemError
#     ├── DuplicateItemError
#     ├── ItemStateError
#     └── PageSelectionError
