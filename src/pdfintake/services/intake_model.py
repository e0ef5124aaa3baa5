"""
PdfIntake - Intake Model

Data models for submitted files and the intake items tracked by the worklist.
"""

from __future__ import annotations

import asyncio
import mimetypes
import os
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path

from pdfintake.utils.exceptions import PageSelectionError

FALLBACK_MIME_TYPE = "application/octet-stream"


class ItemStatus(str, Enum):
    """Validation state of an intake item."""

    PENDING = "pending"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class SourceHandle:
    """Read-only reference to the original file.

    Attributes:
        name: File name as submitted (no directory part)
        size: Byte length reported for the file
        mime_type: Declared MIME type
    """

    name: str
    size: int
    mime_type: str


@dataclass
class SourceFile:
    """A raw file handed to the intake pipeline.

    Both the drop path and the picker path produce these. Content is only
    read through :meth:`read`, which runs the reader off the event loop.
    """

    name: str
    mime_type: str
    size: int
    reader: Callable[[], bytes] = field(repr=False)

    @property
    def handle(self) -> SourceHandle:
        return SourceHandle(name=self.name, size=self.size, mime_type=self.mime_type)

    async def read(self) -> bytes:
        """Read the whole content of the file."""
        return await asyncio.to_thread(self.reader)

    @classmethod
    def from_path(cls, path: str | Path, mime_type: str | None = None) -> SourceFile:
        """Create a SourceFile for a file on disk.

        The MIME type is guessed from the file name when not given, the way
        a browser or file manager declares it.
        """
        path = Path(path)
        if mime_type is None:
            mime_type = mimetypes.guess_type(path.name)[0] or FALLBACK_MIME_TYPE
        try:
            size = os.path.getsize(path)
        except OSError:
            size = 0
        return cls(name=path.name, mime_type=mime_type, size=size, reader=path.read_bytes)

    @classmethod
    def from_bytes(cls, name: str, data: bytes, mime_type: str = "application/pdf") -> SourceFile:
        """Create a SourceFile backed by in-memory content."""
        return cls(name=name, mime_type=mime_type, size=len(data), reader=lambda: data)


def validate_page_selection(pages: Iterable[int], total_pages: int | None) -> tuple[int, ...]:
    """Check a page selection and return it as a tuple.

    Args:
        pages: Zero-based page indices, in the order they should be used
        total_pages: Page count of the document

    Returns:
        The selection as an ordered tuple

    Raises:
        PageSelectionError: If the selection is empty, repeats a page,
            or has an index outside ``[0, total_pages)``
    """
    selection = tuple(pages)
    as_list = list(selection)

    if not selection:
        raise PageSelectionError(as_list, total_pages, "no pages selected")
    if any(isinstance(p, bool) or not isinstance(p, int) for p in selection):
        raise PageSelectionError(as_list, total_pages, "page indices must be integers")
    if len(set(selection)) != len(selection):
        raise PageSelectionError(as_list, total_pages, "duplicate pages")
    if total_pages is None or any(p < 0 or p >= total_pages for p in selection):
        raise PageSelectionError(as_list, total_pages, "page out of range")

    return selection


@dataclass(frozen=True)
class IntakeItem:
    """One submitted document and its validation/selection state.

    Items are immutable; state changes produce a new item with the same id.

    Attributes:
        id: Identity assigned at submission, stable for the item's lifetime
        source: Reference to the original file
        status: pending, success or error
        data: Raw byte content read at submission
        error_message: Cause of the failure (error items only)
        total_pages: Page count, None until known
        selected_pages: Zero-based pages chosen for inclusion (success items only)
    """

    id: str
    source: SourceHandle
    status: ItemStatus = ItemStatus.PENDING
    data: bytes = field(default=b"", repr=False)
    error_message: str | None = None
    total_pages: int | None = None
    selected_pages: tuple[int, ...] = ()

    def __post_init__(self) -> None:
        if self.status is ItemStatus.SUCCESS:
            validate_page_selection(self.selected_pages, self.total_pages)
        elif self.status is ItemStatus.ERROR:
            if not self.error_message:
                raise ValueError("error items need an error message")
            if self.selected_pages:
                object.__setattr__(self, "selected_pages", ())

    @property
    def name(self) -> str:
        return self.source.name

    @property
    def is_reorderable(self) -> bool:
        """Only successful items take part in drag reordering."""
        return self.status is ItemStatus.SUCCESS

    @classmethod
    def pending(cls, item_id: str, source: SourceHandle) -> IntakeItem:
        return cls(id=item_id, source=source)

    def succeeded(
        self, data: bytes, total_pages: int, selected_pages: Iterable[int]
    ) -> IntakeItem:
        """Return this item resolved as successful."""
        return replace(
            self,
            status=ItemStatus.SUCCESS,
            data=data,
            error_message=None,
            total_pages=total_pages,
            selected_pages=tuple(selected_pages),
        )

    def failed(
        self, message: str, data: bytes = b"", total_pages: int | None = None
    ) -> IntakeItem:
        """Return this item resolved as failed."""
        return replace(
            self,
            status=ItemStatus.ERROR,
            data=data,
            error_message=message,
            total_pages=total_pages,
            selected_pages=(),
        )

    def with_selected_pages(self, pages: Iterable[int]) -> IntakeItem:
        return replace(self, selected_pages=tuple(pages))

    def to_dict(self) -> dict:
        """Convert to a dictionary without the byte content."""
        return {
            "id": self.id,
            "name": self.source.name,
            "size": self.source.size,
            "mime_type": self.source.mime_type,
            "status": self.status.value,
            "error_message": self.error_message,
            "total_pages": self.total_pages,
            "selected_pages": list(self.selected_pages),
        }
