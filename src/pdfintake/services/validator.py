"""
PdfIntake - Document Validator

Inspects one submitted file: checks its declared type, reads its bytes,
parses page count and first-page geometry with pikepdf, and classifies it
as single-page, multi-page or invalid.
"""

import asyncio
import io
import logging
import re
from dataclasses import dataclass, field
from enum import Enum, auto

import pikepdf

from pdfintake.config import (
    DEFAULT_ACCEPTED_MIME_TYPE,
    DEFAULT_TYPE_LABEL,
    SINGLE_PAGE_SELECTION,
)
from pdfintake.services.intake_model import SourceFile
from pdfintake.utils.config_manager import ConfigManager
from pdfintake.utils.exceptions import (
    EmptyDocumentError,
    IntakeError,
    InvalidGeometryError,
    ParseFailureError,
    ReadFailureError,
    WrongTypeError,
)

logger = logging.getLogger(__name__)


class Classification(Enum):
    """Outcome class of a validation."""

    SINGLE_PAGE = auto()
    MULTI_PAGE = auto()
    INVALID = auto()


@dataclass(frozen=True)
class DocumentInfo:
    """Page count and first-page size of a parsed document, in PDF units."""

    total_pages: int
    width: float
    height: float


@dataclass(frozen=True)
class ValidationResult:
    """Result of validating one file.

    A MULTI_PAGE result is still pending: the caller must obtain a page
    selection before the file can become a successful item.
    """

    classification: Classification
    data: bytes = field(default=b"", repr=False)
    total_pages: int | None = None
    selected_pages: tuple[int, ...] = ()
    error: IntakeError | None = None

    @property
    def is_valid(self) -> bool:
        return self.classification is not Classification.INVALID

    @property
    def needs_selection(self) -> bool:
        return self.classification is Classification.MULTI_PAGE

    @property
    def error_message(self) -> str | None:
        return self.error.message if self.error else None


# qpdf prefixes messages with a description of the input, which for
# in-memory content is the repr of the stream object
_STREAM_PREFIX = re.compile(r"^\s*(?:stream\s+)?<[^>]*>(?:\s*\([^)]*\))?:\s*")

# Parent links followed when looking for an inherited MediaBox
_MAX_TREE_DEPTH = 64


def _parser_message(error: Exception) -> str | None:
    """Return the parser's message without the input description."""
    text = _STREAM_PREFIX.sub("", str(error)).strip()
    return text or None


def _media_box(page: pikepdf.Page):
    """Find the MediaBox of a page, following inheritance through /Parent.

    Returns None when no box is set anywhere up the page tree.
    """
    node = page.obj
    for _depth in range(_MAX_TREE_DEPTH):
        if node is None:
            break
        box = node.get("/MediaBox")
        if box is not None:
            return box
        node = node.get("/Parent")
    return None


def _page_size(page: pikepdf.Page) -> tuple[float | None, float | None]:
    """Return the width and height of a page's media box.

    Missing or malformed boxes give ``(None, None)``.
    """
    box = _media_box(page)
    if not isinstance(box, pikepdf.Array) or len(box) != 4:
        return None, None
    try:
        x0, y0, x1, y1 = (float(v) for v in box)
    except (TypeError, ValueError, pikepdf.PdfError):
        return None, None
    return abs(x1 - x0), abs(y1 - y0)


def inspect_pdf_bytes(file_name: str, data: bytes, type_label: str = DEFAULT_TYPE_LABEL) -> DocumentInfo:
    """Parse PDF content and check it has at least one usable page.

    Args:
        file_name: Name used in error messages
        data: Raw PDF bytes
        type_label: Document type shown to the user

    Returns:
        DocumentInfo for the document

    Raises:
        ParseFailureError: If pikepdf cannot load the content
        EmptyDocumentError: If the document has no pages
        InvalidGeometryError: If the first page has no positive width and height
    """
    try:
        pdf = pikepdf.open(io.BytesIO(data))
    except pikepdf.PasswordError as e:
        raise ParseFailureError(file_name, "This file is password-protected") from e
    except (pikepdf.PdfError, ValueError, RuntimeError) as e:
        raise ParseFailureError(file_name, _parser_message(e)) from e

    with pdf:
        total_pages = len(pdf.pages)
        if total_pages == 0:
            raise EmptyDocumentError(file_name, type_label)

        width, height = _page_size(pdf.pages[0])
        if width is None or height is None or width <= 0 or height <= 0:
            raise InvalidGeometryError(file_name, width, height, total_pages=total_pages)

    return DocumentInfo(total_pages=total_pages, width=width, height=height)


class DocumentValidator:
    """Validates submitted files one at a time.

    The validator has no user-facing side effects; the caller decides how
    to report each result.
    """

    def __init__(
        self,
        accepted_mime_type: str = DEFAULT_ACCEPTED_MIME_TYPE,
        type_label: str = DEFAULT_TYPE_LABEL,
    ) -> None:
        self.accepted_mime_type = accepted_mime_type
        self.type_label = type_label

    @classmethod
    def from_config(cls, config: ConfigManager) -> "DocumentValidator":
        return cls(
            accepted_mime_type=config.get("intake.accepted_mime_type", DEFAULT_ACCEPTED_MIME_TYPE),
            type_label=config.get("intake.type_label", DEFAULT_TYPE_LABEL),
        )

    def check_type(self, source: SourceFile) -> None:
        """Reject files whose declared type is not the accepted one."""
        if source.mime_type != self.accepted_mime_type:
            raise WrongTypeError(source.name, self.type_label, source.mime_type)

    async def read(self, source: SourceFile) -> bytes:
        """Read the content of a file, mapping any reader failure to ReadFailureError."""
        try:
            return await source.read()
        except Exception as e:
            raise ReadFailureError(source.name, str(e) or type(e).__name__) from e

    async def validate(self, source: SourceFile) -> ValidationResult:
        """Validate one file.

        Args:
            source: The submitted file

        Returns:
            ValidationResult; failures are returned, never raised
        """
        data = b""
        try:
            self.check_type(source)
            data = await self.read(source)
            info = await asyncio.to_thread(inspect_pdf_bytes, source.name, data, self.type_label)
        except IntakeError as e:
            logger.info("Rejected %s (%s): %s", source.name, e.kind.name, e)
            return ValidationResult(
                classification=Classification.INVALID,
                data=data,
                total_pages=getattr(e, "total_pages", None),
                error=e,
            )

        if info.total_pages == 1:
            logger.debug("%s: single page %.0fx%.0f", source.name, info.width, info.height)
            return ValidationResult(
                classification=Classification.SINGLE_PAGE,
                data=data,
                total_pages=1,
                selected_pages=SINGLE_PAGE_SELECTION,
            )

        logger.debug("%s: %d pages, selection required", source.name, info.total_pages)
        return ValidationResult(
            classification=Classification.MULTI_PAGE,
            data=data,
            total_pages=info.total_pages,
        )
