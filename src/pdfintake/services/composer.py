"""
PdfIntake - Snapshot Composer

Downstream consumer of worklist snapshots. Concatenates the selected pages
of every file, in snapshot order, into one PDF using pikepdf.
"""

import io
import logging
from dataclasses import dataclass
from pathlib import Path

import pikepdf

from pdfintake.services.publication import Snapshot
from pdfintake.utils.i18n import _

logger = logging.getLogger(__name__)


@dataclass
class ComposeResult:
    """Result of writing a snapshot to disk."""

    success: bool
    message: str = ""
    output_path: str = ""
    pages_written: int = 0


def _friendly_error(e: Exception) -> str:
    if isinstance(e, PermissionError):
        return _("Cannot write to this folder. Choose a different location.")
    if isinstance(e, pikepdf.PdfError):
        return _("A PDF in the worklist appears to be damaged: {error}").format(error=e)
    return str(e)


def compose_snapshot(snapshot: Snapshot, output_path: str | Path) -> ComposeResult:
    """Write the selected pages of a snapshot into a single PDF.

    Args:
        snapshot: Snapshot to write
        output_path: Path for the output PDF

    Returns:
        ComposeResult
    """
    if not snapshot.files:
        return ComposeResult(success=False, message=_("No files to compose."))

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    dst = pikepdf.Pdf.new()
    open_sources: list[pikepdf.Pdf] = []
    total_pages = 0

    try:
        for entry in snapshot.files:
            src = pikepdf.open(io.BytesIO(entry.data))
            open_sources.append(src)
            for index in entry.selected_pages:
                dst.pages.append(src.pages[index])
            total_pages += len(entry.selected_pages)
            logger.info("Added pages %s from %s", list(entry.selected_pages), entry.name)

        dst.save(str(output_path))
        logger.info("Composed PDF saved: %s (%d pages)", output_path, total_pages)
        return ComposeResult(
            success=True,
            message=f"Composed {len(snapshot.files)} files → {total_pages} pages",
            output_path=str(output_path),
            pages_written=total_pages,
        )
    except (OSError, pikepdf.PdfError, IndexError, ValueError) as e:
        logger.error("Compose failed: %s", e)
        return ComposeResult(success=False, message=_friendly_error(e))
    finally:
        for src in open_sources:
            src.close()
        dst.close()


class SnapshotComposer:
    """Keeps the latest snapshot it receives and writes it on demand."""

    def __init__(self) -> None:
        self.latest: Snapshot = Snapshot()

    def __call__(self, snapshot: Snapshot) -> None:
        self.latest = snapshot

    def write(self, output_path: str | Path) -> ComposeResult:
        return compose_snapshot(self.latest, output_path)
