"""Pytest configuration for pdfintake tests.

Provides in-memory PDF fixtures built with pikepdf and a scripted
selection surface standing in for the interactive page picker.
"""

import io

import pikepdf
import pytest

from pdfintake.services.intake_model import SourceFile

A4 = (595, 842)


def make_pdf_bytes(num_pages: int = 1, size: tuple[float, float] = A4) -> bytes:
    """Create a PDF with the given number of blank pages."""
    return make_pdf_with_media_box(num_pages, [0, 0, size[0], size[1]])


def make_pdf_with_media_box(num_pages: int, media_box: list | None) -> bytes:
    """Create a PDF whose pages carry ``media_box`` verbatim, or no box at all."""
    pdf = pikepdf.Pdf.new()
    for _ in range(num_pages):
        page_dict = pikepdf.Dictionary(Type=pikepdf.Name.Page)
        if media_box is not None:
            page_dict.MediaBox = pikepdf.Array(media_box)
        pdf.pages.append(pikepdf.Page(page_dict))
    buf = io.BytesIO()
    pdf.save(buf)
    pdf.close()
    return buf.getvalue()


def pdf_file(name: str, num_pages: int = 1, size: tuple[float, float] = A4) -> SourceFile:
    return SourceFile.from_bytes(name, make_pdf_bytes(num_pages, size))


def text_file(name: str = "c.txt") -> SourceFile:
    return SourceFile.from_bytes(name, b"just some notes", mime_type="text/plain")


def corrupt_file(name: str = "broken.pdf") -> SourceFile:
    return SourceFile.from_bytes(name, b"This is not a PDF file at all")


def unreadable_file(name: str = "gone.pdf") -> SourceFile:
    def reader() -> bytes:
        raise OSError("Input/output error")

    return SourceFile(name=name, mime_type="application/pdf", size=100, reader=reader)


class ScriptedSurface:
    """Selection surface that answers requests from a list of scripted answers.

    Each answer is a list of zero-based pages to commit, or None to cancel.
    """

    def __init__(self, answers=None):
        self.answers = list(answers or [])
        self.requests = []

    def __call__(self, request):
        self.requests.append(request)
        answer = self.answers.pop(0) if self.answers else None
        if answer is None:
            request.cancel()
        else:
            request.commit(answer)


@pytest.fixture
def surface():
    return ScriptedSurface()
