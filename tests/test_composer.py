"""Tests for writing snapshots to a single PDF."""

import pikepdf

from conftest import make_pdf_bytes

from pdfintake.services.composer import SnapshotComposer, compose_snapshot
from pdfintake.services.publication import Snapshot, SnapshotFile


def _snapshot():
    return Snapshot(
        files=(
            SnapshotFile(name="a.pdf", data=make_pdf_bytes(1, (100, 200)), selected_pages=(0,)),
            SnapshotFile(name="b.pdf", data=make_pdf_bytes(3, (300, 400)), selected_pages=(2, 0)),
        )
    )


class TestComposeSnapshot:
    def test_writes_selected_pages_in_order(self, tmp_path):
        out = tmp_path / "out" / "merged.pdf"
        result = compose_snapshot(_snapshot(), out)
        assert result.success
        assert result.pages_written == 3
        assert result.output_path == str(out)

        with pikepdf.open(out) as pdf:
            assert len(pdf.pages) == 3
            widths = [float(p.mediabox[2]) for p in pdf.pages]
            assert widths == [100, 300, 300]

    def test_empty_snapshot(self, tmp_path):
        result = compose_snapshot(Snapshot(), tmp_path / "out.pdf")
        assert not result.success
        assert result.message == "No files to compose."
        assert not (tmp_path / "out.pdf").exists()

    def test_damaged_data(self, tmp_path):
        snap = Snapshot(files=(SnapshotFile(name="x.pdf", data=b"garbage", selected_pages=(0,)),))
        result = compose_snapshot(snap, tmp_path / "out.pdf")
        assert not result.success
        assert result.message


class TestSnapshotComposer:
    def test_keeps_latest_snapshot(self, tmp_path):
        composer = SnapshotComposer()
        composer(Snapshot())
        composer(_snapshot())
        assert len(composer.latest.files) == 2
        assert composer.write(tmp_path / "merged.pdf").success
