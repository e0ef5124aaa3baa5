"""Tests for batch processing: validation, selection, storage and reporting."""

import pytest

from conftest import ScriptedSurface, corrupt_file, pdf_file, text_file, unreadable_file

from pdfintake.services.intake_model import ItemStatus
from pdfintake.services.notifications import NotificationCenter, NotificationKind
from pdfintake.services.orchestrator import BatchOrchestrator
from pdfintake.services.page_selection import PageSelectionCoordinator
from pdfintake.services.publication import PublicationBridge
from pdfintake.services.validator import DocumentValidator
from pdfintake.services.worklist import WorklistStore


class Harness:
    """An orchestrator with recorded snapshots, notifications and dialogs."""

    def __init__(self, answers=None, on_retry=None):
        self.surface = ScriptedSurface(answers)
        self.store = WorklistStore()
        self.bridge = PublicationBridge()
        self.notifications = NotificationCenter()
        self.snapshots, self.toasts, self.dialogs = [], [], []
        self.bridge.subscribe(self.snapshots.append)
        self.notifications.subscribe(self.toasts.append)
        self.notifications.subscribe_dialogs(self.dialogs.append)
        self.orchestrator = BatchOrchestrator(
            store=self.store,
            bridge=self.bridge,
            validator=DocumentValidator(),
            coordinator=PageSelectionCoordinator(self.surface),
            notifications=self.notifications,
            on_retry=on_retry,
        )

    async def submit(self, files):
        return await self.orchestrator.submit(files)

    def toast_messages(self, kind):
        return [t.message for t in self.toasts if t.kind is kind]


@pytest.fixture
def harness():
    return Harness()


class TestMixedBatch:
    @pytest.mark.asyncio
    async def test_mixed_batch_with_selection(self):
        h = Harness(answers=[[0, 2]])
        report = await h.submit([pdf_file("a.pdf", 1), pdf_file("b.pdf", 3), text_file("c.txt")])

        items = h.store.items()
        assert [i.name for i in items] == ["a.pdf", "b.pdf"]
        assert items[0].selected_pages == (0,)
        assert items[1].selected_pages == (0, 2)
        assert items[1].total_pages == 3

        assert len(h.snapshots) == 1
        snap = h.snapshots[0]
        assert [(f.name, f.selected_pages) for f in snap.files] == [
            ("a.pdf", (0,)),
            ("b.pdf", (0, 2)),
        ]

        assert h.toast_messages(NotificationKind.ERROR) == ["c.txt is not a PDF file"]
        assert len(h.dialogs) == 1
        assert h.dialogs[0].title == "Some files could not be loaded"
        assert h.dialogs[0].message == "2 file(s) added successfully. 1 file(s) failed to load."
        assert h.dialogs[0].failed_names == ("c.txt",)
        assert report.summary == h.dialogs[0].message

    @pytest.mark.asyncio
    async def test_all_failed(self, harness):
        report = await harness.submit([corrupt_file("broken.pdf")])

        assert len(harness.store) == 1
        item = harness.store.items()[0]
        assert item.status is ItemStatus.ERROR
        assert item.error_message == (
            "unable to find trailer dictionary while recovering damaged file"
        )

        assert len(harness.snapshots) == 1
        assert harness.snapshots[0].files == ()
        assert harness.dialogs[0].title == "Files could not be loaded"
        assert harness.dialogs[0].message == "All 1 file(s) failed to load."
        assert report.failure_count == 1
        assert harness.toast_messages(NotificationKind.ERROR) == [
            f"broken.pdf: {item.error_message}"
        ]

    @pytest.mark.asyncio
    async def test_wrong_type_only_publishes_nothing(self, harness):
        report = await harness.submit([text_file("c.txt")])
        assert len(harness.store) == 0
        assert harness.snapshots == []
        assert report.summary == "All 1 file(s) failed to load."

    @pytest.mark.asyncio
    async def test_retry_callback_reaches_dialog(self):
        calls = []
        h = Harness(on_retry=lambda: calls.append(1))
        await h.submit([corrupt_file()])
        h.dialogs[0].respond("retry")
        assert calls == [1]


class TestSuccessPaths:
    @pytest.mark.asyncio
    async def test_single_file_summary(self, harness):
        report = await harness.submit([pdf_file("a.pdf", 1)])
        assert report.summary == "File added successfully"
        assert harness.toast_messages(NotificationKind.SUCCESS) == ["File added successfully"]
        assert harness.dialogs == []

    @pytest.mark.asyncio
    async def test_plural_summary(self, harness):
        report = await harness.submit([pdf_file("a.pdf"), pdf_file("b.pdf")])
        assert report.summary == "2 files added successfully"

    @pytest.mark.asyncio
    async def test_single_page_never_asks(self, harness):
        await harness.submit([pdf_file("a.pdf", 1), pdf_file("b.pdf", 1)])
        assert harness.surface.requests == []

    @pytest.mark.asyncio
    async def test_append_after_existing_items(self, harness):
        await harness.submit([pdf_file("a.pdf")])
        await harness.submit([pdf_file("b.pdf"), pdf_file("c.pdf")])
        assert [i.name for i in harness.store.items()] == ["a.pdf", "b.pdf", "c.pdf"]
        assert len(harness.snapshots) == 2

    @pytest.mark.asyncio
    async def test_identities_are_unique(self, harness):
        await harness.submit([pdf_file("a.pdf"), pdf_file("a.pdf")])
        ids = harness.store.ids()
        assert len(set(ids)) == 2

    @pytest.mark.asyncio
    async def test_empty_batch(self, harness):
        report = await harness.submit([])
        assert report.submitted == 0
        assert harness.snapshots == []
        assert harness.toasts == []


class TestCancelAndErrors:
    @pytest.mark.asyncio
    async def test_cancelled_selection_skips_file(self):
        h = Harness(answers=[None])
        report = await h.submit([pdf_file("b.pdf", 3), pdf_file("a.pdf", 1)])
        assert [i.name for i in h.store.items()] == ["a.pdf"]
        assert report.skipped_names == ["b.pdf"]
        assert h.toast_messages(NotificationKind.INFO) == ["b.pdf was skipped"]
        assert report.summary == "File added successfully"

    @pytest.mark.asyncio
    async def test_only_cancelled_has_no_summary(self):
        h = Harness(answers=[None])
        report = await h.submit([pdf_file("b.pdf", 2)])
        assert report.summary is None
        assert h.snapshots == []
        assert h.dialogs == []

    @pytest.mark.asyncio
    async def test_zero_pages_becomes_error_item(self, harness):
        await harness.submit([pdf_file("blank.pdf", 0)])
        item = harness.store.items()[0]
        assert item.status is ItemStatus.ERROR
        assert item.error_message == "PDF has no pages"

    @pytest.mark.asyncio
    async def test_read_failure_becomes_error_item(self, harness):
        await harness.submit([unreadable_file("gone.pdf")])
        item = harness.store.items()[0]
        assert item.status is ItemStatus.ERROR
        assert item.error_message == "Failed to read file"

    @pytest.mark.asyncio
    async def test_every_file_is_accounted_for(self):
        h = Harness(answers=[None, [1]])
        files = [
            pdf_file("a.pdf"),
            text_file("c.txt"),
            pdf_file("b.pdf", 3),
            corrupt_file("d.pdf"),
            pdf_file("e.pdf", 2),
        ]
        report = await h.submit(files)
        assert report.submitted == 5
        assert report.success_count == 2
        assert report.failure_count == 2
        assert report.cancelled_count == 1
        assert report.success_count + report.failure_count + report.cancelled_count == 5
        assert [i.name for i in h.store.items()] == ["a.pdf", "d.pdf", "e.pdf"]
        assert h.store.get(h.store.ids()[2]).selected_pages == (1,)

    @pytest.mark.asyncio
    async def test_errors_are_notified_per_file(self, harness):
        await harness.submit([text_file("c.txt"), corrupt_file("d.pdf")])
        errors = harness.toast_messages(NotificationKind.ERROR)
        assert len(errors) == 2
        assert errors[0] == "c.txt is not a PDF file"
        assert errors[1].startswith("d.pdf: ")
