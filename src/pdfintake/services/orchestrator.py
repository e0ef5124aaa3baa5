"""
PdfIntake - Batch Orchestrator

Takes a newly submitted set of files through validation and page
selection, one file after another, then appends the results to the
worklist, publishes once, and reports the outcome of the batch.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from pdfintake.services.intake_model import IntakeItem, ItemStatus, SourceFile
from pdfintake.services.notifications import FailureDialog, NotificationCenter
from pdfintake.services.page_selection import PageSelectionCoordinator, SelectionCancelled
from pdfintake.services.publication import PublicationBridge
from pdfintake.services.validator import DocumentValidator
from pdfintake.services.worklist import WorklistStore
from pdfintake.utils.exceptions import FailureKind, IntakeError
from pdfintake.utils.i18n import _
from pdfintake.utils.identity import IdentityGenerator
from pdfintake.utils.logger import logger


@dataclass
class BatchReport:
    """Outcome of one submit call.

    Attributes:
        submitted: Number of files in the batch
        added: Items appended to the worklist (success and error), in order
        failed_names: Files that failed validation, including rejected types
        skipped_names: Files whose page selection was cancelled
        summary: Aggregate message shown to the user, if any
    """

    submitted: int = 0
    added: list[IntakeItem] = field(default_factory=list)
    failed_names: list[str] = field(default_factory=list)
    skipped_names: list[str] = field(default_factory=list)
    summary: str | None = None

    @property
    def succeeded(self) -> list[IntakeItem]:
        return [item for item in self.added if item.status is ItemStatus.SUCCESS]

    @property
    def success_count(self) -> int:
        return len(self.succeeded)

    @property
    def failure_count(self) -> int:
        return len(self.failed_names)

    @property
    def cancelled_count(self) -> int:
        return len(self.skipped_names)


def _failure_text(error: IntakeError) -> str:
    """Per-file notification text; wrong-type messages already name the file."""
    if error.kind is FailureKind.WRONG_TYPE:
        return error.message
    return _("{name}: {message}").format(name=error.file_name, message=error.message)


class BatchOrchestrator:
    """Processes submitted batches for one worklist."""

    def __init__(
        self,
        store: WorklistStore,
        bridge: PublicationBridge,
        validator: DocumentValidator,
        coordinator: PageSelectionCoordinator,
        notifications: NotificationCenter,
        identities: IdentityGenerator | None = None,
        on_retry: Callable[[], None] | None = None,
    ) -> None:
        self.store = store
        self.bridge = bridge
        self.validator = validator
        self.coordinator = coordinator
        self.notifications = notifications
        self.identities = identities or IdentityGenerator()
        self.on_retry = on_retry

    async def submit(self, files: Iterable[SourceFile]) -> BatchReport:
        """Validate, select and store a batch of files.

        Files are handled in the order given. New items are appended after
        any existing ones once the whole batch has been processed, followed
        by a single snapshot publication.

        Args:
            files: Files from a drop gesture or a picker dialog

        Returns:
            BatchReport for the batch
        """
        files = list(files)
        report = BatchReport(submitted=len(files))
        if not files:
            return report

        logger.info(f"Processing batch of {len(files)} file(s)")

        new_items: list[IntakeItem] = []
        for source in files:
            item = await self._process_file(source, report)
            if item is not None:
                new_items.append(item)

        for item in new_items:
            self.store.append(item)
        report.added = new_items

        if new_items:
            self.bridge.publish(self.store.items())

        self._announce(report)
        logger.info(
            f"Batch done: {report.success_count} added, {report.failure_count} failed, "
            f"{report.cancelled_count} skipped"
        )
        return report

    async def _process_file(self, source: SourceFile, report: BatchReport) -> IntakeItem | None:
        """Take one file to a terminal state.

        Returns:
            The item to store, or None for skipped and wrong-type files
        """
        item = IntakeItem.pending(self.identities.new_id(), source.handle)
        result = await self.validator.validate(source)

        if result.error is not None:
            self.notifications.error(_failure_text(result.error))
            report.failed_names.append(source.name)
            if result.error.kind is FailureKind.WRONG_TYPE:
                return None
            return item.failed(result.error.message, result.data, result.total_pages)

        pages = result.selected_pages
        if result.needs_selection:
            outcome = await self.coordinator.request_selection(
                source.handle, result.data, result.total_pages
            )
            if isinstance(outcome, SelectionCancelled):
                self.notifications.info(_("{name} was skipped").format(name=source.name))
                report.skipped_names.append(source.name)
                return None
            pages = outcome.pages

        return item.succeeded(result.data, result.total_pages, pages)

    def _announce(self, report: BatchReport) -> None:
        """Raise the aggregate notification for a finished batch."""
        successes = report.success_count
        failures = report.failure_count

        if failures == 0:
            if successes == 0:
                return
            if successes == 1:
                report.summary = _("File added successfully")
            else:
                report.summary = _("{count} files added successfully").format(count=successes)
            self.notifications.success(report.summary)
            return

        if successes > 0:
            title = _("Some files could not be loaded")
            report.summary = _(
                "{success} file(s) added successfully. {failed} file(s) failed to load."
            ).format(success=successes, failed=failures)
        else:
            title = _("Files could not be loaded")
            report.summary = _("All {failed} file(s) failed to load.").format(failed=failures)

        self.notifications.show_failure_dialog(
            FailureDialog(
                title=title,
                message=report.summary,
                failed_names=tuple(report.failed_names),
                on_retry=self.on_retry,
            )
        )
