"""
PdfIntake - Intake Session

Wires the worklist, validator, selection coordinator, publication bridge
and notification center together, and exposes the actions the list view
and the input surface route to.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

from pdfintake.services.intake_model import IntakeItem, ItemStatus, SourceFile
from pdfintake.services.notifications import NotificationCenter
from pdfintake.services.orchestrator import BatchOrchestrator, BatchReport
from pdfintake.services.page_selection import (
    PageSelectionCoordinator,
    SelectionCommitted,
    SelectionSurface,
)
from pdfintake.services.publication import PublicationBridge, Snapshot
from pdfintake.services.validator import DocumentValidator
from pdfintake.services.worklist import WorklistStore
from pdfintake.utils.config_manager import ConfigManager
from pdfintake.utils.exceptions import ItemStateError, UnknownItemError
from pdfintake.utils.identity import IdentityGenerator
from pdfintake.utils.logger import logger


class IntakeSession:
    """One user's intake worklist and the operations on it.

    Every worklist mutation made through the session is followed by a
    snapshot publication.
    """

    def __init__(
        self,
        surface: SelectionSurface | None = None,
        validator: DocumentValidator | None = None,
        config: ConfigManager | None = None,
        on_retry: Callable[[], None] | None = None,
    ) -> None:
        """Initialize the session.

        Args:
            surface: Selection surface for multi-page documents
            validator: Validator to use; built from ``config`` when omitted
            config: Configuration for the default validator
            on_retry: Called when the user asks to retry failed files
                (typically re-opens the file picker)
        """
        if validator is None:
            validator = DocumentValidator.from_config(config) if config else DocumentValidator()

        self.store = WorklistStore()
        self.bridge = PublicationBridge()
        self.notifications = NotificationCenter()
        self.coordinator = PageSelectionCoordinator(surface)
        self.identities = IdentityGenerator()
        self.orchestrator = BatchOrchestrator(
            store=self.store,
            bridge=self.bridge,
            validator=validator,
            coordinator=self.coordinator,
            notifications=self.notifications,
            identities=self.identities,
            on_retry=on_retry,
        )
        self._dragging_id: str | None = None

    @property
    def items(self) -> tuple[IntakeItem, ...]:
        return self.store.items()

    def snapshot(self) -> Snapshot:
        """Current snapshot, without emitting it."""
        return Snapshot.from_items(self.store.items())

    def _publish(self) -> Snapshot:
        return self.bridge.publish(self.store.items())

    # ------------------------------------------------------------------
    # Input surface
    # ------------------------------------------------------------------

    async def submit(self, files: Iterable[SourceFile]) -> BatchReport:
        """Entry point shared by the drop zone and the file picker."""
        return await self.orchestrator.submit(files)

    def report_external_error(self, message: str) -> None:
        """Forward a failure reported by the selection surface to the user."""
        logger.warning(f"Selection surface reported: {message}")
        self.notifications.error(message)

    # ------------------------------------------------------------------
    # List-item actions
    # ------------------------------------------------------------------

    def remove_item(self, item_id: str) -> bool:
        """Remove an item; unknown identities are ignored."""
        removed = self.store.remove_by_id(item_id)
        if removed is None:
            return False
        if self._dragging_id == item_id:
            self._dragging_id = None
        logger.info(f"Removed {removed.name} from worklist")
        self._publish()
        return True

    def reorder_items(self, new_order: Iterable[str]) -> bool:
        """Adopt a new order of identities, as reconciled by the list view."""
        if not self.store.reorder(new_order):
            return False
        self._publish()
        return True

    def begin_drag(self, item_id: str) -> bool:
        """Start dragging an item.

        Returns:
            False if the item does not exist or cannot be reordered
        """
        item = self.store.get(item_id)
        if item is None or not item.is_reorderable:
            return False
        self._dragging_id = item_id
        return True

    def end_drag(self, new_order: Iterable[str]) -> bool:
        """Finish a drag with the order the list view ended up showing."""
        if self._dragging_id is None:
            logger.debug("Drag end without a drag in progress; ignored")
            return False
        self._dragging_id = None
        return self.reorder_items(new_order)

    async def edit_pages(self, item_id: str) -> bool:
        """Let the user change the selected pages of a successful item.

        Cancelling keeps the previous selection.

        Returns:
            True if a new selection was committed

        Raises:
            UnknownItemError: If no item has the identity
            ItemStateError: If the item is not successful
        """
        item = self.store.get(item_id)
        if item is None:
            raise UnknownItemError(item_id)
        if item.status is not ItemStatus.SUCCESS:
            raise ItemStateError(item_id, item.status.value, "edit pages of")

        outcome = await self.coordinator.request_selection(
            item.source, item.data, item.total_pages, initial_selection=item.selected_pages
        )
        if not isinstance(outcome, SelectionCommitted):
            return False

        if self.store.get(item_id) is None:
            logger.info(f"{item.name} was removed during page selection; edit dropped")
            return False

        self.store.update_selected_pages(item_id, outcome.pages)
        self._publish()
        return True
