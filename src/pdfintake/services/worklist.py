"""
PdfIntake - Worklist Store

The ordered collection of intake items. It is the single source of truth
for item order and content, and is changed only through its four
operations: append, remove_by_id, reorder and update_selected_pages.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from pdfintake.services.intake_model import IntakeItem, ItemStatus, validate_page_selection
from pdfintake.utils.exceptions import DuplicateItemError, ItemStateError, UnknownItemError
from pdfintake.utils.logger import logger


class WorklistStore:
    """Ordered intake items keyed by identity.

    Error items stay at the slot they were appended to; reordering moves
    only successful items around them.
    """

    def __init__(self) -> None:
        self._items: list[IntakeItem] = []
        self._used_ids: set[str] = set()

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[IntakeItem]:
        return iter(tuple(self._items))

    def __contains__(self, item_id: object) -> bool:
        return any(item.id == item_id for item in self._items)

    def items(self) -> tuple[IntakeItem, ...]:
        """Return the items in canonical order."""
        return tuple(self._items)

    def ids(self) -> list[str]:
        return [item.id for item in self._items]

    def get(self, item_id: str) -> IntakeItem | None:
        for item in self._items:
            if item.id == item_id:
                return item
        return None

    def successful_items(self) -> list[IntakeItem]:
        return [item for item in self._items if item.status is ItemStatus.SUCCESS]

    def _index_of(self, item_id: str) -> int:
        for i, item in enumerate(self._items):
            if item.id == item_id:
                return i
        return -1

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def append(self, item: IntakeItem) -> None:
        """Insert an item at the end.

        Raises:
            DuplicateItemError: If the identity is present or was used before
            ItemStateError: If the item is still pending
        """
        if item.id in self._used_ids:
            raise DuplicateItemError(item.id)
        if item.status is ItemStatus.PENDING:
            raise ItemStateError(item.id, item.status.value, "append")

        self._used_ids.add(item.id)
        self._items.append(item)
        logger.debug(f"Appended {item.name} ({item.status.value}) as {item.id}")

    def remove_by_id(self, item_id: str) -> IntakeItem | None:
        """Remove the item with this identity.

        Returns:
            The removed item, or None if no item had the identity
        """
        index = self._index_of(item_id)
        if index < 0:
            return None
        item = self._items.pop(index)
        logger.debug(f"Removed {item.name} ({item_id})")
        return item

    def reorder(self, new_order: Iterable[str]) -> bool:
        """Adopt a new order for the successful items.

        ``new_order`` must list every successful identity exactly once.
        Error identities in it are ignored since those items are pinned,
        and unknown identities are dropped. Anything else is a contract
        violation and leaves the store unchanged.

        Returns:
            True if the order changed
        """
        known = {item.id: item for item in self._items}
        requested: list[str] = []
        for item_id in new_order:
            item = known.get(item_id)
            if item is None:
                logger.warning(f"Reorder: dropping unknown id {item_id}")
                continue
            if item.is_reorderable:
                requested.append(item_id)

        movable_slots = [i for i, item in enumerate(self._items) if item.is_reorderable]
        movable_ids = [self._items[i].id for i in movable_slots]

        if len(requested) != len(movable_ids) or set(requested) != set(movable_ids):
            logger.warning(
                f"Reorder ignored: {requested} is not a permutation of {movable_ids}"
            )
            return False

        if requested == movable_ids:
            return False

        reordered = list(self._items)
        for slot, item_id in zip(movable_slots, requested):
            reordered[slot] = known[item_id]
        self._items = reordered
        logger.debug(f"Reordered worklist: {self.ids()}")
        return True

    def update_selected_pages(self, item_id: str, pages: Iterable[int]) -> IntakeItem:
        """Replace the page selection of a successful item.

        Returns:
            The updated item

        Raises:
            UnknownItemError: If no item has the identity
            ItemStateError: If the item is not successful
            PageSelectionError: If the pages are not valid for the item
        """
        index = self._index_of(item_id)
        if index < 0:
            raise UnknownItemError(item_id)

        item = self._items[index]
        if item.status is not ItemStatus.SUCCESS:
            raise ItemStateError(item_id, item.status.value, "edit pages of")

        selection = validate_page_selection(pages, item.total_pages)
        updated = item.with_selected_pages(selection)
        self._items[index] = updated
        logger.debug(f"Selected pages of {item.name} set to {list(selection)}")
        return updated
