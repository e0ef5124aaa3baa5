"""
PdfIntake - Publication Bridge

Builds immutable snapshots of the successful worklist items and hands them
to every subscriber. Delivery is at-most-once: nothing is buffered for
subscribers that register later.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from pdfintake.services.intake_model import IntakeItem, ItemStatus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SnapshotFile:
    """One successful item as seen by downstream consumers."""

    name: str
    data: bytes = field(repr=False)
    selected_pages: tuple[int, ...]

    def to_dict(self) -> dict:
        return {"name": self.name, "bytes": self.data, "selectedPages": list(self.selected_pages)}


@dataclass(frozen=True)
class Snapshot:
    """Point-in-time export of the worklist, successful items only, in order."""

    files: tuple[SnapshotFile, ...] = ()

    @classmethod
    def from_items(cls, items: Iterable[IntakeItem]) -> Snapshot:
        return cls(
            files=tuple(
                SnapshotFile(name=item.name, data=item.data, selected_pages=item.selected_pages)
                for item in items
                if item.status is ItemStatus.SUCCESS
            )
        )

    @property
    def page_count(self) -> int:
        """Total number of selected pages across all files."""
        return sum(len(f.selected_pages) for f in self.files)

    def to_dict(self) -> dict:
        return {"files": [f.to_dict() for f in self.files]}


SnapshotSubscriber = Callable[[Snapshot], None]


class PublicationBridge:
    """Fans snapshots out to subscribers."""

    def __init__(self) -> None:
        self._subscribers: list[SnapshotSubscriber] = []

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def subscribe(self, callback: SnapshotSubscriber) -> Callable[[], None]:
        """Register a subscriber.

        Returns:
            A callable that removes the subscription
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def publish(self, items: Iterable[IntakeItem]) -> Snapshot:
        """Build a snapshot from the given items and emit it.

        A subscriber that raises is logged and does not prevent delivery
        to the others.
        """
        snapshot = Snapshot.from_items(items)
        logger.debug(
            "Publishing snapshot: %d file(s), %d page(s) to %d subscriber(s)",
            len(snapshot.files),
            snapshot.page_count,
            len(self._subscribers),
        )
        for callback in list(self._subscribers):
            try:
                callback(snapshot)
            except Exception:
                logger.exception("Snapshot subscriber %r failed", callback)
        return snapshot
