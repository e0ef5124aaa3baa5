"""
PdfIntake - Page Selection Coordinator

Drives the confirmation exchange with the external selection surface for
multi-page documents. Each exchange is a SelectionRequest resolved exactly
once, with either a committed page set or a cancellation.
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass

from pdfintake.services.intake_model import SourceHandle, validate_page_selection
from pdfintake.utils.logger import logger


@dataclass(frozen=True)
class SelectionCommitted:
    """The user confirmed a page selection (zero-based, ordered, unique)."""

    pages: tuple[int, ...]


@dataclass(frozen=True)
class SelectionCancelled:
    """The user dismissed the selection surface."""


SelectionOutcome = SelectionCommitted | SelectionCancelled


class SelectionRequest:
    """A pending request for the selection surface.

    The surface shows ``total_pages`` pages of ``data``, starting from
    ``initial_selected_pages`` when an existing item is being edited, and
    answers with :meth:`commit` or :meth:`cancel`.
    """

    def __init__(
        self,
        source: SourceHandle,
        data: bytes,
        total_pages: int,
        initial_selected_pages: tuple[int, ...] | None,
        future: asyncio.Future,
    ) -> None:
        self.source = source
        self.data = data
        self.total_pages = total_pages
        self.initial_selected_pages = initial_selected_pages
        self._future = future

    @property
    def name(self) -> str:
        return self.source.name

    @property
    def resolved(self) -> bool:
        return self._future.done()

    def commit(self, pages: Iterable[int]) -> None:
        """Resolve the request with the chosen pages.

        Raises:
            PageSelectionError: If the pages are not a valid selection for
                this document; the request stays open in that case
        """
        if self.resolved:
            logger.warning(f"Selection for {self.name} already resolved; commit ignored")
            return
        selection = validate_page_selection(pages, self.total_pages)
        self._future.set_result(SelectionCommitted(selection))

    def cancel(self) -> None:
        """Resolve the request without a selection."""
        if self.resolved:
            return
        self._future.set_result(SelectionCancelled())

    async def outcome(self) -> SelectionOutcome:
        return await self._future


SelectionSurface = Callable[[SelectionRequest], Awaitable[None] | None]


class PageSelectionCoordinator:
    """Issues selection requests to the attached surface, one at a time.

    The coordinator never touches the worklist; callers apply the outcome.
    """

    def __init__(self, surface: SelectionSurface | None = None) -> None:
        self._surface = surface
        self._lock = asyncio.Lock()
        self._current: SelectionRequest | None = None

    @property
    def current_request(self) -> SelectionRequest | None:
        """The outstanding request, if any."""
        return self._current

    def attach_surface(self, surface: SelectionSurface | None) -> None:
        self._surface = surface

    async def request_selection(
        self,
        source: SourceHandle,
        data: bytes,
        total_pages: int,
        initial_selection: Iterable[int] | None = None,
    ) -> SelectionOutcome:
        """Ask the user which pages of a document to use.

        Suspends until the surface resolves the request. Callers queue while
        another request is outstanding.

        Args:
            source: The file being selected from
            data: Its byte content
            total_pages: Its page count
            initial_selection: Current selection when re-editing an item

        Returns:
            SelectionCommitted or SelectionCancelled
        """
        async with self._lock:
            if self._surface is None:
                logger.warning(f"No selection surface attached; skipping {source.name}")
                return SelectionCancelled()

            future = asyncio.get_running_loop().create_future()
            request = SelectionRequest(
                source=source,
                data=data,
                total_pages=total_pages,
                initial_selected_pages=tuple(initial_selection) if initial_selection else None,
                future=future,
            )
            self._current = request
            try:
                try:
                    result = self._surface(request)
                    if inspect.isawaitable(result):
                        await result
                except Exception as e:
                    logger.error(f"Selection surface failed for {source.name}: {e}")
                    request.cancel()

                outcome = await request.outcome()
            finally:
                self._current = None

        if isinstance(outcome, SelectionCommitted):
            logger.info(f"Pages {list(outcome.pages)} selected from {source.name}")
        else:
            logger.info(f"Page selection cancelled for {source.name}")
        return outcome
