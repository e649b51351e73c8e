"""Stateful scaler that fits page 1 of a document into a target width."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional

from ..models.directive import RenderDirective
from ..models.document import DocumentHandle, LoadedPage
from ..models.geometry import PageGeometry, ScaleState, ScalerStatus
from .document_loader import DocumentLoader, DocumentLoadError
from .scaling import DEFAULT_SCALE_STATE, compute_scale_state

logger = logging.getLogger(__name__)


class DocumentScaler:
    """Tracks one document locator and the scale its first page needs.

    Reacts to three triggers: a new locator (set_source), page load
    completion, and a new target width (set_width). Loads run as asyncio
    tasks on the running loop; a completion is applied only if its locator
    and generation are still current, so a late result for a superseded
    locator never overwrites newer state.

    Args:
        loader: DocumentLoader used to open documents and fetch pages
        page_number: Page whose geometry drives the scale (default 1)
        on_change: Called with the scaler after every observable change
    """

    def __init__(
        self,
        loader: DocumentLoader,
        page_number: int = 1,
        on_change: Optional[Callable[[DocumentScaler], None]] = None,
    ) -> None:
        if page_number < 1:
            raise ValueError(f"Page number must be >= 1, got {page_number}")
        self._loader = loader
        self._page_number = page_number
        self._on_change = on_change
        self._locator: Optional[str] = None
        self._display_width: Optional[float] = None
        self._status = ScalerStatus.UNLOADED
        self._handle: Optional[DocumentHandle] = None
        self._page: Optional[LoadedPage] = None
        self._geometry: Optional[PageGeometry] = None
        self._state: ScaleState = DEFAULT_SCALE_STATE
        self._error: Optional[str] = None
        self._generation = 0
        self._task: Optional[asyncio.Task] = None

    @property
    def locator(self) -> Optional[str]:
        return self._locator

    @property
    def status(self) -> ScalerStatus:
        return self._status

    @property
    def geometry(self) -> Optional[PageGeometry]:
        return self._geometry

    @property
    def display_width(self) -> Optional[float]:
        return self._display_width

    @property
    def error(self) -> Optional[str]:
        return self._error

    @property
    def page(self) -> Optional[LoadedPage]:
        return self._page

    def current_geometry(self) -> ScaleState:
        """Return the current ScaleState without recomputing it."""
        return self._state

    def directive(self) -> RenderDirective:
        """Describe what the presentation layer should draw right now."""
        if self._status == ScalerStatus.UNLOADED:
            return RenderDirective.empty(self._locator)
        if self._status == ScalerStatus.FAILED:
            return RenderDirective.error(self._locator, self._error or "Document failed to load")
        return RenderDirective.document(
            self._locator, self._display_width, self._state, self._status
        )

    def set_source(self, locator: str) -> Optional[asyncio.Task]:
        """Point the scaler at a locator and start loading it.

        The same locator is a no-op unless the scaler is unloaded. Must be
        called from a running event loop.

        Returns:
            The in-flight load task, if any
        """
        if locator == self._locator and self._status != ScalerStatus.UNLOADED:
            return self._task
        self._begin_load(locator)
        return self._task

    def set_width(self, display_width: Optional[float]) -> ScaleState:
        """Set the target width; applied now if ready, else on the ready transition."""
        self._display_width = display_width
        if self._status == ScalerStatus.READY:
            self._recompute()
        return self._state

    def retry(self) -> Optional[asyncio.Task]:
        """Reload the current locator after a failure or missing geometry."""
        if self._locator is None:
            return None
        if self._status in (ScalerStatus.FAILED, ScalerStatus.GEOMETRY_UNAVAILABLE):
            self._begin_load(self._locator)
        return self._task

    def reset(self) -> None:
        """Forget the current locator and release its document."""
        was_unloaded = self._status == ScalerStatus.UNLOADED and self._locator is None
        self._generation += 1
        self._release_handle()
        self._locator = None
        self._page = None
        self._geometry = None
        self._error = None
        self._state = DEFAULT_SCALE_STATE
        self._status = ScalerStatus.UNLOADED
        self._task = None
        if not was_unloaded:
            self._notify()

    async def settled(self) -> ScaleState:
        """Wait until no load is in flight and return the current ScaleState."""
        while self._task is not None and not self._task.done():
            await asyncio.wait({self._task})
        return self._state

    async def render_page_png(self) -> Optional[bytes]:
        """Rasterise the loaded page at the current scale.

        Returns:
            PNG bytes, or None if the locator changed while rendering

        Raises:
            DocumentLoadError: If the scaler is not ready or rendering fails
        """
        if self._status != ScalerStatus.READY or self._handle is None:
            raise DocumentLoadError(
                f"Document not ready for rendering: {self._locator} ({self._status.value})"
            )
        generation = self._generation
        png = await self._loader.render_page(
            self._handle, self._page_number, self._state.scale_factor
        )
        if generation != self._generation:
            logger.debug(f"Discarding stale page render for {self._locator}")
            return None
        return png

    def _begin_load(self, locator: str) -> None:
        loop = asyncio.get_running_loop()
        self._release_handle()
        self._generation += 1
        self._locator = locator
        self._page = None
        self._geometry = None
        self._error = None
        self._state = DEFAULT_SCALE_STATE
        self._status = ScalerStatus.LOADING
        self._task = loop.create_task(self._load(locator, self._generation))
        self._notify()

    def _is_current(self, locator: str, generation: int) -> bool:
        return generation == self._generation and locator == self._locator

    async def _load(self, locator: str, generation: int) -> None:
        try:
            handle = await self._loader.open(locator)
            if not self._is_current(locator, generation):
                logger.debug(f"Ignoring stale document load for {locator}")
                self._loader.close(handle)
                return
            self._handle = handle
            page = await self._loader.get_page(handle, self._page_number)
        except Exception as e:
            if not self._is_current(locator, generation):
                logger.debug(f"Ignoring stale load failure for {locator}: {e}")
                return
            self._fail(e)
            return

        if not self._is_current(locator, generation):
            logger.debug(f"Ignoring stale page for {locator}")
            return
        self._on_page_loaded(page)

    def _on_page_loaded(self, page: LoadedPage) -> None:
        self._page = page
        geometry = PageGeometry.from_view_box(page.view_box)
        if geometry is None:
            logger.debug(f"Geometry unavailable for {self._locator} page {page.page_number}")
            self._status = ScalerStatus.GEOMETRY_UNAVAILABLE
            self._notify()
            return
        self._geometry = geometry
        self._status = ScalerStatus.READY
        logger.info(
            f"Page {page.page_number} ready for {self._locator}: "
            f"{geometry.intrinsic_width}x{geometry.intrinsic_height}"
        )
        self._recompute(force_notify=True)

    def _fail(self, error: Exception) -> None:
        logger.warning(f"Document load failed for {self._locator}: {error}")
        self._status = ScalerStatus.FAILED
        self._error = str(error) or error.__class__.__name__
        self._state = DEFAULT_SCALE_STATE
        self._notify()

    def _recompute(self, force_notify: bool = False) -> None:
        state = compute_scale_state(self._geometry, self._display_width)
        changed = state != self._state
        self._state = state
        if changed or force_notify:
            self._notify()

    def _release_handle(self) -> None:
        if self._handle is not None:
            self._loader.close(self._handle)
            self._handle = None

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change(self)
