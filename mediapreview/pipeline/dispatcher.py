"""Route attachments to the image or document renderer strategy."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from ..config.profile_loader import PreviewProfile, get_profile
from ..config.settings import get_fetch_timeout, get_loader_name
from ..models.attachment import AttachmentDescriptor
from ..models.directive import RenderDirective
from .content_types import ContentCategory, classify, normalize_content_type, resolve_declared_type
from .document_loader import DocumentLoader, get_document_loader
from .document_scaler import DocumentScaler

logger = logging.getLogger(__name__)


class ContentDispatcher:
    """Decides how one attachment slot is rendered.

    Images are displayed from their locator directly; documents are handed
    to a DocumentScaler owned by the dispatcher; everything else renders
    nothing.

    Args:
        loader: DocumentLoader for documents (built from config if None)
        profile: PreviewProfile (active profile if None)
        on_change: Called with the new directive whenever an in-flight
            document load changes what should be drawn
    """

    def __init__(
        self,
        loader: Optional[DocumentLoader] = None,
        profile: Optional[PreviewProfile] = None,
        on_change: Optional[Callable[[RenderDirective], None]] = None,
    ) -> None:
        self.profile = profile or get_profile()
        self._loader = loader
        self._on_change = on_change
        self._scaler: Optional[DocumentScaler] = None

    @property
    def loader(self) -> DocumentLoader:
        if self._loader is None:
            self._loader = get_document_loader(
                get_loader_name(self.profile.loader),
                fetch_timeout=get_fetch_timeout(self.profile.fetch_timeout),
            )
        return self._loader

    @property
    def scaler(self) -> DocumentScaler:
        if self._scaler is None:
            self._scaler = DocumentScaler(
                self.loader,
                page_number=self.profile.page_number,
                on_change=self._scaler_changed,
            )
        return self._scaler

    def classify(self, descriptor: AttachmentDescriptor) -> ContentCategory:
        """Classify a descriptor using the profile's document types."""
        content_type = normalize_content_type(descriptor.content_type)
        if self.profile.guess_octet_stream:
            content_type = resolve_declared_type(content_type, descriptor.source_locator)
        return classify(content_type, self.profile.document_types)

    def render(self, descriptor: AttachmentDescriptor) -> RenderDirective:
        """Produce the render directive for a descriptor.

        Document descriptors must be rendered from a running event loop,
        since they may start an asynchronous load.
        """
        category = self.classify(descriptor)
        if category == ContentCategory.IMAGE:
            self._drop_document()
            return RenderDirective.image(descriptor.source_locator, descriptor.display_width)
        if category == ContentCategory.DOCUMENT:
            scaler = self.scaler
            # A new locator must not rescale the previous document
            scaler.set_source(descriptor.source_locator)
            scaler.set_width(descriptor.display_width)
            return scaler.directive()
        logger.debug(f"No renderer for content type '{descriptor.content_type}'")
        self._drop_document()
        return RenderDirective.empty(descriptor.source_locator)

    async def settled(self) -> Optional[RenderDirective]:
        """Wait for an in-flight document load and return the document directive."""
        if self._scaler is None:
            return None
        await self._scaler.settled()
        return self._scaler.directive()

    def _drop_document(self) -> None:
        if self._scaler is not None:
            self._scaler.reset()

    def _scaler_changed(self, scaler: DocumentScaler) -> None:
        if self._on_change is not None and scaler.locator is not None:
            self._on_change(scaler.directive())
