"""Asynchronous document loading backends (pdfplumber, pymupdf)."""

import asyncio
import io
import logging
from typing import Any, Optional, Tuple

import pdfplumber

try:
    import fitz  # pymupdf
except ImportError:
    fitz = None

from ..models.document import DocumentHandle, LoadedPage
from .locator import LocatorResolveError, resolve_locator

logger = logging.getLogger(__name__)


class DocumentLoadError(Exception):
    """Raised when a document cannot be loaded, paged or rendered."""
    pass


def _require_fitz() -> None:
    if fitz is None:
        raise ImportError(
            "pymupdf (fitz) is required for page rendering. "
            "Install with: pip install pymupdf"
        )


class DocumentLoader:
    """Base class for document loaders.

    Public methods are coroutines. Blocking library calls run in the event
    loop's default executor; the returned objects are only touched from the
    loop thread.
    """

    name = "base"

    def __init__(self, fetch_timeout: float = 10.0) -> None:
        self.fetch_timeout = fetch_timeout

    async def _run(self, func, *args):
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, func, *args)

    async def open(self, locator: str) -> DocumentHandle:
        """Resolve a locator and open the document it points at.

        Raises:
            DocumentLoadError: If the locator cannot be fetched or parsed
        """
        return await self._run(self._open_sync, locator)

    async def get_page(self, handle: DocumentHandle, page_number: int) -> LoadedPage:
        """Fetch a page and its native view box.

        Raises:
            DocumentLoadError: If the page does not exist or cannot be read
        """
        self._check_page(handle, page_number)
        try:
            view_box = await self._run(self._page_view_box, handle, page_number - 1)
        except Exception as e:
            raise DocumentLoadError(
                f"Failed to read page {page_number} of {handle.locator}: {e}"
            ) from e
        return LoadedPage(page_number=page_number, view_box=view_box)

    async def render_page(self, handle: DocumentHandle, page_number: int, scale: float) -> bytes:
        """Rasterise a page to PNG at the given scale (1.0 = 72 DPI).

        Raises:
            DocumentLoadError: If rendering fails
            ImportError: If pymupdf (fitz) is not installed
        """
        self._check_page(handle, page_number)
        _require_fitz()
        try:
            return await self._run(self._render_png, handle, page_number - 1, scale)
        except Exception as e:
            raise DocumentLoadError(
                f"Failed to render page {page_number} of {handle.locator}: {e}"
            ) from e

    def close(self, handle: Optional[DocumentHandle]) -> None:
        """Release the backend document. Safe to call more than once."""
        if handle is None or handle.closed:
            return
        handle.closed = True
        try:
            if handle.native is not None:
                handle.native.close()
        except Exception as e:
            logger.warning(f"Failed to close document {handle.locator}: {e}")

    def _open_sync(self, locator: str) -> DocumentHandle:
        try:
            data = resolve_locator(locator, timeout=self.fetch_timeout)
        except LocatorResolveError as e:
            raise DocumentLoadError(str(e)) from e
        try:
            native, page_count = self._open_native(data)
        except Exception as e:
            raise DocumentLoadError(f"Failed to open document {locator}: {str(e)}") from e
        logger.info(f"Opened document: {locator} ({page_count} pages, {self.name})")
        return DocumentHandle(
            locator=locator,
            page_count=page_count,
            native=native,
            loader_name=self.name,
            content=data,
        )

    def _check_page(self, handle: DocumentHandle, page_number: int) -> None:
        if handle.closed:
            raise DocumentLoadError(f"Document is closed: {handle.locator}")
        if page_number < 1 or page_number > handle.page_count:
            raise DocumentLoadError(
                f"Page {page_number} out of range for {handle.locator} "
                f"({handle.page_count} pages)"
            )

    def _render_png(self, handle: DocumentHandle, index: int, scale: float) -> bytes:
        # Matrix: scale factor relative to 72 DPI
        pdf_doc = fitz.open(stream=handle.content, filetype="pdf")
        try:
            pix = pdf_doc[index].get_pixmap(matrix=fitz.Matrix(scale, scale))
            return pix.tobytes("png")
        finally:
            pdf_doc.close()

    def _open_native(self, data: bytes) -> Tuple[Any, int]:
        raise NotImplementedError

    def _page_view_box(self, handle: DocumentHandle, index: int) -> Optional[Tuple[float, ...]]:
        raise NotImplementedError


class PdfplumberDocumentLoader(DocumentLoader):
    """Opens documents with pdfplumber; view box is the page bbox."""

    name = "pdfplumber"

    def _open_native(self, data: bytes) -> Tuple[Any, int]:
        pdf = pdfplumber.open(io.BytesIO(data))
        return pdf, len(pdf.pages)

    def _page_view_box(self, handle: DocumentHandle, index: int) -> Optional[Tuple[float, ...]]:
        bbox = handle.native.pages[index].bbox
        if not bbox:
            return None
        return tuple(float(v) for v in bbox)


class PyMuPDFDocumentLoader(DocumentLoader):
    """Opens documents with pymupdf; view box is the page rect."""

    name = "pymupdf"

    def _open_native(self, data: bytes) -> Tuple[Any, int]:
        _require_fitz()
        pdf_doc = fitz.open(stream=data, filetype="pdf")
        return pdf_doc, len(pdf_doc)

    def _page_view_box(self, handle: DocumentHandle, index: int) -> Optional[Tuple[float, ...]]:
        rect = handle.native[index].rect
        return (float(rect.x0), float(rect.y0), float(rect.x1), float(rect.y1))

    def _render_png(self, handle: DocumentHandle, index: int, scale: float) -> bytes:
        pix = handle.native[index].get_pixmap(matrix=fitz.Matrix(scale, scale))
        return pix.tobytes("png")


_LOADERS = {
    PdfplumberDocumentLoader.name: PdfplumberDocumentLoader,
    PyMuPDFDocumentLoader.name: PyMuPDFDocumentLoader,
}


def get_document_loader(name: str = "pdfplumber", fetch_timeout: float = 10.0) -> DocumentLoader:
    """Create a document loader by backend name.

    Raises:
        ValueError: If the name is unknown
    """
    try:
        loader_cls = _LOADERS[name.lower()]
    except KeyError:
        raise ValueError(f"Unknown document loader: {name} (must be one of {sorted(_LOADERS)})")
    return loader_cls(fetch_timeout=fetch_timeout)
