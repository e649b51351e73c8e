"""Shared fixtures: minimal PDFs and a controllable document loader."""

import asyncio
from pathlib import Path

import pytest

from mediapreview.models.document import DocumentHandle, LoadedPage
from mediapreview.pipeline.document_loader import DocumentLoader, DocumentLoadError


def make_minimal_pdf(path: Path, width: float = 200, height: float = 100) -> None:
    """Create a one-page PDF with pymupdf."""
    import fitz
    doc = fitz.open()
    doc.new_page(width=width, height=height)
    doc.save(str(path))
    doc.close()


@pytest.fixture
def minimal_pdf_path(tmp_path):
    """A 200x100 point PDF file."""
    p = tmp_path / "minimal.pdf"
    make_minimal_pdf(p)
    return p


class FakeLoader(DocumentLoader):
    """In-memory loader; open() can be held back per locator with hold()."""

    name = "fake"

    def __init__(self, view_boxes=None, failures=None):
        super().__init__()
        self.view_boxes = dict(view_boxes or {})
        self.failures = dict(failures or {})
        self.gates = {}
        self.opened = []
        self.closed = []

    def hold(self, locator):
        gate = asyncio.Event()
        self.gates[locator] = gate
        return gate

    async def open(self, locator):
        self.opened.append(locator)
        gate = self.gates.get(locator)
        if gate is not None:
            await gate.wait()
        if locator in self.failures:
            raise DocumentLoadError(self.failures[locator])
        return DocumentHandle(locator=locator, page_count=1, loader_name=self.name)

    async def get_page(self, handle, page_number):
        return LoadedPage(page_number=page_number, view_box=self.view_boxes.get(handle.locator))

    async def render_page(self, handle, page_number, scale):
        return b"\x89PNG fake"

    def close(self, handle):
        if handle is not None and not handle.closed:
            handle.closed = True
            self.closed.append(handle.locator)


@pytest.fixture
def fake_loader():
    """FakeLoader with a 200x100 'a.pdf' and a 400x300 'b.pdf'."""
    return FakeLoader({"a.pdf": (0, 0, 200, 100), "b.pdf": (0, 0, 400, 300)})


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in (
        "MEDIA_PREVIEW_PROFILE",
        "MEDIA_PREVIEW_LOADER",
        "MEDIA_PREVIEW_FETCH_TIMEOUT",
        "MEDIA_PREVIEW_MAX_FILE_BYTES",
        "MEDIA_PREVIEW_VERIFY_IMAGES",
    ):
        monkeypatch.delenv(name, raising=False)
