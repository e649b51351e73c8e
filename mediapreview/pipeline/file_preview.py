"""Turn a user file selection into a preview data URI and a raw upload handle."""

from __future__ import annotations

import asyncio
import logging
import os
from typing import Callable, Iterable, Optional, Union

from ..config.settings import get_max_file_bytes, get_verify_images
from ..models.file_selection import FileSelection, SelectedFile
from .file_reader import DataUriFileReader, FileDecodeError, FileReader

logger = logging.getLogger(__name__)


class FilePreviewPipeline:
    """Hands the raw file over at once and the decoded preview later.

    Only the first selected file is used. ``on_raw_file_ready`` fires
    synchronously inside on_file_selected, before decoding starts;
    ``on_preview_ready`` fires once decoding completes. A decode failure is
    reported through ``on_decode_error`` or, without one, raised from the
    returned task. A newer selection supersedes an older one whose preview
    is still pending.

    Args:
        on_preview_ready: Called with the data URI
        on_raw_file_ready: Called with the SelectedFile
        on_decode_error: Called with (SelectedFile, FileDecodeError)
        reader: FileReader (DataUriFileReader from config if None)
    """

    def __init__(
        self,
        on_preview_ready: Callable[[str], None],
        on_raw_file_ready: Callable[[SelectedFile], None],
        on_decode_error: Optional[Callable[[SelectedFile, FileDecodeError], None]] = None,
        reader: Optional[FileReader] = None,
    ) -> None:
        self._on_preview_ready = on_preview_ready
        self._on_raw_file_ready = on_raw_file_ready
        self._on_decode_error = on_decode_error
        self._reader = reader or DataUriFileReader(
            max_file_bytes=get_max_file_bytes(),
            verify_images=get_verify_images(),
        )
        self._selection: Optional[FileSelection] = None

    @property
    def selection(self) -> Optional[FileSelection]:
        return self._selection

    def on_file_selected(
        self, files: Union[Iterable, SelectedFile, str, os.PathLike, None]
    ) -> Optional[asyncio.Task]:
        """Handle a file-selection event.

        Must be called from a running event loop.

        Args:
            files: Selected files (SelectedFile, str or os.PathLike); only the
                first is used. A single file is treated as a one-file selection.

        Returns:
            The decode task, or None for an empty selection
        """
        if isinstance(files, (SelectedFile, str, os.PathLike)):
            files = [files]
        first = next(iter(files), None) if files is not None else None
        if first is None:
            logger.debug("Empty file selection, nothing to preview")
            return None

        loop = asyncio.get_running_loop()
        raw_file = SelectedFile.coerce(first)
        selection = FileSelection(raw_file=raw_file)
        self._selection = selection

        self._on_raw_file_ready(raw_file)
        return loop.create_task(self._decode(selection))

    async def _decode(self, selection: FileSelection) -> None:
        raw_file = selection.raw_file
        try:
            data_uri = await self._reader.read_as_data_uri(raw_file)
        except FileDecodeError as e:
            selection.error = str(e)
            logger.warning(f"Could not decode {raw_file.name} for preview: {e}")
            if selection is not self._selection:
                return
            if self._on_decode_error is None:
                raise
            self._on_decode_error(raw_file, e)
            return

        selection.preview_data_uri = data_uri
        if selection is not self._selection:
            logger.debug(f"Dropping preview for superseded selection {raw_file.name}")
            return
        self._on_preview_ready(data_uri)
