"""Selected file handle and preview selection models."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union


@dataclass
class SelectedFile:
    """Raw handle for a user-selected file, ready to be passed on for upload.

    Either ``path`` or ``data`` is set. Contents are not read when the handle
    is created.

    Attributes:
        name: File name as shown to the user
        path: Local path, for files picked from disk
        data: In-memory contents, for files received as bytes
        content_type: Declared content type, if known
        size: Size in bytes, if known
    """

    name: str
    path: Optional[Path] = None
    data: Optional[bytes] = field(default=None, repr=False)
    content_type: Optional[str] = None
    size: Optional[int] = None

    def __post_init__(self):
        if self.path is None and self.data is None:
            raise ValueError(f"SelectedFile {self.name!r} needs a path or data")

    @classmethod
    def from_path(cls, path: Union[str, os.PathLike], content_type: Optional[str] = None) -> SelectedFile:
        p = Path(path)
        try:
            size: Optional[int] = p.stat().st_size
        except OSError:
            size = None
        return cls(name=p.name, path=p, content_type=content_type, size=size)

    @classmethod
    def from_bytes(cls, name: str, data: bytes, content_type: Optional[str] = None) -> SelectedFile:
        return cls(name=name, data=data, content_type=content_type, size=len(data))

    @classmethod
    def coerce(cls, obj: Union[SelectedFile, str, os.PathLike]) -> SelectedFile:
        """Turn a path-like or an existing SelectedFile into a SelectedFile."""
        if isinstance(obj, SelectedFile):
            return obj
        if isinstance(obj, (str, os.PathLike)):
            return cls.from_path(obj)
        raise TypeError(f"Unsupported file handle type: {type(obj).__name__}")


@dataclass
class FileSelection:
    """Outcome of one file selection.

    Attributes:
        raw_file: Raw handle, available as soon as the file is picked
        preview_data_uri: Data URI, filled in once decoding completes
        error: Decode error message, if decoding failed
    """

    raw_file: SelectedFile
    preview_data_uri: Optional[str] = None
    error: Optional[str] = None
