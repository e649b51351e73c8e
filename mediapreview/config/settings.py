"""Central configuration for the media preview core."""

import logging
import os
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

LOADER_NAMES = ("pdfplumber", "pymupdf")
DEFAULT_LOADER = "pdfplumber"
DEFAULT_FETCH_TIMEOUT = 10.0
DEFAULT_MAX_FILE_BYTES = 10 * 1024 * 1024


def get_app_name() -> str:
    """Get application name."""
    return "Media Preview"


def get_app_version() -> str:
    """Get application version from pyproject.toml."""
    try:
        import tomli
        pyproject_path = Path(__file__).parent.parent.parent / "pyproject.toml"
        with open(pyproject_path, "rb") as f:
            pyproject = tomli.load(f)
            return pyproject.get("project", {}).get("version", "0.1.0")
    except Exception:
        # Fallback version if pyproject.toml cannot be read
        return "0.1.0"


def get_profile_name() -> str:
    """Get name of the configuration profile to load.

    Returns:
        Value of MEDIA_PREVIEW_PROFILE, default "default"
    """
    return os.getenv("MEDIA_PREVIEW_PROFILE", "default")


def get_loader_name(default: Optional[str] = None) -> str:
    """Get document loader backend name.

    Args:
        default: Fallback when MEDIA_PREVIEW_LOADER is not set (e.g. from profile)

    Returns:
        "pdfplumber" or "pymupdf"
    """
    name = os.getenv("MEDIA_PREVIEW_LOADER") or default or DEFAULT_LOADER
    name = name.lower()
    if name not in LOADER_NAMES:
        logger.warning(f"Invalid document loader: {name}, using '{DEFAULT_LOADER}'")
        return DEFAULT_LOADER
    return name


def get_fetch_timeout(default: Optional[float] = None) -> float:
    """Get timeout in seconds for fetching remote locators.

    Returns:
        Timeout from MEDIA_PREVIEW_FETCH_TIMEOUT, else default (10 seconds)
    """
    fallback = DEFAULT_FETCH_TIMEOUT if default is None else default
    env_value = os.getenv("MEDIA_PREVIEW_FETCH_TIMEOUT")
    if env_value is None:
        return fallback
    try:
        timeout = float(env_value)
    except ValueError:
        logger.warning(f"Invalid MEDIA_PREVIEW_FETCH_TIMEOUT '{env_value}', using {fallback}")
        return fallback
    if timeout <= 0:
        logger.warning(f"MEDIA_PREVIEW_FETCH_TIMEOUT must be positive, using {fallback}")
        return fallback
    return timeout


def get_max_file_bytes() -> int:
    """Get largest file size accepted for preview decoding.

    Returns:
        Size limit from MEDIA_PREVIEW_MAX_FILE_BYTES, default 10 MiB
    """
    env_value = os.getenv("MEDIA_PREVIEW_MAX_FILE_BYTES")
    if env_value is None:
        return DEFAULT_MAX_FILE_BYTES
    try:
        limit = int(env_value)
    except ValueError:
        logger.warning(f"Invalid MEDIA_PREVIEW_MAX_FILE_BYTES '{env_value}', using default")
        return DEFAULT_MAX_FILE_BYTES
    if limit <= 0:
        logger.warning(f"MEDIA_PREVIEW_MAX_FILE_BYTES must be positive, using {DEFAULT_MAX_FILE_BYTES}")
        return DEFAULT_MAX_FILE_BYTES
    return limit


def get_verify_images() -> bool:
    """Check if selected images are verified with Pillow before preview.

    Returns:
        True unless MEDIA_PREVIEW_VERIFY_IMAGES is set to something other than 'true'
    """
    env_value = os.getenv("MEDIA_PREVIEW_VERIFY_IMAGES", "true")
    return env_value.lower() == "true"
