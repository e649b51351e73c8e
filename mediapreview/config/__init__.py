"""Configuration package."""

from .settings import (
    get_app_name,
    get_app_version,
    get_fetch_timeout,
    get_loader_name,
    get_max_file_bytes,
    get_profile_name,
    get_verify_images,
)

__all__ = [
    'get_app_name',
    'get_app_version',
    'get_fetch_timeout',
    'get_loader_name',
    'get_max_file_bytes',
    'get_profile_name',
    'get_verify_images',
]
