"""Utility helpers."""

from .images import (
    SUPPORTED_IMAGE_MIMETYPES,
    filter_supported,
    is_supported,
    load_image,
    sniff_mime_type,
    validate_image,
)

__all__ = [
    "SUPPORTED_IMAGE_MIMETYPES",
    "filter_supported",
    "is_supported",
    "load_image",
    "sniff_mime_type",
    "validate_image",
]
