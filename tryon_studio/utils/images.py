"""Helpers for validating and loading input images."""

from pathlib import Path

from ..errors import ValidationError
from ..models import Image, UploadReport


SUPPORTED_IMAGE_MIMETYPES = (
    "image/png",
    "image/jpeg",
    "image/webp",
    "image/heic",
    "image/heif",
)

_EXTENSION_MIMETYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".webp": "image/webp",
    ".heic": "image/heic",
    ".heif": "image/heif",
    ".gif": "image/gif",
}

_HEIC_BRANDS = {b"heic", b"heix", b"heim", b"heis", b"hevc", b"hevx"}
_HEIF_BRANDS = {b"mif1", b"msf1"}


def sniff_mime_type(data: bytes) -> str | None:
    """Detect the image format from magic bytes."""
    if data[:3] == b'\xff\xd8\xff':
        return "image/jpeg"
    if data[:8] == b'\x89PNG\r\n\x1a\n':
        return "image/png"
    if data[:4] == b'RIFF' and data[8:12] == b'WEBP':
        return "image/webp"
    if data[:6] in (b'GIF87a', b'GIF89a'):
        return "image/gif"
    if data[4:8] == b'ftyp':
        brand = data[8:12]
        if brand in _HEIC_BRANDS:
            return "image/heic"
        if brand in _HEIF_BRANDS:
            return "image/heif"
    return None


def is_supported(image: Image) -> bool:
    return bool(image.data) and image.mime_type in SUPPORTED_IMAGE_MIMETYPES


def validate_image(image: Image, label: str = "image") -> Image:
    """Return ``image`` unchanged, or raise ValidationError."""
    if not image.data:
        raise ValidationError(f"The {label} is empty.")
    if image.mime_type not in SUPPORTED_IMAGE_MIMETYPES:
        raise ValidationError(
            f"The {label} has an unsupported format ({image.mime_type}). "
            "Please use PNG, JPG, WEBP, HEIC, or HEIF."
        )
    return image


def filter_supported(images: list[Image]) -> UploadReport:
    """Split a batch into accepted images and a rejected count."""
    accepted = [image for image in images if is_supported(image)]
    return UploadReport(accepted=accepted, rejected=len(images) - len(accepted))


def load_image(path: Path) -> Image:
    """Read an image file, detecting its media type.

    Magic bytes are more reliable than the extension, which is only used
    as a fallback.
    """
    data = path.read_bytes()
    mime_type = sniff_mime_type(data) or _EXTENSION_MIMETYPES.get(
        path.suffix.lower(), "application/octet-stream"
    )
    return Image(data=data, mime_type=mime_type)
