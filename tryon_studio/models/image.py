"""Image value model.

An Image is identified by its content: two Images are the same garment only
when both the encoded bytes and the media type match. Images are frozen, so
a color change always produces a new value.
"""

import base64
import binascii
import hashlib

from pydantic import BaseModel, ConfigDict, Field

from ..errors import ValidationError


class Image(BaseModel):
    """Binary image content plus its media type."""

    model_config = ConfigDict(frozen=True)

    data: bytes = Field(repr=False)
    mime_type: str = Field(description="e.g., 'image/png', 'image/jpeg'")

    @property
    def digest(self) -> str:
        """Short content hash, for logs."""
        return hashlib.sha256(self.data).hexdigest()[:12]

    @property
    def base64_data(self) -> str:
        return base64.b64encode(self.data).decode("ascii")

    def to_data_url(self) -> str:
        """Encode as a ``data:`` URL without touching the bytes."""
        return f"data:{self.mime_type};base64,{self.base64_data}"

    @classmethod
    def from_base64(cls, data: str, mime_type: str) -> "Image":
        try:
            raw = base64.b64decode(data, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise ValidationError("Provided image string is not valid base64") from exc
        return cls(data=raw, mime_type=mime_type)

    @classmethod
    def from_data_url(cls, url: str) -> "Image":
        """Decode a ``data:<mime>;base64,<payload>`` URL."""
        if not url.startswith("data:") or "," not in url:
            raise ValidationError("Expected a base64 data URL for image input")

        header, encoded = url.split(",", 1)
        mime_type = header[len("data:"):].split(";", 1)[0]
        if not mime_type or ";base64" not in header:
            raise ValidationError("Data URL must declare a media type and base64 encoding")

        return cls.from_base64(encoded, mime_type)
