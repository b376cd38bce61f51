# Test fixtures and configuration
import pytest
import sys
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from tryon_studio.models import Image
from tryon_studio.services import GenerationClient


PNG_SIGNATURE = b'\x89PNG\r\n\x1a\n'


@pytest.fixture
def minimal_png_bytes():
    """Minimal valid PNG image bytes."""
    return bytes([
        0x89, 0x50, 0x4E, 0x47, 0x0D, 0x0A, 0x1A, 0x0A,  # PNG signature
        0x00, 0x00, 0x00, 0x0D, 0x49, 0x48, 0x44, 0x52,  # IHDR chunk
        0x00, 0x00, 0x00, 0x01, 0x00, 0x00, 0x00, 0x01,  # 1x1 dimensions
        0x08, 0x02, 0x00, 0x00, 0x00, 0x90, 0x77, 0x53,
        0xDE, 0x00, 0x00, 0x00, 0x0C, 0x49, 0x44, 0x41,  # IDAT chunk
        0x54, 0x08, 0xD7, 0x63, 0xF8, 0xCF, 0xC0, 0x00,
        0x00, 0x00, 0x03, 0x00, 0x01, 0x00, 0x05, 0xFE,
        0xD4, 0xAA, 0x00, 0x00, 0x00, 0x00, 0x49, 0x45,  # IEND chunk
        0x4E, 0x44, 0xAE, 0x42, 0x60, 0x82
    ])


@pytest.fixture
def make_image():
    """Factory for distinct PNG images keyed by a tag."""
    def _make(tag: str, mime_type: str = "image/png") -> Image:
        return Image(data=PNG_SIGNATURE + tag.encode(), mime_type=mime_type)
    return _make


@pytest.fixture
def person_image(make_image):
    return make_image("person", "image/jpeg")


@pytest.fixture
def temp_image_file(tmp_path, minimal_png_bytes):
    """Create a temporary PNG file."""
    img_path = tmp_path / "test_image.png"
    img_path.write_bytes(minimal_png_bytes)
    return img_path


@pytest.fixture
def fake_client():
    """GenerationClient stand-in whose outputs are derived from its inputs.

    compose(person, garment) -> "composed:<garment>"
    enhance(image)           -> "enhanced:<image>"
    recolor(garment, color)  -> "<garment>+<color>"
    """
    client = MagicMock(spec=GenerationClient)

    async def compose(person, garment, background=""):
        return Image(data=b"composed:" + garment.data, mime_type="image/png")

    async def enhance(image):
        return Image(data=b"enhanced:" + image.data, mime_type="image/png")

    async def recolor(garment, color):
        return Image(data=garment.data + b"+" + color.encode(), mime_type="image/png")

    client.compose = AsyncMock(side_effect=compose)
    client.enhance = AsyncMock(side_effect=enhance)
    client.recolor = AsyncMock(side_effect=recolor)
    client.expand_background_idea = AsyncMock(return_value="A misty pine forest at dawn.")
    client.is_configured = True
    return client
