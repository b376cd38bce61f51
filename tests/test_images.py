"""Unit tests for the Image model and input validation helpers."""

import base64

import pytest

from tryon_studio.config import StudioConfig, setup_logger
from tryon_studio.errors import ValidationError
from tryon_studio.models import Image, PipelineProgress, Stage, TryOnResult
from tryon_studio.utils import filter_supported, load_image, sniff_mime_type, validate_image


class TestImageModel:
    """Tests for content identity and data URL handling."""

    def test_equality_is_by_content(self):
        assert Image(data=b"abc", mime_type="image/png") == Image(data=b"abc", mime_type="image/png")
        assert Image(data=b"abc", mime_type="image/png") != Image(data=b"abd", mime_type="image/png")
        assert Image(data=b"abc", mime_type="image/png") != Image(data=b"abc", mime_type="image/jpeg")

    def test_hashable(self):
        images = {Image(data=b"abc", mime_type="image/png"), Image(data=b"abc", mime_type="image/png")}
        assert len(images) == 1

    def test_frozen(self):
        image = Image(data=b"abc", mime_type="image/png")

        with pytest.raises(Exception):
            image.data = b"xyz"

    def test_data_url_preserves_bytes(self, minimal_png_bytes):
        image = Image(data=minimal_png_bytes, mime_type="image/png")

        url = image.to_data_url()

        assert url == f"data:image/png;base64,{base64.b64encode(minimal_png_bytes).decode()}"
        assert Image.from_data_url(url) == image

    @pytest.mark.parametrize("url", [
        "https://example.com/a.png",
        "data:image/png;base64",
        "data:;base64,abcd",
        "data:image/png,rawtext",
        "data:image/png;base64,@@@",
    ])
    def test_bad_data_urls(self, url):
        with pytest.raises(ValidationError):
            Image.from_data_url(url)

    def test_digest_is_short_and_stable(self):
        image = Image(data=b"abc", mime_type="image/png")

        assert len(image.digest) == 12
        assert image.digest == Image(data=b"abc", mime_type="image/jpeg").digest

    def test_repr_hides_bytes(self):
        assert "abc" not in repr(Image(data=b"abc", mime_type="image/png"))


class TestValidation:
    """Tests for format detection and upload filtering."""

    @pytest.mark.parametrize("header,expected", [
        (b'\xff\xd8\xff\xe0' + b'\x00' * 8, "image/jpeg"),
        (b'\x89PNG\r\n\x1a\n' + b'\x00' * 4, "image/png"),
        (b'RIFF\x00\x00\x00\x00WEBP', "image/webp"),
        (b'GIF89a' + b'\x00' * 6, "image/gif"),
        (b'\x00\x00\x00\x18ftypheic', "image/heic"),
        (b'\x00\x00\x00\x18ftypmif1', "image/heif"),
        (b'hello world!', None),
    ])
    def test_sniff_mime_type(self, header, expected):
        assert sniff_mime_type(header) == expected

    def test_load_image_detects_format(self, temp_image_file, minimal_png_bytes):
        image = load_image(temp_image_file)

        assert image.mime_type == "image/png"
        assert image.data == minimal_png_bytes

    def test_load_image_falls_back_to_extension(self, tmp_path):
        path = tmp_path / "photo.JPG"
        path.write_bytes(b"not really a jpeg")

        assert load_image(path).mime_type == "image/jpeg"

    def test_validate_image(self, make_image):
        image = make_image("dress")
        assert validate_image(image) is image

        with pytest.raises(ValidationError):
            validate_image(make_image("anim", "image/gif"))
        with pytest.raises(ValidationError):
            validate_image(Image(data=b"", mime_type="image/png"))

    def test_filter_supported(self, make_image):
        report = filter_supported([make_image("a"), make_image("b", "image/bmp")])

        assert report.accepted == [make_image("a")]
        assert report.rejected == 1
        assert "PNG, JPG, WEBP, HEIC, or HEIF" in report.message

    def test_filter_supported_all_valid(self, make_image):
        assert filter_supported([make_image("a")]).message is None


class TestModels:
    """Tests for progress and result models."""

    def test_progress_labels(self):
        compose = PipelineProgress(index=2, total=3, stage=Stage.COMPOSE)
        enhance = PipelineProgress(index=2, total=3, stage=Stage.ENHANCE)

        assert compose.label == "Generating try-on for item 2 of 3..."
        assert enhance.label == "Enhancing quality for item 2..."

    def test_result_pairs_garment_and_image(self, make_image):
        result = TryOnResult(garment=make_image("dress"), image=make_image("final"))

        assert result.garment == make_image("dress")
        assert result.image == make_image("final")


class TestConfig:
    """Tests for configuration loading."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        config = StudioConfig(_env_file=None)

        assert config.gemini_api_key is None
        assert config.gemini.image_model == "gemini-2.5-flash-image-preview"
        assert config.gemini.endpoint("m").endswith("/models/m:generateContent")

    def test_api_key_from_environment(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "secret")

        assert StudioConfig(_env_file=None).gemini_api_key == "secret"

    def test_setup_logger_is_idempotent(self):
        logger = setup_logger("tryon_studio.test")
        setup_logger("tryon_studio.test")

        assert len(logger.handlers) == 1
