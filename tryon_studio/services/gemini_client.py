"""Gemini API client for try-on, enhancement and recolor generation."""

import base64
import binascii
import logging
from typing import Any

import httpx

from ..config import GeminiConfig
from ..errors import GenerationBlocked, NoImageReturned, NoTextReturned, TransportError
from ..models import Image
from .prompts import (
    ENHANCE_PROMPT,
    TRYON_PREAMBLE,
    build_background_prompt,
    build_recolor_prompt,
    build_tryon_prompt,
)

logger = logging.getLogger(__name__)

# Finish reasons that count as a normal completion
NORMAL_FINISH_REASONS = frozenset({"STOP", "MAX_TOKENS"})


class GenerationClient:
    """Client for Gemini's generateContent endpoint.

    Each public operation issues exactly one request and funnels the reply
    through the same response interpretation, so blocked and empty replies
    fail the same way everywhere.
    """

    def __init__(
        self,
        config: GeminiConfig,
        api_key: str | None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.config = config
        self.api_key = api_key
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self.config.timeout,
                transport=self._transport,
            )
        return self._client

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    async def compose(self, person: Image, garment: Image, background: str = "") -> Image:
        """Dress the main subject of ``person`` in ``garment``.

        Args:
            person: Photo of the person to dress
            garment: Photo of the clothing item
            background: Replacement background description; empty keeps the original

        Returns:
            The composed image
        """
        parts = [
            {"text": TRYON_PREAMBLE},
            {"text": "This is the person_photo:"},
            _inline_part(person),
            {"text": "This is the item_photo:"},
            _inline_part(garment),
            {"text": build_tryon_prompt(background)},
        ]
        response = await self._generate(self.config.image_model, parts, image_output=True)
        return extract_image(response)

    async def enhance(self, image: Image) -> Image:
        """Upscale and clean up a generated image without changing its content."""
        parts = [{"text": ENHANCE_PROMPT}, _inline_part(image)]
        response = await self._generate(self.config.image_model, parts, image_output=True)
        return extract_image(response)

    async def recolor(self, garment: Image, color: str) -> Image:
        """Render ``garment`` in a new color on a plain white background."""
        parts = [
            {"text": build_recolor_prompt(color)},
            {"text": "This is the Base Item Image:"},
            _inline_part(garment),
        ]
        response = await self._generate(self.config.image_model, parts, image_output=True)
        return extract_image(response)

    async def expand_background_idea(self, idea: str) -> str:
        """Turn a short background idea into a descriptive prompt."""
        parts = [{"text": build_background_prompt(idea)}]
        response = await self._generate(self.config.text_model, parts, image_output=False)
        return extract_text(response)

    async def _generate(
        self,
        model: str,
        parts: list[dict[str, Any]],
        image_output: bool,
    ) -> dict[str, Any]:
        """POST one generateContent request and return the decoded JSON."""
        payload: dict[str, Any] = {"contents": [{"parts": parts}]}
        if image_output:
            payload["generationConfig"] = {"responseModalities": ["IMAGE", "TEXT"]}

        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["x-goog-api-key"] = self.api_key

        try:
            response = await self.client.post(
                self.config.endpoint(model),
                json=payload,
                headers=headers,
            )
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            logger.error("Gemini HTTP error %s for model %s", status, model)
            raise TransportError(
                f"Gemini API HTTP error: {status} - {exc.response.text[:500]}",
                status_code=status,
            ) from exc
        except httpx.RequestError as exc:
            logger.error("Network error calling Gemini model %s: %s", model, exc)
            raise TransportError(f"Network error calling Gemini API: {exc}") from exc
        except ValueError as exc:
            raise TransportError("Gemini API returned a non-JSON response") from exc

    async def close(self):
        """Close the HTTP client."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None


def _inline_part(image: Image) -> dict[str, Any]:
    return {"inline_data": {"mime_type": image.mime_type, "data": image.base64_data}}


def _candidate_parts(response: dict[str, Any]) -> list[dict[str, Any]]:
    """Check the termination signal and return the first candidate's parts.

    Raises:
        GenerationBlocked: The model stopped for a non-normal reason
    """
    candidates = response.get("candidates") or []
    if not candidates:
        block_reason = (response.get("promptFeedback") or {}).get("blockReason")
        if block_reason:
            categories = [
                rating["category"]
                for rating in response["promptFeedback"].get("safetyRatings") or []
                if rating.get("category")
            ]
            logger.warning("Prompt blocked: %s %s", block_reason, categories)
            raise GenerationBlocked(block_reason, categories)
        return []

    candidate = candidates[0]
    reason = candidate.get("finishReason") or "Unknown"
    if reason not in NORMAL_FINISH_REASONS:
        categories = [
            rating["category"]
            for rating in candidate.get("safetyRatings") or []
            if rating.get("category")
        ]
        logger.warning("Generation blocked: %s %s", reason, categories)
        raise GenerationBlocked(reason, categories)

    return (candidate.get("content") or {}).get("parts") or []


def extract_image(response: dict[str, Any]) -> Image:
    """Return the first image part of a generateContent response."""
    for part in _candidate_parts(response):
        # Accept both camelCase and snake_case keys
        inline = part.get("inlineData") or part.get("inline_data")
        if not inline or "data" not in inline:
            continue

        mime_type = inline.get("mimeType") or inline.get("mime_type") or "image/png"
        try:
            data = base64.b64decode(inline["data"], validate=True)
        except (binascii.Error, ValueError) as exc:
            raise NoImageReturned("Image generation failed. The model returned malformed image data.") from exc
        return Image(data=data, mime_type=mime_type)

    raise NoImageReturned()


def extract_text(response: dict[str, Any]) -> str:
    """Return the concatenated, stripped text parts of a response."""
    text = "".join(part.get("text", "") for part in _candidate_parts(response))
    text = text.strip()
    if not text:
        raise NoTextReturned()
    return text
