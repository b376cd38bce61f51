"""FastAPI server for the try-on studio.

Stateless endpoints over the generation core. Images travel as base64
data URLs in both directions:
- person_photo / garment_photos: inputs for a try-on run
- garment_photo: input for palette and custom-color generation
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from tryon_studio.agents import ColorVariationEngine
from tryon_studio.config import load_config, setup_logger
from tryon_studio.errors import TryOnError
from tryon_studio.models import Image
from tryon_studio.pipeline import TryOnPipeline
from tryon_studio.services import GenerationClient
from tryon_studio.services.prompts import BACKGROUND_PRESETS
from tryon_studio.utils import validate_image

logger = logging.getLogger("tryon_studio.api")

app = FastAPI(
    title="Try-On Studio API",
    description="Virtual outfit try-on, color variations and image enhancement",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class TryOnRequest(BaseModel):
    """Request body for try-on generation."""
    person_photo: str  # Base64 data URL
    garment_photos: list[str] = Field(default_factory=list)  # Base64 data URLs, in order
    background: str = ""  # Empty keeps the original background


class GarmentResult(BaseModel):
    garment: str
    image: str


class ApiResponse(BaseModel):
    """Fields shared by every response."""
    success: bool
    error: str | None = None
    error_kind: str | None = None
    reason: str | None = None  # Set for generation_blocked
    categories: list[str] | None = None  # Set for generation_blocked


class TryOnResponse(ApiResponse):
    results: list[GarmentResult] = Field(default_factory=list)


class PaletteRequest(BaseModel):
    garment_photo: str


class PaletteResponse(ApiResponse):
    variations: list[str] = Field(default_factory=list)


class CustomColorRequest(BaseModel):
    garment_photo: str
    color: str


class CustomColorResponse(ApiResponse):
    image: str | None = None


class BackgroundRequest(BaseModel):
    idea: str


class BackgroundResponse(ApiResponse):
    background: str | None = None


# Shared client (created on first request)
_client: GenerationClient | None = None


def get_client() -> GenerationClient:
    """Get or create the generation client."""
    global _client
    if _client is None:
        config = load_config()  # Loads from .env automatically via pydantic-settings
        setup_logger(config=config.logging)
        _client = GenerationClient(config.gemini, config.gemini_api_key)
    return _client


def _decode(data_url: str, label: str) -> Image:
    return validate_image(Image.from_data_url(data_url), label)


def _failure(exc: Exception) -> dict:
    if isinstance(exc, TryOnError):
        logger.warning("Request failed (%s): %s", exc.kind, exc.message)
        return {"success": False, **exc.to_dict()}
    logger.exception("Unexpected error while handling request")
    return {"success": False, "error": str(exc), "error_kind": "internal"}


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "Try-On Studio API", "version": "1.0.0"}


@app.get("/health")
async def health():
    """Detailed health check."""
    client = get_client()
    return {
        "status": "ok" if client.is_configured else "degraded",
        "gemini": "configured" if client.is_configured else "missing api key",
    }


@app.get("/api/backgrounds")
async def backgrounds():
    """Background presets; an empty value keeps the original background."""
    return {"presets": [{"name": name, "value": value} for name, value in BACKGROUND_PRESETS.items()]}


@app.post("/api/tryon", response_model=TryOnResponse)
async def generate_tryon(request: TryOnRequest):
    """Dress the person in each garment, in order, then enhance each result."""
    try:
        person = _decode(request.person_photo, "full-body photo")
        garments = [_decode(photo, "garment photo") for photo in request.garment_photos]

        pipeline = TryOnPipeline(get_client())
        results = await pipeline.run(person, garments, request.background)

        return TryOnResponse(
            success=True,
            results=[
                GarmentResult(garment=result.garment.to_data_url(), image=result.image.to_data_url())
                for result in results
            ],
        )
    except Exception as e:
        return TryOnResponse(**_failure(e))


@app.post("/api/colors", response_model=PaletteResponse)
async def generate_palette(request: PaletteRequest):
    """Recolor a garment into the fixed five-color palette."""
    try:
        garment = _decode(request.garment_photo, "garment photo")
        variations = await ColorVariationEngine(get_client()).generate_palette(garment)
        return PaletteResponse(success=True, variations=[image.to_data_url() for image in variations])
    except Exception as e:
        return PaletteResponse(**_failure(e))


@app.post("/api/colors/custom", response_model=CustomColorResponse)
async def generate_custom_color(request: CustomColorRequest):
    """Recolor a garment to a free-text color."""
    try:
        garment = _decode(request.garment_photo, "garment photo")
        image = await ColorVariationEngine(get_client()).generate_one(garment, request.color)
        return CustomColorResponse(success=True, image=image.to_data_url())
    except Exception as e:
        return CustomColorResponse(**_failure(e))


@app.post("/api/background/expand", response_model=BackgroundResponse)
async def expand_background(request: BackgroundRequest):
    """Expand a short background idea into a descriptive prompt."""
    try:
        if not request.idea.strip():
            return BackgroundResponse(
                success=False,
                error="Please enter a background idea first.",
                error_kind="validation",
            )
        background = await get_client().expand_background_idea(request.idea)
        return BackgroundResponse(success=True, background=background)
    except Exception as e:
        return BackgroundResponse(**_failure(e))


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
