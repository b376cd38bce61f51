"""Color Variation Engine - recolors a single garment into a fixed palette."""

import asyncio
import logging

from ..errors import ValidationError
from ..models import Image
from ..services import GenerationClient

logger = logging.getLogger(__name__)


# (swatch name, directive sent to the model), in display order
PALETTE_COLORS = (
    ("red", "a vibrant red"),
    ("blue", "a deep royal blue"),
    ("green", "a forest green"),
    ("black", "a classic solid black"),
    ("yellow", "a sunny yellow"),
)


class ColorVariationEngine:
    """Generates recolored renditions of one garment image.

    The palette is all-or-nothing: either every swatch is returned, in
    palette order, or the first failure is raised.
    """

    def __init__(self, client: GenerationClient):
        self.client = client

    @property
    def swatch_names(self) -> list[str]:
        return [name for name, _ in PALETTE_COLORS]

    async def generate_palette(self, garment: Image) -> list[Image]:
        """Recolor ``garment`` into every palette color concurrently.

        Returns:
            One image per palette color, in palette order

        Raises:
            TryOnError: The first failure in palette order, raised only once
                every recolor call has settled
        """
        logger.info("Generating %d-color palette for garment %s", len(PALETTE_COLORS), garment.digest)

        outcomes = await asyncio.gather(
            *(self.client.recolor(garment, directive) for _, directive in PALETTE_COLORS),
            return_exceptions=True,
        )

        for (name, _), outcome in zip(PALETTE_COLORS, outcomes):
            if isinstance(outcome, BaseException):
                logger.warning("Palette failed on %s for garment %s: %s", name, garment.digest, outcome)
                raise outcome

        logger.info("Palette ready for garment %s", garment.digest)
        return list(outcomes)

    async def generate_one(self, garment: Image, color: str) -> Image:
        """Recolor ``garment`` to a free-text color description."""
        if not color.strip():
            raise ValidationError("Please enter a color first.")

        logger.info("Generating custom color %r for garment %s", color, garment.digest)
        return await self.client.recolor(garment, color)
