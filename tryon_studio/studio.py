"""Session facade tying the store, the color engine and the pipeline together."""

import logging

from .agents import ColorVariationEngine
from .config import StudioConfig
from .errors import InvalidRequest, ValidationError
from .models import Image, TryOnResult, UploadReport
from .pipeline import ProgressCallback, TryOnPipeline
from .services import GenerationClient
from .services.prompts import BACKGROUND_PRESETS
from .store import IdentitySyncStore
from .utils import filter_supported, validate_image

logger = logging.getLogger(__name__)


class TryOnStudio:
    """One user's in-memory try-on session.

    Holds the person photo, the background directive and the last results,
    and routes garment state through an IdentitySyncStore. Results of async
    calls are checked against the current selection before they are applied.
    """

    def __init__(self, client: GenerationClient):
        self.client = client
        self.store = IdentitySyncStore()
        self.colors = ColorVariationEngine(client)
        self.pipeline = TryOnPipeline(client)

        self.person_photo: Image | None = None
        self.background = ""
        self.results: list[TryOnResult] | None = None
        self.status = ""
        self._palettes_pending: set[Image] = set()

    @classmethod
    def from_config(cls, config: StudioConfig) -> "TryOnStudio":
        return cls(GenerationClient(config.gemini, config.gemini_api_key))

    @property
    def palette(self) -> tuple[Image, ...]:
        return self.store.palette

    @property
    def palette_pending(self) -> bool:
        """True while a palette for the single selected garment is being generated."""
        return self.store.single_selected in self._palettes_pending

    @property
    def can_generate(self) -> bool:
        return self.person_photo is not None and bool(self.store.selection)

    def set_person_photo(self, image: Image):
        """Replace the person photo; unsupported images leave the old one in place."""
        self.person_photo = validate_image(image, "full-body photo")

    def upload_garments(self, images: list[Image]) -> UploadReport:
        """Add the supported images to the catalog and report the rest."""
        report = filter_supported(images)
        if report.rejected:
            logger.warning(report.message)
        self.store.upload(report.accepted)
        return report

    async def toggle(self, garment: Image) -> tuple[Image, ...]:
        """Toggle a garment's selection and refresh the color palette."""
        self.store.toggle_select(garment)
        return await self.refresh_palette()

    async def refresh_palette(self) -> tuple[Image, ...]:
        """Generate a palette when a new single garment is selected.

        A palette that arrives after the selection moved on is dropped.
        """
        target = self.store.sync_palette()
        if target is not None:
            self._palettes_pending.add(target)
            try:
                palette = await self.colors.generate_palette(target)
            finally:
                self._palettes_pending.discard(target)
            self.store.apply_palette(target, palette)
        return self.store.palette

    def choose_variant(self, variant: Image) -> bool:
        """Swap the single selected garment for one of its variants."""
        current = self.store.single_selected
        if current is None:
            return False
        return self.store.swap(current, variant)

    async def apply_custom_color(self, color: str) -> Image | None:
        """Recolor the single selected garment and swap it in.

        Returns:
            The new variant, or None if nothing is selected or the selection
            changed while the variant was being generated

        Raises:
            InvalidRequest: The palette for the garment is still being generated
        """
        target = self.store.single_selected
        if target is None:
            return None
        if target in self._palettes_pending:
            raise InvalidRequest("Please wait for the color palette to finish generating.")

        variant = await self.colors.generate_one(target, color)
        if self.store.single_selected != target:
            logger.info("Discarding stale custom color for garment %s", target.digest)
            return None

        self.store.swap(target, variant)
        return variant

    def use_background_preset(self, name: str) -> str:
        try:
            self.background = BACKGROUND_PRESETS[name]
        except KeyError:
            raise ValidationError(f"Unknown background preset: {name}") from None
        return self.background

    async def expand_background(self, idea: str | None = None) -> str:
        """Expand a short background idea (default: the current one) in place."""
        idea = self.background if idea is None else idea
        if not idea.strip():
            raise ValidationError("Please enter a background idea first.")

        self.background = await self.client.expand_background_idea(idea)
        return self.background

    async def generate(self, on_progress: ProgressCallback | None = None) -> list[TryOnResult]:
        """Run the pipeline over the current selection.

        Previous results are cleared first and replaced only on success.
        """
        self.results = None

        def track(progress):
            self.status = progress.label
            if on_progress is not None:
                on_progress(progress)

        try:
            results = await self.pipeline.run(
                self.person_photo,
                list(self.store.selection),
                self.background,
                on_progress=track,
            )
        finally:
            self.status = ""

        self.results = results
        return results
