"""Two-stage try-on pipeline over a list of selected garments."""

import logging
from typing import Callable

from ..errors import InvalidRequest
from ..models import Image, PipelineProgress, Stage, TryOnResult
from ..services import GenerationClient

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[PipelineProgress], None]


class TryOnPipeline:
    """Sequential try-on pipeline.

    Flow, for each selected garment in order:
    1. Compose the garment onto the person photo
    2. Enhance the composed image
    3. Collect (garment, enhanced image)

    Garments are processed one at a time so progress reads "item i of n".
    The run is fail-fast: the first error aborts it and nothing collected
    so far is returned.
    """

    def __init__(self, client: GenerationClient):
        self.client = client

    async def run(
        self,
        person: Image | None,
        garments: list[Image],
        background: str = "",
        on_progress: ProgressCallback | None = None,
    ) -> list[TryOnResult]:
        """Run the try-on pipeline.

        Args:
            person: Photo of the person to dress
            garments: Selected garments, processed in this order
            background: Background description; empty keeps the original
            on_progress: Called at every stage transition

        Returns:
            One TryOnResult per garment, in input order

        Raises:
            InvalidRequest: No person photo or no garments (no model call is made)
            TryOnError: The first stage failure of any garment
        """
        if person is None or not garments:
            raise InvalidRequest("Please upload a full-body photo and select at least one item.")

        total = len(garments)
        logger.info("Starting try-on run for %d garment(s)", total)

        results: list[TryOnResult] = []
        for index, garment in enumerate(garments, start=1):
            self._report(on_progress, PipelineProgress(index=index, total=total, stage=Stage.COMPOSE))
            composed = await self.client.compose(person, garment, background)

            self._report(on_progress, PipelineProgress(index=index, total=total, stage=Stage.ENHANCE))
            enhanced = await self.client.enhance(composed)

            results.append(TryOnResult(garment=garment, image=enhanced))
            logger.info("Finished item %d of %d (garment %s)", index, total, garment.digest)

        return results

    def _report(self, on_progress: ProgressCallback | None, progress: PipelineProgress):
        logger.info(progress.label)
        if on_progress is not None:
            on_progress(progress)
