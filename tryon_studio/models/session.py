"""Session, progress and result models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field

from .image import Image


class Stage(str, Enum):
    """The two sequential model calls made per garment."""

    COMPOSE = "compose"
    ENHANCE = "enhance"


class PipelineProgress(BaseModel):
    """Status of a try-on run at a stage transition."""

    index: int = Field(ge=1, description="1-based position of the garment being processed")
    total: int = Field(ge=1)
    stage: Stage

    @computed_field
    @property
    def label(self) -> str:
        """Human status line for the current stage."""
        if self.stage is Stage.COMPOSE:
            return f"Generating try-on for item {self.index} of {self.total}..."
        return f"Enhancing quality for item {self.index}..."


class TryOnResult(BaseModel):
    """A source garment paired with its final rendered image."""

    model_config = ConfigDict(frozen=True)

    garment: Image
    image: Image


class UploadReport(BaseModel):
    """Outcome of validating a batch of uploaded images."""

    accepted: list[Image] = Field(default_factory=list)
    rejected: int = 0

    @computed_field
    @property
    def message(self) -> str | None:
        """User-facing note about dropped files, if any."""
        if not self.rejected:
            return None
        return (
            f"{self.rejected} image(s) had an unsupported format and were not uploaded. "
            "Please use PNG, JPG, WEBP, HEIC, or HEIF."
        )
