"""Data models for the try-on studio."""

from .image import Image
from .session import PipelineProgress, Stage, TryOnResult, UploadReport

__all__ = [
    "Image",
    "PipelineProgress",
    "Stage",
    "TryOnResult",
    "UploadReport",
]
