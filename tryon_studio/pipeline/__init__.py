"""Try-on generation pipeline."""

from .tryon_pipeline import ProgressCallback, TryOnPipeline

__all__ = ["ProgressCallback", "TryOnPipeline"]
