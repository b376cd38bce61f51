"""Virtual outfit try-on studio backed by a generative image model."""

from .agents import ColorVariationEngine
from .config import StudioConfig, load_config
from .errors import (
    GenerationBlocked,
    InvalidRequest,
    NoImageReturned,
    NoTextReturned,
    TransportError,
    TryOnError,
    ValidationError,
)
from .models import Image, PipelineProgress, Stage, TryOnResult, UploadReport
from .pipeline import TryOnPipeline
from .services import GenerationClient
from .store import IdentitySyncStore
from .studio import TryOnStudio

__all__ = [
    "ColorVariationEngine",
    "GenerationBlocked",
    "GenerationClient",
    "IdentitySyncStore",
    "Image",
    "InvalidRequest",
    "NoImageReturned",
    "NoTextReturned",
    "PipelineProgress",
    "Stage",
    "StudioConfig",
    "TransportError",
    "TryOnError",
    "TryOnPipeline",
    "TryOnResult",
    "TryOnStudio",
    "UploadReport",
    "ValidationError",
    "load_config",
]
