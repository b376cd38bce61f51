"""External service clients."""

from .gemini_client import GenerationClient

__all__ = ["GenerationClient"]
