"""Configuration management for the try-on studio."""

import logging

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings


class GeminiConfig(BaseModel):
    """Gemini generateContent connection settings."""
    base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    image_model: str = "gemini-2.5-flash-image-preview"
    text_model: str = "gemini-2.5-flash"
    timeout: float = 120.0

    def endpoint(self, model: str) -> str:
        return f"{self.base_url}/models/{model}:generateContent"


class LoggingConfig(BaseModel):
    """Console logging settings."""
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class StudioConfig(BaseSettings):
    """Main studio configuration."""

    # Loaded from GEMINI_API_KEY in the environment or .env
    gemini_api_key: str | None = None

    # Sub-configs
    gemini: GeminiConfig = Field(default_factory=GeminiConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    class Config:
        env_file = ".env"
        env_prefix = ""
        env_nested_delimiter = "__"
        extra = "ignore"


def load_config() -> StudioConfig:
    """Load configuration from environment and defaults."""
    return StudioConfig()


def setup_logger(
    name: str = "tryon_studio",
    config: LoggingConfig | None = None,
) -> logging.Logger:
    """Attach a single console handler to the package logger.

    Calling this more than once leaves the existing handler in place.
    """
    config = config or LoggingConfig()
    logger = logging.getLogger(name)
    logger.setLevel(config.level.upper())

    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(config.format))
    logger.addHandler(handler)

    return logger
