"""Error types surfaced by the try-on studio.

Every error carries a human-readable ``message`` and a machine-readable
``kind`` so callers can present a specific message without parsing text.
None of them are retried automatically.
"""


class TryOnError(Exception):
    """Base class for all studio failures."""

    kind = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.message, "error_kind": self.kind}


class ValidationError(TryOnError):
    """Bad input shape or format, caught before any external call."""

    kind = "validation"


class InvalidRequest(TryOnError):
    """Pipeline preconditions were not met."""

    kind = "invalid_request"


class GenerationBlocked(TryOnError):
    """The model stopped for a non-normal reason (safety, policy, ...)."""

    kind = "generation_blocked"

    def __init__(self, reason: str, categories: list[str] | None = None):
        self.reason = reason
        self.categories = list(categories or [])
        blocked = ", ".join(self.categories) or "none"
        super().__init__(
            f"Image generation was blocked. Reason: {reason}. "
            f"Blocked categories: {blocked}. Please try with different images."
        )

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["reason"] = self.reason
        data["categories"] = self.categories
        return data


class NoImageReturned(TryOnError):
    """The model finished normally but no image part was present."""

    kind = "no_image_returned"

    def __init__(self, message: str = "Image generation failed. No image data was returned by the model."):
        super().__init__(message)


class NoTextReturned(NoImageReturned):
    """The model finished normally but returned no text."""

    kind = "no_text_returned"

    def __init__(self, message: str = "Prompt expansion failed. No text was returned by the model."):
        super().__init__(message)


class TransportError(TryOnError):
    """Network or service-level failure while calling the model."""

    kind = "transport"

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
