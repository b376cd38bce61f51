"""Session-scoped state stores."""

from .identity_sync import IdentitySyncStore

__all__ = ["IdentitySyncStore"]
