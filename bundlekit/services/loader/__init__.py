"""Config Message Loader service."""

from .service import ConfigMessageLoader, LoadedEntries

__all__ = ["ConfigMessageLoader", "LoadedEntries"]
