"""Core infrastructure components for bundlekit."""

from .config import Config, IngestionConfig, get_config
from .exceptions import BundleKitError, DeserializationError, ValidationError
from .logging import get_logger, setup_logging
from .serialization import Message, parse_message, serialize_message

__all__ = [
    "Config",
    "IngestionConfig",
    "get_config",
    "BundleKitError",
    "DeserializationError",
    "ValidationError",
    "get_logger",
    "setup_logging",
    "Message",
    "parse_message",
    "serialize_message",
]
