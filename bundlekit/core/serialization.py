"""
Binary codec for configuration messages.

Messages are pydantic models packed as MessagePack maps of their JSON-mode
dump. Parsing validates the unpacked map against the model schema, so bytes
that are not a well-formed map of the expected shape never produce a message.
Zero bytes decode as the default message, the same as an empty map.
"""

from __future__ import annotations

from typing import Any, TypeVar

import msgpack
from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from .exceptions import BundleKitError, DeserializationError

T = TypeVar("T", bound=BaseModel)


class Message(BaseModel):
    """Base for immutable, binary-serializable configuration messages."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    def to_bytes(self) -> bytes:
        """Serialize this message to its binary form."""
        return serialize_message(self)

    @classmethod
    def from_bytes(cls: type[T], data: bytes) -> T:
        """Parse a message of this type from its binary form."""
        return parse_message(cls, data)


def serialize_message(message: BaseModel) -> bytes:
    """Serialize a message to MessagePack bytes.

    Args:
        message: Model instance to serialize.

    Returns:
        The packed bytes.

    Raises:
        BundleKitError: If the message nests deeper than the encoder allows
            (a few hundred levels, e.g. a very deep XML tree).
    """
    try:
        return msgpack.packb(message.model_dump(mode="json"), use_bin_type=True)
    except (ValueError, RecursionError) as e:
        raise BundleKitError(
            message=f"Cannot serialize {type(message).__name__}: message nesting too deep",
            cause=e,
        ) from e


def parse_message(message_type: type[T], data: bytes, path: str = "") -> T:
    """Parse MessagePack bytes into a message of the given type.

    Args:
        message_type: Model class the payload must conform to.
        data: Raw bytes. Empty bytes are the default message.
        path: Archive path the bytes were read from, for error reporting.

    Returns:
        The parsed message.

    Raises:
        DeserializationError: If the bytes are not a valid encoding of the type.
    """
    type_name = message_type.__name__
    payload: Any = {}
    if data:
        try:
            payload = msgpack.unpackb(data, raw=False)
        except (msgpack.UnpackException, ValueError) as e:
            raise DeserializationError(
                message="Malformed binary payload",
                path=path,
                message_type=type_name,
                cause=e,
            ) from e

    if not isinstance(payload, dict):
        raise DeserializationError(
            message=f"Expected a message map, got {type(payload).__name__}",
            path=path,
            message_type=type_name,
        )

    try:
        return message_type.model_validate(payload)
    except PydanticValidationError as e:
        raise DeserializationError(
            message=f"Payload does not match schema ({e.error_count()} errors)",
            path=path,
            message_type=type_name,
            cause=e,
        ) from e
