"""
Config Message Loader.

Separates the special configuration files of a module from its content entries
and parses each special file into its typed message.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from ...core.exceptions import DeserializationError
from ...core.logging import get_logger
from ...core.serialization import Message, parse_message
from ...models.entry import ModuleEntry
from ...models.special_entries import SpecialModuleEntry
from ...models.zip_path import ZipPath

logger = get_logger(__name__)


@dataclass
class LoadedEntries:
    """Result of splitting a batch of entries.

    `messages` only has keys for special files that were present; a missing key
    means the file was absent, which is different from a present default message.
    """

    messages: dict[SpecialModuleEntry, Message] = field(default_factory=dict)
    entries: list[ModuleEntry] = field(default_factory=list)


class ConfigMessageLoader:
    """Routes special-path entries to their parsers.

    The loader holds no state between calls and can be shared across threads.
    """

    def is_special(self, path: str | ZipPath) -> bool:
        return SpecialModuleEntry.for_path(path) is not None

    def parse_entry(self, special: SpecialModuleEntry, entry: ModuleEntry) -> Message:
        """Parse the content of a special entry.

        Args:
            special: Which special file the entry is.
            entry: The entry holding the serialized message.

        Returns:
            The parsed message.

        Raises:
            DeserializationError: If the content is not a valid message of the
                expected type.
        """
        try:
            message = parse_message(
                special.message_type, entry.get_content(), path=str(entry.path)
            )
        except DeserializationError as e:
            logger.warning(
                "Malformed special file",
                path=str(entry.path),
                message_type=special.message_type.__name__,
                error=e.message,
            )
            raise
        logger.debug("Parsed special file", path=str(entry.path), special=special.name)
        return message

    def load(self, entries: Iterable[ModuleEntry]) -> LoadedEntries:
        """Split entries into parsed special messages and remaining content.

        Parsing fails fast on the first malformed special file. When a special
        path occurs more than once, the last occurrence wins.

        Args:
            entries: Raw module entries in archive order.

        Returns:
            The parsed messages and the non-special entries, in input order.
        """
        loaded = LoadedEntries()
        for entry in entries:
            special = SpecialModuleEntry.for_path(entry.path)
            if special is None:
                loaded.entries.append(entry)
                continue
            loaded.messages[special] = self.parse_entry(special, entry)
        return loaded
