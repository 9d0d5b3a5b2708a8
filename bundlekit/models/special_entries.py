"""Reserved module paths that hold configuration messages instead of content."""

from __future__ import annotations

from enum import Enum

from ..core.serialization import Message
from .files import Assets, NativeLibraries
from .resources import ResourceTable
from .xml import XmlNode
from .zip_path import ZipPath


class SpecialModuleEntry(Enum):
    """A reserved path and the message type stored there."""

    ANDROID_MANIFEST = ("manifest/AndroidManifest.xml", XmlNode, True)
    ASSETS_TABLE = ("assets.pb", Assets, False)
    NATIVE_LIBS_TABLE = ("native.pb", NativeLibraries, False)
    RESOURCE_TABLE = ("resources.pb", ResourceTable, False)

    def __init__(self, path: str, message_type: type[Message], required: bool) -> None:
        self.path = ZipPath.create(path)
        self.message_type = message_type
        self.required = required

    @classmethod
    def for_path(cls, path: str | ZipPath) -> SpecialModuleEntry | None:
        path = ZipPath.create(path)
        for special in cls:
            if special.path == path:
                return special
        return None
