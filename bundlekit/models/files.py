"""
Native-library and asset indices stored at native.pb and assets.pb.

Each index lists the module directories that hold targeted content, along with
the targeting dimension the directory name encodes.
"""

from __future__ import annotations

from pydantic import Field

from ..core.serialization import Message


class Abi(Message):
    """CPU architecture, e.g. "x86_64" or "arm64-v8a"."""

    alias: str = Field(default="", description="ABI name as used in lib/<abi> directories")


class NativeDirectoryTargeting(Message):
    abi: Abi | None = None


class TargetedNativeDirectory(Message):
    """A lib/<abi> directory and its ABI targeting."""

    path: str = Field(default="", description="Module-relative directory path")
    targeting: NativeDirectoryTargeting | None = None


class NativeLibraries(Message):
    """Index of native library directories in a module."""

    directory: tuple[TargetedNativeDirectory, ...] = ()


class AssetsDirectoryTargeting(Message):
    language: tuple[str, ...] = Field(default=(), description="Language codes from #lang_ suffixes")
    texture_compression_format: tuple[str, ...] = Field(
        default=(), description="Formats from #tcf_ suffixes, e.g. ASTC or ETC2"
    )


class TargetedAssetsDirectory(Message):
    """An assets/ subdirectory and its targeting."""

    path: str = Field(default="", description="Module-relative directory path")
    targeting: AssetsDirectoryTargeting | None = None


class Assets(Message):
    """Index of targeted asset directories in a module."""

    directory: tuple[TargetedAssetsDirectory, ...] = ()
