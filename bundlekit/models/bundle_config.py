"""
Bundle-wide build options.

The bundle config is supplied by the bundle reader and handed to every module
unchanged. Module ingestion itself does not interpret it.
"""

from __future__ import annotations

from enum import Enum

from pydantic import Field

from ..core.serialization import Message


class SplitDimensionValue(str, Enum):
    """Dimensions along which split APKs can be generated."""

    ABI = "ABI"
    SCREEN_DENSITY = "SCREEN_DENSITY"
    LANGUAGE = "LANGUAGE"
    TEXTURE_COMPRESSION_FORMAT = "TEXTURE_COMPRESSION_FORMAT"


class SplitDimension(Message):
    value: SplitDimensionValue
    negate: bool = Field(default=False, description="Disable splitting along this dimension")


class Optimizations(Message):
    split_dimension: tuple[SplitDimension, ...] = ()


class Compression(Message):
    uncompressed_glob: tuple[str, ...] = Field(
        default=(), description="Glob patterns of entries stored uncompressed in generated APKs"
    )


class Bundletool(Message):
    version: str = Field(default="", description="Version of the tool that built the bundle")


class BundleConfig(Message):
    """Build options of the whole bundle."""

    bundletool: Bundletool | None = None
    optimizations: Optimizations | None = None
    compression: Compression | None = None
