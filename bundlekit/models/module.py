"""
Bundle modules.

A BundleModule is the validated, immutable model of one module directory of an
app bundle. Modules are assembled with a BundleModuleBuilder: special files are
parsed as soon as they are added, and the manifest-derived metadata is computed
once, when the module is built.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from ..core.config import get_config
from ..core.exceptions import ValidationError
from ..core.logging import get_logger
from ..services.loader import ConfigMessageLoader
from .bundle_config import BundleConfig
from .entry import ModuleEntry, ModuleEntryStore
from .files import Assets, NativeLibraries
from .manifest import AndroidManifest
from .metadata import ModuleMetadata
from .resources import ResourceTable
from .special_entries import SpecialModuleEntry
from .xml import XmlNode
from .zip_path import ZipPath

logger = get_logger(__name__)

BASE_MODULE_NAME = "base"
_MODULE_NAME_PATTERN = re.compile(r"[A-Za-z][A-Za-z0-9_]*")


@dataclass(frozen=True)
class BundleModuleName:
    """Name of a module, unique within its bundle."""

    name: str

    def __post_init__(self) -> None:
        if not self.name or not _MODULE_NAME_PATTERN.fullmatch(self.name):
            raise ValidationError(
                message=f"Invalid module name '{self.name}'",
                field_name="name",
                expected_type="identifier",
                actual_value=self.name,
            )

    @classmethod
    def create(cls, name: str) -> BundleModuleName:
        return cls(name)

    @property
    def is_base(self) -> bool:
        return self.name == BASE_MODULE_NAME

    def __str__(self) -> str:
        return self.name


def is_included_in_fusing(
    name: BundleModuleName, manifest: AndroidManifest, default: bool
) -> bool:
    """Whether a module's content goes into fused (standalone/universal) APKs.

    The base module is always fused, whatever its manifest says. Other modules
    follow their dist:fusing attribute, or `default` when it is not declared.
    """
    if name.is_base:
        return True
    return manifest.fusing_attribute.resolve(default)


def build_module_metadata(name: BundleModuleName, manifest: AndroidManifest) -> ModuleMetadata:
    return ModuleMetadata(
        name=name.name,
        dependencies=manifest.dependencies,
        targeting=manifest.module_targeting(),
        is_instant=bool(manifest.is_instant),
        on_demand=bool(manifest.on_demand),
    )


@dataclass(frozen=True)
class BundleModule:
    """Immutable model of a single bundle module.

    Every module has a manifest. The entry store never holds any of the special
    files; those are only reachable through their typed accessors.
    """

    name: BundleModuleName
    bundle_config: BundleConfig
    android_manifest: AndroidManifest
    entry_store: ModuleEntryStore
    module_metadata: ModuleMetadata
    is_included_in_fusing: bool
    resource_table: ResourceTable | None = None
    native_config: NativeLibraries | None = None
    assets_config: Assets | None = None

    @staticmethod
    def builder() -> BundleModuleBuilder:
        return BundleModuleBuilder()

    @property
    def is_base_module(self) -> bool:
        return self.name.is_base

    @property
    def package_name(self) -> str:
        return self.android_manifest.package_name

    @property
    def entries(self) -> tuple[ModuleEntry, ...]:
        """Content entries in the order they were added."""
        return self.entry_store.entries

    def get_entry(self, path: str | ZipPath) -> ModuleEntry | None:
        return self.entry_store.get_entry(path)

    def find_entries_under_path(self, path: str | ZipPath) -> Iterator[ModuleEntry]:
        return self.entry_store.find_entries_under_path(path)


class BundleModuleBuilder:
    """Accumulates the parts of a module and validates them into a BundleModule.

    Special files are parsed when added, so malformed bytes are reported by
    `add_entry`/`add_entries`, not by `build`.
    """

    def __init__(self, loader: ConfigMessageLoader | None = None) -> None:
        self._loader = loader or ConfigMessageLoader()
        self._name: BundleModuleName | None = None
        self._bundle_config: BundleConfig | None = None
        self._android_manifest: XmlNode | None = None
        self._resource_table: ResourceTable | None = None
        self._native_config: NativeLibraries | None = None
        self._assets_config: Assets | None = None
        self._entries: list[ModuleEntry] = []
        self._fusing_default: bool | None = None
        self._built = False

    def set_name(self, name: BundleModuleName | str) -> BundleModuleBuilder:
        self._name = name if isinstance(name, BundleModuleName) else BundleModuleName.create(name)
        return self

    def set_bundle_config(self, bundle_config: BundleConfig) -> BundleModuleBuilder:
        self._bundle_config = bundle_config
        return self

    def set_android_manifest_proto(self, manifest: XmlNode) -> BundleModuleBuilder:
        """Use an already parsed manifest document instead of a manifest entry."""
        self._android_manifest = manifest
        return self

    def set_fusing_default(self, include_in_fusing: bool) -> BundleModuleBuilder:
        """Fusing eligibility of a non-base module that declares no dist:fusing."""
        self._fusing_default = include_in_fusing
        return self

    def add_entry(self, entry: ModuleEntry) -> BundleModuleBuilder:
        return self.add_entries([entry])

    def add_entries(self, entries: Iterable[ModuleEntry]) -> BundleModuleBuilder:
        """Add entries, parsing any special files among them immediately.

        Raises:
            DeserializationError: If a special file holds malformed content. No
                entry from the batch is added in that case.
        """
        loaded = self._loader.load(entries)
        for special, message in loaded.messages.items():
            if special is SpecialModuleEntry.ANDROID_MANIFEST:
                self._android_manifest = message
            elif special is SpecialModuleEntry.RESOURCE_TABLE:
                self._resource_table = message
            elif special is SpecialModuleEntry.NATIVE_LIBS_TABLE:
                self._native_config = message
            elif special is SpecialModuleEntry.ASSETS_TABLE:
                self._assets_config = message
        self._entries.extend(loaded.entries)
        return self

    def build(self) -> BundleModule:
        """Validate the accumulated parts and create the module.

        Raises:
            ValidationError: If required properties are missing, the manifest is
                not a <manifest> document, entry paths collide, or the builder
                was already used.
        """
        if self._built:
            raise ValidationError(message="Builder has already built a module")

        missing = []
        if self._name is None:
            missing.append("name")
        if self._android_manifest is None:
            missing.append("androidManifest")
        if missing:
            raise ValidationError(
                message=f"Missing required properties: {' '.join(missing)}",
                field_name=missing[0],
            )

        manifest = AndroidManifest(self._android_manifest)
        fusing_default = self._fusing_default
        if fusing_default is None:
            fusing_default = get_config().ingestion.include_in_fusing_by_default

        module = BundleModule(
            name=self._name,
            bundle_config=self._bundle_config or BundleConfig(),
            android_manifest=manifest,
            entry_store=ModuleEntryStore(self._entries),
            module_metadata=build_module_metadata(self._name, manifest),
            is_included_in_fusing=is_included_in_fusing(self._name, manifest, fusing_default),
            resource_table=self._resource_table,
            native_config=self._native_config,
            assets_config=self._assets_config,
        )
        self._built = True
        logger.debug(
            "Built bundle module",
            module=module.name.name,
            entries=len(module.entry_store),
            dependencies=len(module.module_metadata.dependencies),
            fused=module.is_included_in_fusing,
        )
        return module
