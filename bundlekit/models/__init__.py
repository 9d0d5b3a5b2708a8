"""
bundlekit data models.

Message schemas, paths, entries and the manifest view. Modules and their
builder live in `bundlekit.models.module`, which depends on the loader service.
"""

from .bundle_config import BundleConfig, Bundletool, Compression, Optimizations, SplitDimension
from .entry import InMemoryModuleEntry, ModuleEntry, ModuleEntryStore
from .files import Assets, NativeLibraries, TargetedAssetsDirectory, TargetedNativeDirectory
from .manifest import (
    ANDROID_NAMESPACE_URI,
    DISTRIBUTION_NAMESPACE_URI,
    AndroidManifest,
    DeviceFeatureCondition,
    FusingAttribute,
    SdkConditionKind,
    SdkVersionCondition,
    UserCountriesCondition,
)
from .metadata import ModuleMetadata
from .resources import Package, ResourceTable
from .special_entries import SpecialModuleEntry
from .targeting import (
    DeviceFeature,
    DeviceFeatureTargeting,
    ModuleTargeting,
    SdkVersion,
    SdkVersionTargeting,
    UserCountriesTargeting,
    merge_module_targeting,
)
from .xml import XmlAttribute, XmlElement, XmlNamespace, XmlNode
from .zip_path import ZipPath

__all__ = [
    "BundleConfig",
    "Bundletool",
    "Compression",
    "Optimizations",
    "SplitDimension",
    "InMemoryModuleEntry",
    "ModuleEntry",
    "ModuleEntryStore",
    "Assets",
    "NativeLibraries",
    "TargetedAssetsDirectory",
    "TargetedNativeDirectory",
    "ANDROID_NAMESPACE_URI",
    "DISTRIBUTION_NAMESPACE_URI",
    "AndroidManifest",
    "DeviceFeatureCondition",
    "FusingAttribute",
    "SdkConditionKind",
    "SdkVersionCondition",
    "UserCountriesCondition",
    "ModuleMetadata",
    "Package",
    "ResourceTable",
    "SpecialModuleEntry",
    "DeviceFeature",
    "DeviceFeatureTargeting",
    "ModuleTargeting",
    "SdkVersion",
    "SdkVersionTargeting",
    "UserCountriesTargeting",
    "merge_module_targeting",
    "XmlAttribute",
    "XmlElement",
    "XmlNamespace",
    "XmlNode",
    "ZipPath",
]
