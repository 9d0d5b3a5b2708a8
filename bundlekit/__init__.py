"""
bundlekit: ingestion model for Android App Bundle modules.

Turns the raw entries of a bundle module into a validated, immutable
BundleModule: parsed special configuration files, a queryable manifest,
module metadata and path queries over the module content.
"""

from .core.exceptions import BundleKitError, DeserializationError, ValidationError
from .core.logging import setup_logging
from .models.module import (
    BASE_MODULE_NAME,
    BundleModule,
    BundleModuleBuilder,
    BundleModuleName,
    is_included_in_fusing,
)

__version__ = "1.0.0"
__author__ = "bundlekit Team"

__all__ = [
    "BundleKitError",
    "DeserializationError",
    "ValidationError",
    "BASE_MODULE_NAME",
    "BundleModule",
    "BundleModuleBuilder",
    "BundleModuleName",
    "is_included_in_fusing",
    "setup_logging",
]
