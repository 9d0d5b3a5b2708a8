"""Test configuration for bundlekit."""

import pytest

from bundlekit import BundleModule, BundleModuleName
from bundlekit.core.config import get_config
from bundlekit.models import BundleConfig, Bundletool
from bundlekit.testing import android_manifest


@pytest.fixture
def default_bundle_config():
    """Bundle config shared by all modules of a test bundle.

    Returns:
        BundleConfig: A config carrying only the producing tool version.
    """
    return BundleConfig(bundletool=Bundletool(version="1.0.0"))


@pytest.fixture
def minimal_module_builder(default_bundle_config):
    """Builder for a module named "testModule" with a minimal manifest.

    Args:
        default_bundle_config: Pytest fixture providing the bundle config.

    Returns:
        BundleModuleBuilder: A builder that can be built as is.
    """
    return (
        BundleModule.builder()
        .set_name(BundleModuleName.create("testModule"))
        .set_android_manifest_proto(android_manifest("com.test.app"))
        .set_bundle_config(default_bundle_config)
    )


@pytest.fixture
def fresh_config(monkeypatch):
    """Clear the cached configuration around a test.

    Yields:
        pytest.MonkeyPatch: Used by the test to set environment variables
            before calling get_config().
    """
    get_config.cache_clear()
    yield monkeypatch
    get_config.cache_clear()
