"""Services package for bundlekit."""

from .loader import ConfigMessageLoader

__all__ = ["ConfigMessageLoader"]
