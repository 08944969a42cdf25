# Path: core/indexing/__init__.py
# Purpose: Package initializer for directory scanning utilities.
# Layer: core/indexing.
# Details: Exposes the synchronous and background scanners plus the extension filter.

from .scanner import SUPPORTED_EXTENSIONS, DirectoryScanner, is_supported_image
from .background import BackgroundScanner

__all__ = ["BackgroundScanner", "DirectoryScanner", "SUPPORTED_EXTENSIONS", "is_supported_image"]
