# Path: config/__init__.py
# Purpose: Package initializer for configuration module.
# Layer: config.
# Details: Exposes settings models and logging setup for application-wide configuration.

from .log_setup import configure_logging
from .settings import AppSettings, DEFAULT_IMAGE_EXTENSIONS, GridSettings, ScanSettings

__all__ = ["AppSettings", "DEFAULT_IMAGE_EXTENSIONS", "GridSettings", "ScanSettings", "configure_logging"]
