"""Build macOS application bundles and package them as DMG disk images."""

__version__ = "0.1.0"