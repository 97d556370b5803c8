"""Android build artifact classification for CI deploy steps."""

__version__ = "0.1.0"
