"""Internet-radio companion service: now-playing metadata and per-track ratings."""

__version__ = "0.1.0"
