"""Music distribution core: release lifecycle, streams, payments and search."""

__version__ = "0.1.0"
