"""Hash Browns: a content-addressable text store served over HTTP."""

__version__ = "0.1.0"
