"""Search result synthesis and presentation for a managed document index."""

__version__ = "0.1.0"
