"""Sure-bet odds normalization and stake allocation."""

__version__ = "1.0.0"
