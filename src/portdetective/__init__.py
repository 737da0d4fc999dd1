"""Port Detective — find and stop the process that owns a network port."""

__version__ = "0.1.0"
