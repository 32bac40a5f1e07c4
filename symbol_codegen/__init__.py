"""Symbol-aware source writers for code generators."""

__version__ = "0.1.0"
