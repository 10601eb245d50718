"""Bio Commander: a deterministic two-faction zone strategy engine."""

__version__ = "0.1.0"
