"""Certificate and domain expiry checker."""

__version__ = "1.0.0"
