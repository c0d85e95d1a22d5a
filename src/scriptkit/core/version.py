"""Version information for scriptkit."""

__version__ = "1.0.0"
