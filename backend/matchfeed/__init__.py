"""Discovery feed ranking service for campus dating."""

__version__ = "0.1.0"
