"""Dissectors that turn application-layer network payloads into readable text."""

__version__ = "1.0.0"