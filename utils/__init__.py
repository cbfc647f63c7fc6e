"""Utilities module for the document index sync."""

from utils.logging_utils import configure_logging

__all__ = ["configure_logging"]
