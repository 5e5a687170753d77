"""Utility functions."""

from .text import last_character, strip_trailing

__all__ = ["last_character", "strip_trailing"]
