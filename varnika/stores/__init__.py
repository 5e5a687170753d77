"""Persistent stores backing the engine."""

from .base import SQLiteStore
from .dictionary import LearnedWordStore
from .patterns import PatternStore
from .schema import make_learnings_store

__all__ = ["SQLiteStore", "LearnedWordStore", "PatternStore", "make_learnings_store"]
