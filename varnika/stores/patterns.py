"""Pattern store: whole-word and prefix shortcuts from input text to words."""

import logging
import time
from pathlib import Path
from typing import List, Union

from ..models import PatternMatch, Suggestion
from .base import SQLiteStore
from .dictionary import PREFIX_END
from .schema import LEARNINGS_SCHEMA

logger = logging.getLogger(__name__)


class PatternStore(SQLiteStore):
    """
    Lookups over ``patterns_content`` joined with ``words``.

    A pattern is raw input text (e.g. "malayalam") trained to map to a word.
    """

    def __init__(self, path: Union[str, Path], limit: int = 10):
        """
        Open the store, creating the schema if needed.

        Args:
            path: Path to the learnings file.
            limit: Maximum matches returned per lookup.
        """
        super().__init__(path)
        self.limit = limit
        self._ensure_schema(LEARNINGS_SCHEMA)

    def lookup(self, word: str) -> List[PatternMatch]:
        """
        Find stored patterns that are a prefix of ``word`` or that extend it.

        Args:
            word: Raw input word.

        Returns:
            Matches, longest pattern first.
        """
        if not word:
            return []

        rows = self._query(
            "SELECT p.pattern, w.word, w.weight, COALESCE(w.learned_on, 0) "
            "FROM patterns_content p JOIN words w ON w.id = p.word_id "
            "WHERE substr(?, 1, length(p.pattern)) = p.pattern "
            "OR (p.pattern > ? AND p.pattern < ?) "
            "ORDER BY LENGTH(p.pattern) DESC, w.weight DESC, p.rowid LIMIT ?",
            (word, word, word + PREFIX_END, self.limit),
        )
        return [
            PatternMatch(len(pattern), Suggestion(w, weight, learned_on))
            for pattern, w, weight, learned_on in rows
        ]

    def train(self, pattern: str, word: str) -> PatternMatch:
        """
        Map ``pattern`` to ``word``, adding the word if it is new.

        Args:
            pattern: Raw input text.
            word: Word in the target script.

        Returns:
            The stored match.
        """
        pattern = pattern.strip()
        word = word.strip()
        if not pattern or not word:
            raise ValueError("Pattern and word must be non-empty")

        self._execute(
            "INSERT INTO words (word, weight, learned_on) VALUES (?, 1, ?) "
            "ON CONFLICT(word) DO NOTHING",
            (word, int(time.time())),
        )
        word_id, weight, learned_on = self._query(
            "SELECT id, weight, COALESCE(learned_on, 0) FROM words WHERE word = ?",
            (word,),
        )[0]
        self._execute(
            "INSERT OR IGNORE INTO patterns_content (pattern, word_id, learned) VALUES (?, ?, 1)",
            (pattern, word_id),
        )
        logger.info(f"Trained {pattern!r} -> {word!r}")
        return PatternMatch(len(pattern), Suggestion(word, weight, learned_on))
