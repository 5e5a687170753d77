"""Learned-word store: previously accepted transliterations."""

import logging
import time
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

from ..models import DictionaryResult, Suggestion, Token
from .base import SQLiteStore
from .schema import LEARNINGS_SCHEMA

logger = logging.getLogger(__name__)

# Sorts after every other code point, so [prefix, prefix + PREFIX_END)
# is the range of strings starting with prefix.
PREFIX_END = "\U0010ffff"


class LearnedWordStore(SQLiteStore):
    """
    Exact and prefix lookups over the ``words`` table of a learnings file.

    Words are matched on their rendered (target script) form, so lookups take
    the tokenized input and render it rule by rule.
    """

    def __init__(self, path: Union[str, Path], more_limit: int = 10):
        """
        Open the store, creating the schema if needed.

        Args:
            path: Path to the learnings file.
            more_limit: Maximum completions returned per word by lookup_more.
        """
        super().__init__(path)
        self.more_limit = more_limit
        self._ensure_schema(LEARNINGS_SCHEMA)

    def _first_with_prefix(self, prefix: str) -> Optional[Tuple[str, int, int]]:
        """Smallest stored word starting with ``prefix``, if any."""
        rows = self._query(
            "SELECT word, weight, COALESCE(learned_on, 0) FROM words "
            "WHERE word >= ? AND word < ? ORDER BY word LIMIT 1",
            (prefix, prefix + PREFIX_END),
        )
        return rows[0] if rows else None

    def lookup(self, tokens: Sequence[Token]) -> DictionaryResult:
        """
        Find the longest prefix of the tokenized word that is a learned word.

        Renderings are grown token by token and pruned to those that begin at
        least one stored word; the walk stops when none survive.

        Args:
            tokens: Full tokenization of the input word.

        Returns:
            DictionaryResult with the learned words matching the longest
            prefix, whether that prefix is the whole word, and the index of
            its last input character.
        """
        result = DictionaryResult()
        if not tokens:
            return result

        frontier = [""]
        for i, token in enumerate(tokens):
            if token.is_literal:
                renderings = [till + token.text for till in frontier]
            else:
                renderings = [
                    till + rule.rendered_at(i) for till in frontier for rule in token.rules
                ]
            renderings = list(dict.fromkeys(renderings))

            surviving = []
            found = []
            for rendering in renderings:
                row = self._first_with_prefix(rendering)
                if row is None:
                    continue
                surviving.append(rendering)
                word, weight, learned_on = row
                if word == rendering:
                    found.append(Suggestion(word, weight, learned_on))

            if not surviving:
                break
            if found:
                result.suggestions = found
                result.longest_match_position = token.end
            frontier = surviving

        result.exact_match = bool(result.suggestions) and (
            result.longest_match_position == tokens[-1].end
        )
        return result

    def lookup_more(self, suggestions: Sequence[Suggestion]) -> List[List[Suggestion]]:
        """
        Learned words that extend each suggestion.

        Args:
            suggestions: Words to complete.

        Returns:
            One list per input suggestion, most recently learned first.
        """
        results = []
        for sug in suggestions:
            rows = self._query(
                "SELECT word, weight, COALESCE(learned_on, 0) FROM words "
                "WHERE word > ? AND word < ? "
                "ORDER BY learned_on DESC, weight DESC, word LIMIT ?",
                (sug.text, sug.text + PREFIX_END, self.more_limit),
            )
            results.append([Suggestion(w, weight, learned_on) for w, weight, learned_on in rows])
        return results

    def get(self, word: str) -> Optional[Suggestion]:
        """Return the learned word, or None."""
        rows = self._query(
            "SELECT word, weight, COALESCE(learned_on, 0) FROM words WHERE word = ?",
            (word,),
        )
        if not rows:
            return None
        w, weight, learned_on = rows[0]
        return Suggestion(w, weight, learned_on)

    def learn(
        self,
        word: str,
        weight: Optional[int] = None,
        learned_on: Optional[int] = None,
    ) -> Suggestion:
        """
        Store a word, or reinforce it if already known.

        Args:
            word: Word in the target script.
            weight: Explicit weight; by default new words start at 1 and
                known words gain 1.
            learned_on: Unix timestamp, defaults to now.

        Returns:
            The stored suggestion.
        """
        word = word.strip()
        if not word:
            raise ValueError("Cannot learn an empty word")
        learned_on = int(time.time()) if learned_on is None else learned_on

        if weight is None:
            self._execute(
                "INSERT INTO words (word, weight, learned_on) VALUES (?, 1, ?) "
                "ON CONFLICT(word) DO UPDATE SET weight = weight + 1, "
                "learned_on = excluded.learned_on",
                (word, learned_on),
            )
        else:
            self._execute(
                "INSERT INTO words (word, weight, learned_on) VALUES (?, ?, ?) "
                "ON CONFLICT(word) DO UPDATE SET weight = excluded.weight, "
                "learned_on = excluded.learned_on",
                (word, weight, learned_on),
            )
        logger.info(f"Learned {word!r}")
        return self.get(word)
