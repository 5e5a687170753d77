"""Data models for the transliteration engine."""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, Optional, Tuple


class MatchKind(IntEnum):
    """How canonical a symbol rule is.

    ``ALL`` is only used as a query scope; stored rules are either
    ``EXACT`` or ``POSSIBILITY``.
    """

    EXACT = 1
    POSSIBILITY = 2
    ALL = 3


class AcceptCondition(IntEnum):
    """Positional constraint on a symbol rule."""

    ANY = 0
    ONLY_AT_START = 1
    ONLY_IN_BETWEEN = 2
    ONLY_AT_END = 3


class GeneralKind(IntEnum):
    """Symbol type as stored in the symbol table."""

    VOWEL = 1
    CONSONANT = 2
    DEAD_CONSONANT = 3
    CONSONANT_VOWEL = 4
    NUMBER = 5
    SYMBOL = 6
    ANUSVARA = 7
    VISARGA = 8
    VIRAMA = 9
    OTHER = 10
    NON_JOINER = 11
    JOINER = 12
    PERIOD = 13


class TokenKind(IntEnum):
    """Kind of a matched unit of the input word."""

    LITERAL = 1
    AMBIGUOUS = 2


@dataclass(frozen=True)
class SymbolRule:
    """One entry of the symbol table."""

    pattern: str
    rendered_start: str  # value1: form used at word start
    rendered_mid: str  # value2: dependent form used inside a word
    weight: int = 0
    match_kind: MatchKind = MatchKind.EXACT
    accept_condition: AcceptCondition = AcceptCondition.ANY
    general_kind: GeneralKind = GeneralKind.OTHER
    id: Optional[int] = None
    tag: str = ""

    def rendered_at(self, position: int) -> str:
        """Return the glyph for this rule at ``position`` in the word.

        Vowels take their dependent sign once past the first position. A
        vowel without one (the inherent ``a``) renders as nothing there.
        """
        if position > 0 and self.general_kind == GeneralKind.VOWEL:
            return self.rendered_mid
        return self.rendered_start


@dataclass(frozen=True)
class Token:
    """A matched unit of the input word."""

    kind: TokenKind
    position: int  # index of the first input character covered
    text: str  # input characters covered
    rules: Tuple[SymbolRule, ...] = ()

    @classmethod
    def literal(cls, char: str, position: int) -> "Token":
        """Create a pass-through token."""
        return cls(kind=TokenKind.LITERAL, position=position, text=char)

    @classmethod
    def ambiguous(cls, rules, position: int, text: str) -> "Token":
        """Create a token carrying every rule matching ``text``."""
        return cls(
            kind=TokenKind.AMBIGUOUS,
            position=position,
            text=text,
            rules=tuple(rules),
        )

    @property
    def is_literal(self) -> bool:
        return self.kind == TokenKind.LITERAL

    @property
    def end(self) -> int:
        """Index of the last input character covered."""
        return self.position + len(self.text) - 1


@dataclass(frozen=True)
class Suggestion:
    """A candidate rendering of the input word."""

    text: str
    weight: int
    learned_on: int = 0  # unix timestamp of the last reinforcement, 0 if never

    def extended(self, fragment: str, weight: int) -> "Suggestion":
        """Return a new suggestion with ``fragment`` appended."""
        return Suggestion(self.text + fragment, weight, self.learned_on)

    def to_dict(self) -> dict:
        return {"text": self.text, "weight": self.weight, "learned_on": self.learned_on}


@dataclass(frozen=True)
class PatternMatch:
    """A hit from the pattern store."""

    matched_length: int  # number of input characters the stored pattern covers
    suggestion: Suggestion


@dataclass
class DictionaryResult:
    """Result of an exact/partial learned-word lookup."""

    suggestions: List[Suggestion] = field(default_factory=list)
    exact_match: bool = False
    longest_match_position: int = -1  # index of the last input character matched

    def __bool__(self) -> bool:
        return bool(self.suggestions)


@dataclass
class TransliterationResult:
    """Three independently ranked suggestion lists."""

    exact_match: List[Suggestion] = field(default_factory=list)
    candidates: List[Suggestion] = field(default_factory=list)
    greedy_exact: List[Suggestion] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not (self.exact_match or self.candidates or self.greedy_exact)

    def to_dict(self) -> dict:
        """Convert to dictionary for output."""
        return {
            "exact_match": [s.to_dict() for s in self.exact_match],
            "candidates": [s.to_dict() for s in self.candidates],
            "greedy_exact": [s.to_dict() for s in self.greedy_exact],
        }


@dataclass(frozen=True)
class LanguageRules:
    """Script constants derived from the symbol table at start-up."""

    joiner_glyph: str
    use_native_digits: bool = False  # fixed default, not derived from any source
