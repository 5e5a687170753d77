"""Suggestion expander: turns a token sequence into weighted renderings."""

import logging
from typing import List, Sequence

from .models import (
    AcceptCondition,
    LanguageRules,
    MatchKind,
    Suggestion,
    SymbolRule,
    Token,
)
from .utils.text import last_character, strip_trailing
from .weights import BASIC_WEIGHT, compute_step

logger = logging.getLogger(__name__)


def position_state(index: int, total: int) -> AcceptCondition:
    """Accept condition that a token at ``index`` of ``total`` satisfies."""
    if index == 0:
        return AcceptCondition.ONLY_AT_START
    if index + 1 == total:
        return AcceptCondition.ONLY_AT_END
    return AcceptCondition.ONLY_IN_BETWEEN


class SuggestionExpander:
    """Expands tokens into every rendering their ambiguous rules allow.

    Each in-progress suggestion is an immutable value; branching builds a new
    suggestion from the pre-extension one, so branches never share state.
    """

    def __init__(self, language_rules: LanguageRules):
        """Initialize expander.

        Args:
            language_rules: Script constants (joiner glyph)
        """
        self.language_rules = language_rules

    def surviving_rules(
        self, token: Token, state: AcceptCondition, greedy_only: bool
    ) -> List[SymbolRule]:
        """Rules of ``token`` allowed at ``state``, in table order."""
        rules = []
        for rule in token.rules:
            if greedy_only and rule.match_kind == MatchKind.POSSIBILITY:
                continue
            if (
                rule.accept_condition != AcceptCondition.ANY
                and rule.accept_condition != state
            ):
                continue
            rules.append(rule)
        return rules

    def expand(
        self,
        tokens: Sequence[Token],
        greedy_only: bool = False,
        partial: bool = False,
    ) -> List[Suggestion]:
        """Expand tokens into rendered suggestions.

        Args:
            tokens: Full tokenization of a word (or of a word suffix)
            greedy_only: Only use exact rules
            partial: The tokens continue an already rendered prefix, so the
                first token is rendered in its mid-word form

        Returns:
            Unsorted suggestions; with k ambiguous tokens of m surviving rules
            each, up to m**k of them
        """
        results: List[Suggestion] = []
        total = len(tokens)
        joiner = self.language_rules.joiner_glyph

        for i, token in enumerate(tokens):
            if token.is_literal:
                results = [s.extended(token.text, s.weight) for s in results]
                continue

            rules = self.surviving_rules(token, position_state(i, total), greedy_only)

            if i == 0:
                for rule in rules:
                    value = rule.rendered_at(1 if partial else 0)
                    results.append(Suggestion(value, BASIC_WEIGHT - rule.weight, 0))
                continue

            if not rules:
                continue

            first, others = rules[0], rules[1:]
            branches: List[Suggestion] = []
            for j, sug in enumerate(results):
                previous = last_character(sug.text)

                value, weight = compute_step(sug.weight, first, previous, total, i, joiner)
                results[j] = sug.extended(value, weight)

                for rule in others:
                    value, weight = compute_step(sug.weight, rule, previous, total, i, joiner)
                    branches.append(sug.extended(value, weight))
            results.extend(branches)

        return results

    def extend_with_suffix(
        self, tokens: Sequence[Token], seeds: Sequence[Suggestion]
    ) -> List[Suggestion]:
        """Complete prefix suggestions with every rendering of a word suffix.

        Literal characters at the start of the suffix are appended to every
        seed as they are. When the suffix starts with a symbol instead, a
        trailing virama on a seed is dropped before joining, since the
        suffix supplies its own vowel sign or virama.

        Args:
            tokens: Tokenization of the unmatched suffix
            seeds: Suggestions covering the matched prefix

        Returns:
            Combined suggestions; each seed joined with the first suffix
            rendering in place, the other combinations appended after
        """
        lead_count = 0
        while lead_count < len(tokens) and tokens[lead_count].is_literal:
            lead_count += 1
        lead = "".join(t.text for t in tokens[:lead_count])

        rest = self.expand(tokens[lead_count:], greedy_only=False, partial=not lead)
        if not rest:
            if not lead:
                logger.debug(f"Suffix {''.join(t.text for t in tokens)!r} produced no suggestions")
                return list(seeds)
            return [seed.extended(lead, seed.weight) for seed in seeds]

        joiner = self.language_rules.joiner_glyph
        results: List[Suggestion] = []
        branches: List[Suggestion] = []
        for seed in seeds:
            till = seed.text + lead if lead else strip_trailing(seed.text, joiner)
            results.append(Suggestion(till + rest[0].text, seed.weight + rest[0].weight, seed.learned_on))
            for sug in rest[1:]:
                branches.append(Suggestion(till + sug.text, seed.weight + sug.weight, seed.learned_on))
        return results + branches
