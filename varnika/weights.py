"""Weight engine: rendered fragment and ranking weight contributed by one rule."""

from typing import Tuple

from .models import GeneralKind, MatchKind, SymbolRule

# Starting weight of a suggestion created from the first token of a word
BASIC_WEIGHT = 10

# Exact rules gain (POSSIBILITY_PENALTY - EXACT), possibility rules gain nothing
POSSIBILITY_PENALTY = int(MatchKind.POSSIBILITY)

ZWNJ = "‌"  # zero width non-joiner
ZWJ = "‍"  # zero width joiner


def compute_step(
    base_weight: int,
    rule: SymbolRule,
    previous_char: str,
    total_tokens: int,
    position: int,
    joiner_glyph: str,
) -> Tuple[str, int]:
    """Compute the fragment and new weight of applying ``rule`` to a suggestion.

    Weight priority, highest first:
     1. position of the token in the word (earlier tokens weigh more)
     2. the rule's own weight
     3. exact rules over possibility rules

    A virama that follows a virama collapses to a ZWNJ so the output never
    carries two joiner glyphs in a row; otherwise the virama is emitted
    followed by a ZWNJ to stop the next character from forming a ligature.

    Args:
        base_weight: Weight of the suggestion being extended
        rule: Symbol rule to apply
        previous_char: Last character of the suggestion being extended
        total_tokens: Number of tokens in the word
        position: Index of the token being applied
        joiner_glyph: The script's virama glyph

    Returns:
        Tuple of (rendered fragment, new weight)
    """
    new_weight = (
        base_weight
        - rule.weight
        + (total_tokens - position)
        + (POSSIBILITY_PENALTY - int(rule.match_kind))
    )

    if rule.general_kind == GeneralKind.VIRAMA:
        if previous_char == joiner_glyph:
            value = ZWNJ
        else:
            value = rule.rendered_at(position) + ZWNJ
    else:
        value = rule.rendered_at(position)

    return value, new_weight
