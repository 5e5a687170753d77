"""Ranking of suggestions."""

from typing import Iterable, List

from .models import Suggestion


def rank(suggestions: Iterable[Suggestion]) -> List[Suggestion]:
    """Order suggestions by recency of learning, then by weight.

    The sort is stable: suggestions with equal ``learned_on`` and ``weight``
    keep the order they were produced in.

    Args:
        suggestions: Suggestions in discovery order

    Returns:
        New list, best first
    """
    return sorted(suggestions, key=lambda s: (-s.learned_on, -s.weight))
