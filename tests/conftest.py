"""Shared fixtures: a small symbol table and an empty learnings file."""

from pathlib import Path

import pytest

from varnika.engine import Transliterator
from varnika.models import AcceptCondition, GeneralKind, MatchKind, SymbolRule
from varnika.stores import make_learnings_store
from varnika.symbol_table import SymbolTable, build_symbol_table, load_scheme

VIRAMA = "്"

SCHEMES_DIR = Path(__file__).resolve().parent.parent / "schemes"


def rule(pattern, value1, value2="", kind=GeneralKind.OTHER, **kwargs) -> SymbolRule:
    """Shorthand for building symbol rules in tests."""
    return SymbolRule(pattern, value1, value2, general_kind=kind, **kwargs)


TEST_RULES = [
    rule("a", "അ", kind=GeneralKind.VOWEL),
    rule("aa", "ആ", "ാ", kind=GeneralKind.VOWEL),
    rule("i", "ഇ", "ി", kind=GeneralKind.VOWEL),
    rule("ka", "ക", kind=GeneralKind.CONSONANT),
    rule("k", "ക്", kind=GeneralKind.DEAD_CONSONANT),
    rule("ma", "മ", kind=GeneralKind.CONSONANT),
    rule("m", "മ്", kind=GeneralKind.DEAD_CONSONANT),
    rule(
        "m",
        "ം",
        kind=GeneralKind.ANUSVARA,
        match_kind=MatchKind.POSSIBILITY,
        accept_condition=AcceptCondition.ONLY_AT_END,
    ),
    rule("la", "ല", kind=GeneralKind.CONSONANT),
    rule("la", "ള", kind=GeneralKind.CONSONANT, match_kind=MatchKind.POSSIBILITY, weight=1),
    rule("~", VIRAMA, kind=GeneralKind.VIRAMA),
]


@pytest.fixture
def vst_path(tmp_path):
    """Symbol table built from TEST_RULES."""
    return build_symbol_table(tmp_path / "test.vst", TEST_RULES, {"language": "test"})


@pytest.fixture
def learnings_path(tmp_path):
    """Empty learnings file."""
    return make_learnings_store(tmp_path / "test.vst.learnings")


@pytest.fixture
def symbol_table(vst_path):
    table = SymbolTable(vst_path)
    yield table
    table.close()


@pytest.fixture
def engine(vst_path, learnings_path):
    with Transliterator.open(vst_path, learnings_path) as transliterator:
        yield transliterator


@pytest.fixture
def ml_vst_path(tmp_path):
    """Symbol table compiled from the bundled Malayalam scheme."""
    metadata, rules = load_scheme(SCHEMES_DIR / "ml.yaml")
    return build_symbol_table(tmp_path / "ml.vst", rules, metadata)
