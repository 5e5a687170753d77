"""Tests for the learned-word and pattern stores."""

import pytest

from varnika.errors import StoreUnavailable
from varnika.models import PatternMatch, Suggestion
from varnika.stores import LearnedWordStore, PatternStore


@pytest.fixture
def dictionary(learnings_path):
    store = LearnedWordStore(learnings_path)
    yield store
    store.close()


@pytest.fixture
def patterns(learnings_path):
    store = PatternStore(learnings_path)
    yield store
    store.close()


class TestLearn:
    """Tests for LearnedWordStore.learn and get."""

    def test_new_word(self, dictionary):
        sug = dictionary.learn("മല", learned_on=100)

        assert sug == Suggestion("മല", 1, 100)
        assert dictionary.get("മല") == sug

    def test_relearning_reinforces(self, dictionary):
        dictionary.learn("മല", learned_on=100)
        sug = dictionary.learn("മല", learned_on=200)

        assert sug.weight == 2
        assert sug.learned_on == 200

    def test_explicit_weight(self, dictionary):
        dictionary.learn("മല", learned_on=100)

        assert dictionary.learn("മല", weight=7, learned_on=100).weight == 7

    def test_defaults_to_now(self, dictionary):
        assert dictionary.learn("മല").learned_on > 0

    def test_empty_word(self, dictionary):
        with pytest.raises(ValueError):
            dictionary.learn("  ")

    def test_get_unknown(self, dictionary):
        assert dictionary.get("മല") is None


class TestDictionaryLookup:
    """Tests for LearnedWordStore.lookup."""

    def test_nothing_learned(self, dictionary, symbol_table):
        result = dictionary.lookup(symbol_table.tokenize("mala"))

        assert not result
        assert result.exact_match is False
        assert result.longest_match_position == -1

    def test_exact(self, dictionary, symbol_table):
        dictionary.learn("മല", learned_on=100)

        result = dictionary.lookup(symbol_table.tokenize("mala"))

        assert result.suggestions == [Suggestion("മല", 1, 100)]
        assert result.exact_match is True
        assert result.longest_match_position == 3

    def test_partial(self, dictionary, symbol_table):
        """Test only a learned prefix of the word matches."""
        dictionary.learn("മല", learned_on=100)

        result = dictionary.lookup(symbol_table.tokenize("malaka"))

        assert [s.text for s in result.suggestions] == ["മല"]
        assert result.exact_match is False
        assert result.longest_match_position == 3

    def test_longest_prefix_wins(self, dictionary, symbol_table):
        dictionary.learn("മ", learned_on=100)
        dictionary.learn("മല", learned_on=100)

        result = dictionary.lookup(symbol_table.tokenize("malaka"))

        assert [s.text for s in result.suggestions] == ["മല"]

    def test_matches_possibility_renderings(self, dictionary, symbol_table):
        dictionary.learn("മള", learned_on=100)

        result = dictionary.lookup(symbol_table.tokenize("mala"))

        assert [s.text for s in result.suggestions] == ["മള"]
        assert result.exact_match is True

    def test_empty_tokens(self, dictionary):
        assert not dictionary.lookup([])


class TestLookupMore:
    """Tests for LearnedWordStore.lookup_more."""

    def test_completions_most_recent_first(self, dictionary):
        dictionary.learn("മല", learned_on=100)
        dictionary.learn("മലയാളം", learned_on=200)
        dictionary.learn("മലക", learned_on=300)

        more = dictionary.lookup_more([Suggestion("മല", 1, 100)])

        assert [[s.text for s in group] for group in more] == [["മലക", "മലയാളം"]]

    def test_one_group_per_suggestion(self, dictionary):
        dictionary.learn("മലക", learned_on=100)

        more = dictionary.lookup_more([Suggestion("മല", 1), Suggestion("ക", 1)])

        assert len(more) == 2
        assert more[1] == []

    def test_limit(self, learnings_path):
        with LearnedWordStore(learnings_path, more_limit=1) as store:
            store.learn("മലക", learned_on=1)
            store.learn("മലയ", learned_on=2)

            more = store.lookup_more([Suggestion("മല", 1)])

        assert [s.text for s in more[0]] == ["മലയ"]


class TestPatternStore:
    """Tests for PatternStore."""

    def test_train(self, patterns):
        match = patterns.train("mala", "മല")

        assert match.matched_length == 4
        assert match.suggestion.text == "മല"
        assert match.suggestion.weight == 1

    def test_train_reuses_learned_word(self, patterns, dictionary):
        dictionary.learn("മല", weight=5, learned_on=100)

        match = patterns.train("mala", "മല")

        assert match.suggestion == Suggestion("മല", 5, 100)

    def test_train_twice(self, patterns):
        patterns.train("mala", "മല")
        patterns.train("mala", "മല")

        assert len(patterns.lookup("mala")) == 1

    def test_train_empty(self, patterns):
        with pytest.raises(ValueError):
            patterns.train("", "മല")

    def test_lookup_lengths(self, patterns):
        """Test prefixes, the whole word and extensions all match."""
        patterns.train("ma", "മ")
        patterns.train("mala", "മല")
        patterns.train("malayalam", "മലയാളം")
        patterns.train("kala", "കല")

        matches = patterns.lookup("mala")

        assert [m.matched_length for m in matches] == [9, 4, 2]
        assert [m.suggestion.text for m in matches] == ["മലയാളം", "മല", "മ"]

    def test_lookup_nothing(self, patterns):
        assert patterns.lookup("mala") == []
        assert patterns.lookup("") == []

    def test_limit(self, learnings_path):
        with PatternStore(learnings_path, limit=1) as store:
            store.train("m", "മ്")
            store.train("ma", "മ")

            matches = store.lookup("mala")

        assert len(matches) == 1
        assert isinstance(matches[0], PatternMatch)
        assert matches[0].matched_length == 2


class TestHandles:
    """Tests for opening and closing stores."""

    def test_closed_store_raises(self, learnings_path):
        store = LearnedWordStore(learnings_path)
        store.close()

        assert store.closed
        with pytest.raises(StoreUnavailable):
            store.get("മല")

    def test_close_twice(self, learnings_path):
        store = PatternStore(learnings_path)
        store.close()
        store.close()

    def test_not_a_database(self, tmp_path):
        path = tmp_path / "broken.learnings"
        path.write_text("not a database " * 100)

        with pytest.raises(StoreUnavailable):
            LearnedWordStore(path)

    def test_stores_share_a_file(self, dictionary, patterns):
        patterns.train("mala", "മല")

        assert dictionary.get("മല") is not None


class TestLongInput:
    def test_pattern_lookup_on_long_word(self, patterns):
        """Test lookups on words longer than SQLite's parameter limit."""
        patterns.train("mala", "മല")

        matches = patterns.lookup("mala" + "x" * 40000)

        assert [m.matched_length for m in matches] == [4]
