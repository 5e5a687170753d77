"""Transliteration engine: fans out to the stores and merges ranked results."""

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import List, Optional, Sequence, Union

from .config import Config
from .errors import MalformedLanguageRules, ResourceNotFound
from .expander import SuggestionExpander
from .models import LanguageRules, MatchKind, Suggestion, TransliterationResult
from .ranking import rank
from .resources import ensure_learnings_store, find_learnings_path, find_vst_path
from .stores import LearnedWordStore, PatternStore
from .symbol_table import SymbolTable

logger = logging.getLogger(__name__)

DEFAULT_JOINER_PATTERN = "~"


def load_language_rules(symbol_table, joiner_pattern: str = DEFAULT_JOINER_PATTERN) -> LanguageRules:
    """
    Derive script constants from the symbol table.

    Args:
        symbol_table: Symbol table adapter (needs ``lookup_exact``).
        joiner_pattern: Input sequence mapped to the script's virama.

    Returns:
        LanguageRules for the table's script.

    Raises:
        MalformedLanguageRules: If the table has no exact virama rule.
    """
    rule = symbol_table.lookup_exact(joiner_pattern)
    if rule is None:
        raise MalformedLanguageRules(
            f"Symbol table has no exact rule for joiner pattern {joiner_pattern!r}"
        )
    return LanguageRules(joiner_glyph=rule.rendered_start, use_native_digits=False)


class Transliterator:
    """
    Turns an input word into ranked renderings.

    Combines three independent sources: expansion of the symbol-table
    tokenization, the learned-word store and the pattern store. Store
    lookups and the greedy expansion run on a thread pool and are joined in
    a fixed order, so the merged output does not depend on which lookup
    finishes first.

    The engine owns its adapters and closes them in ``close()``.
    """

    def __init__(
        self,
        symbol_table,
        dictionary,
        pattern_dictionary,
        language_rules: Optional[LanguageRules] = None,
        max_workers: int = 4,
        joiner_pattern: str = DEFAULT_JOINER_PATTERN,
        debug: bool = False,
    ):
        """
        Initialize the engine.

        Args:
            symbol_table: Provides ``tokenize`` and ``lookup_exact``.
            dictionary: Provides ``lookup`` and ``lookup_more``.
            pattern_dictionary: Provides ``lookup``.
            language_rules: Script constants; derived from the symbol table
                when omitted.
            max_workers: Threads used for concurrent lookups.
            joiner_pattern: Input sequence of the virama rule.
            debug: Log intermediate results.
        """
        self.symbol_table = symbol_table
        self.dictionary = dictionary
        self.pattern_dictionary = pattern_dictionary
        self.language_rules = language_rules or load_language_rules(symbol_table, joiner_pattern)
        self.expander = SuggestionExpander(self.language_rules)
        self._debug = debug
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="varnika")
        self._closed = False

    @classmethod
    def open(
        cls,
        vst_path: Union[str, Path],
        learnings_path: Union[str, Path],
        more_limit: int = 10,
        pattern_limit: int = 10,
        **kwargs,
    ) -> "Transliterator":
        """
        Open a symbol table and a learnings file and build an engine on them.

        Any handle already opened is closed again if a later step fails.

        Raises:
            ResourceNotFound: If the symbol table does not exist.
            MalformedLanguageRules: If the symbol table has no virama rule.
            StoreUnavailable: If a file cannot be opened.
        """
        symbol_table = SymbolTable(vst_path)
        handles = [symbol_table]
        try:
            dictionary = LearnedWordStore(learnings_path, more_limit=more_limit)
            handles.append(dictionary)
            pattern_dictionary = PatternStore(learnings_path, limit=pattern_limit)
            handles.append(pattern_dictionary)
            return cls(symbol_table, dictionary, pattern_dictionary, **kwargs)
        except Exception:
            for handle in handles:
                handle.close()
            raise

    def set_debug(self, enabled: bool) -> None:
        """Turn logging of intermediate results on or off."""
        self._debug = enabled

    def _log_debug(self, label: str, value) -> None:
        if self._debug:
            logger.debug(f"{label}: {value}")

    def _extend_rest(self, rest_of_word: str, seeds: Sequence[Suggestion]) -> List[Suggestion]:
        """Complete ``seeds`` with every rendering of ``rest_of_word``."""
        if not rest_of_word:
            return list(seeds)
        tokens = self.symbol_table.tokenize(rest_of_word, MatchKind.ALL)
        return self.expander.extend_with_suffix(tokens, seeds)

    def transliterate(self, word: str) -> TransliterationResult:
        """
        Transliterate one word.

        Args:
            word: Input in the Latin-like scheme.

        Returns:
            TransliterationResult with exact matches from the stores,
            merged candidates, and the exact-rules-only rendering.

        Raises:
            StoreUnavailable: If a store lookup fails.
        """
        result = TransliterationResult()
        if not word:
            return result
        if self._closed:
            raise RuntimeError("Transliterator is closed")

        tokens = self.symbol_table.tokenize(word, MatchKind.ALL)

        dict_future = self._executor.submit(self.dictionary.lookup, tokens)
        pattern_future = self._executor.submit(self.pattern_dictionary.lookup, word)
        greedy_future = self._executor.submit(self.expander.expand, tokens, True, False)
        more_future: Optional[Future] = None

        candidates: List[Suggestion] = []

        dict_result = dict_future.result()
        self._log_debug("Dictionary results", dict_result)

        if dict_result.suggestions:
            if not dict_result.exact_match:
                # Only a prefix of the word is learned
                rest_of_word = word[dict_result.longest_match_position + 1 :]
                candidates = self._extend_rest(rest_of_word, dict_result.suggestions)
            else:
                result.exact_match = list(dict_result.suggestions)
                more_future = self._executor.submit(
                    self.dictionary.lookup_more, dict_result.suggestions
                )

        pattern_matches = pattern_future.result()
        if pattern_matches:
            self._log_debug("Pattern dictionary results", pattern_matches)

        for match in pattern_matches:
            if match.matched_length < len(word):
                rest_of_word = word[match.matched_length :]
                candidates.extend(self._extend_rest(rest_of_word, [match.suggestion]))
            elif match.matched_length == len(word):
                result.exact_match.append(match.suggestion)
            else:
                candidates.append(match.suggestion)

        if more_future is not None:
            more_from_dict = more_future.result()
            self._log_debug("More dictionary results", more_from_dict)
            for sug_set in more_from_dict:
                candidates.extend(sug_set)

        if not result.exact_match:
            candidates.extend(self.expander.expand(tokens, greedy_only=False, partial=False))

        result.exact_match = rank(result.exact_match)
        result.candidates = rank(candidates)
        result.greedy_exact = rank(greedy_future.result())
        return result

    def close(self) -> None:
        """Stop the worker threads and close every store. Safe to call twice."""
        if self._closed:
            return
        self._closed = True
        self._executor.shutdown(wait=True)
        for adapter in (self.symbol_table, self.dictionary, self.pattern_dictionary):
            close = getattr(adapter, "close", None)
            if callable(close):
                close()
        logger.debug("Transliterator closed")

    def __enter__(self) -> "Transliterator":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit - release all handles."""
        self.close()


def init_from_lang(lang_code: str, config: Optional[Config] = None) -> Transliterator:
    """
    Build an engine for a language from the installed resources.

    The learnings file is created empty when it does not exist yet.

    Args:
        lang_code: Language code, e.g. "ml".
        config: Optional configuration; defaults are used when omitted.

    Raises:
        ResourceNotFound: If no symbol table is installed for the language.
    """
    config = config or Config(language=lang_code)

    vst_path = find_vst_path(lang_code, config.stores.vst_dirs)
    if vst_path is None:
        raise ResourceNotFound(f"Couldn't find symbol table for language {lang_code!r}")

    learnings_path = find_learnings_path(lang_code, config.stores.learnings_dir)
    ensure_learnings_store(learnings_path)

    logger.info(f"Initializing {lang_code} from {vst_path} with learnings {learnings_path}")
    return Transliterator.open(
        vst_path,
        learnings_path,
        more_limit=config.stores.more_limit,
        pattern_limit=config.stores.pattern_limit,
        max_workers=config.engine.max_workers,
        joiner_pattern=config.engine.joiner_pattern,
        debug=config.engine.debug,
    )
