"""Symbol table (VST) access, tokenizer and scheme compiler."""

import logging
import sqlite3
from functools import lru_cache
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple, Union

import yaml

from .errors import MalformedLanguageRules, ResourceNotFound, StoreUnavailable
from .models import AcceptCondition, GeneralKind, MatchKind, SymbolRule, Token
from .stores.base import SQLiteStore

logger = logging.getLogger(__name__)

VST_SCHEMA = """
CREATE TABLE IF NOT EXISTS metadata (key TEXT UNIQUE, value TEXT);
CREATE TABLE IF NOT EXISTS symbols (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    type INTEGER,
    pattern TEXT,
    value1 TEXT,
    value2 TEXT,
    value3 TEXT,
    tag TEXT,
    match_type INTEGER,
    priority INTEGER DEFAULT 0,
    accept_condition INTEGER,
    flags INTEGER DEFAULT 0,
    weight INTEGER
);
CREATE INDEX IF NOT EXISTS idx_symbols_pattern ON symbols (pattern);
"""

# (pattern, scope) lookups cached per table, hits and misses alike
DEFAULT_CACHE_SIZE = 4096

# Scheme file spellings of accept conditions
ACCEPT_NAMES = {
    "any": AcceptCondition.ANY,
    "all": AcceptCondition.ANY,
    "start": AcceptCondition.ONLY_AT_START,
    "starts_with": AcceptCondition.ONLY_AT_START,
    "between": AcceptCondition.ONLY_IN_BETWEEN,
    "in_between": AcceptCondition.ONLY_IN_BETWEEN,
    "end": AcceptCondition.ONLY_AT_END,
    "ends_with": AcceptCondition.ONLY_AT_END,
}


class SymbolTable(SQLiteStore):
    """
    Read access to a language's symbol table.

    Rules for a pattern come back exact first, then by ascending weight
    (lower weight is preferred), then in insertion order.
    """

    def __init__(self, path: Union[str, Path], cache_size: int = DEFAULT_CACHE_SIZE):
        """
        Open a symbol table.

        Args:
            path: Path to the .vst file.
            cache_size: Number of (pattern, scope) lookups kept in memory.

        Raises:
            ResourceNotFound: If the file does not exist.
            StoreUnavailable: If the file is not a readable symbol table.
        """
        path = Path(path)
        if not path.is_file():
            raise ResourceNotFound(f"Symbol table not found: {path}")
        super().__init__(path)
        self._cached_search = lru_cache(maxsize=cache_size)(self._search)
        try:
            self.max_pattern_length = self._query(
                "SELECT COALESCE(MAX(LENGTH(pattern)), 0) FROM symbols"
            )[0][0]
        except StoreUnavailable:
            self.close()
            raise
        logger.info(f"Opened symbol table {path} (longest pattern: {self.max_pattern_length})")

    def search(self, pattern: str, scope: MatchKind = MatchKind.ALL) -> List[SymbolRule]:
        """
        Rules whose pattern equals ``pattern``.

        Args:
            pattern: Input character sequence.
            scope: EXACT or POSSIBILITY to restrict, ALL for both.

        Returns:
            Ordered list of rules, empty if none.
        """
        return list(self._cached_search(pattern, MatchKind(scope)))

    def _search(self, pattern: str, scope: MatchKind) -> Tuple[SymbolRule, ...]:
        columns = (
            "SELECT id, type, pattern, value1, COALESCE(value2, ''), COALESCE(tag, ''), "
            "match_type, COALESCE(accept_condition, 0), COALESCE(weight, 0) FROM symbols"
        )
        if scope == MatchKind.ALL:
            rows = self._query(
                f"{columns} WHERE pattern = ? ORDER BY match_type, weight, id",
                (pattern,),
            )
        else:
            rows = self._query(
                f"{columns} WHERE pattern = ? AND match_type = ? ORDER BY weight, id",
                (pattern, int(scope)),
            )
        return tuple(_row_to_rule(row) for row in rows)

    def lookup_exact(self, pattern: str) -> Optional[SymbolRule]:
        """Return the preferred exact rule for ``pattern``, or None."""
        rules = self.search(pattern, MatchKind.EXACT)
        return rules[0] if rules else None

    def tokenize(self, word: str, scope: MatchKind = MatchKind.ALL) -> List[Token]:
        """
        Split ``word`` into tokens by longest pattern match.

        Characters not covered by any pattern become literal tokens, so the
        tokens always cover the whole word without gaps or overlaps.

        Args:
            word: Input word.
            scope: Match kinds to consider.

        Returns:
            Tokens in input order.
        """
        tokens: List[Token] = []
        i = 0
        while i < len(word):
            longest = min(self.max_pattern_length, len(word) - i)
            for length in range(longest, 0, -1):
                chunk = word[i : i + length]
                rules = self.search(chunk, scope)
                if rules:
                    tokens.append(Token.ambiguous(rules, i, chunk))
                    i += length
                    break
            else:
                tokens.append(Token.literal(word[i], i))
                i += 1
        return tokens

    def metadata(self) -> Dict[str, str]:
        """Return the table's metadata key/values."""
        return dict(self._query("SELECT key, value FROM metadata"))


def _row_to_rule(row: tuple) -> SymbolRule:
    rule_id, kind, pattern, value1, value2, tag, match_type, accept, weight = row
    return SymbolRule(
        pattern=pattern,
        rendered_start=value1,
        rendered_mid=value2,
        weight=weight,
        match_kind=MatchKind(match_type),
        accept_condition=AcceptCondition(accept),
        general_kind=GeneralKind(kind),
        id=rule_id,
        tag=tag,
    )


def _parse_enum(value, names: Dict[str, object], enum_cls, field: str):
    if isinstance(value, int):
        return enum_cls(value)
    key = str(value).strip().lower()
    if key in names:
        return names[key]
    raise MalformedLanguageRules(f"Unknown {field}: {value!r}")


def load_scheme(path: Union[str, Path]) -> Tuple[Dict[str, str], List[SymbolRule]]:
    """
    Load a YAML scheme describing a symbol table.

    Args:
        path: Path to the scheme file.

    Returns:
        Tuple of (metadata, rules)
    """
    path = Path(path)
    if not path.exists():
        raise ResourceNotFound(f"Scheme file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    kind_names = {k.name.lower(): k for k in GeneralKind}
    match_names = {"exact": MatchKind.EXACT, "possibility": MatchKind.POSSIBILITY}

    rules = []
    for entry in data.get("symbols", []):
        try:
            pattern = str(entry["pattern"])
            value1 = str(entry["value1"])
        except KeyError as e:
            raise MalformedLanguageRules(f"Symbol entry missing {e}: {entry}") from e
        rules.append(
            SymbolRule(
                pattern=pattern,
                rendered_start=value1,
                rendered_mid=str(entry.get("value2") or ""),
                weight=int(entry.get("weight", 0)),
                match_kind=_parse_enum(entry.get("match", "exact"), match_names, MatchKind, "match"),
                accept_condition=_parse_enum(
                    entry.get("accept", "any"), ACCEPT_NAMES, AcceptCondition, "accept"
                ),
                general_kind=_parse_enum(entry.get("type", "other"), kind_names, GeneralKind, "type"),
                tag=str(entry.get("tag") or ""),
            )
        )

    metadata = {str(k): str(v) for k, v in (data.get("metadata") or {}).items()}
    logger.info(f"Loaded {len(rules)} symbols from {path}")
    return metadata, rules


def build_symbol_table(
    path: Union[str, Path],
    rules: Iterable[SymbolRule],
    metadata: Optional[Dict[str, str]] = None,
) -> Path:
    """
    Write a fresh symbol table file, replacing any existing one.

    Args:
        path: Output .vst path.
        rules: Symbol rules, in preference order.
        metadata: Optional key/values stored alongside.

    Returns:
        The path
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    if path.exists():
        path.unlink()

    rows = [
        (
            int(rule.general_kind),
            rule.pattern,
            rule.rendered_start,
            rule.rendered_mid,
            "",
            rule.tag,
            int(rule.match_kind),
            int(rule.accept_condition),
            rule.weight,
        )
        for rule in rules
    ]
    try:
        conn = sqlite3.connect(str(path))
        try:
            with conn:
                conn.executescript(VST_SCHEMA)
                conn.executemany(
                    "INSERT INTO symbols (type, pattern, value1, value2, value3, tag, "
                    "match_type, accept_condition, weight) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
                    rows,
                )
                conn.executemany(
                    "INSERT INTO metadata (key, value) VALUES (?, ?)",
                    list((metadata or {}).items()),
                )
        finally:
            conn.close()
    except sqlite3.Error as e:
        raise StoreUnavailable(f"Cannot write symbol table {path}: {e}") from e

    logger.info(f"Wrote {len(rows)} symbols to {path}")
    return path
