"""Schema of the learnings file shared by the learned-word and pattern stores."""

import logging
import sqlite3
from pathlib import Path
from typing import Union

from ..errors import StoreUnavailable

logger = logging.getLogger(__name__)

LEARNINGS_SCHEMA = """
CREATE TABLE IF NOT EXISTS metadata (key TEXT UNIQUE, value TEXT);
CREATE TABLE IF NOT EXISTS words (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    word TEXT UNIQUE,
    weight INTEGER DEFAULT 1,
    learned_on INTEGER
);
CREATE TABLE IF NOT EXISTS patterns_content (
    pattern TEXT,
    word_id INTEGER,
    learned INTEGER DEFAULT 0,
    UNIQUE(pattern, word_id)
);
CREATE INDEX IF NOT EXISTS idx_patterns_pattern ON patterns_content (pattern);
"""


def make_learnings_store(path: Union[str, Path]) -> Path:
    """Create an empty learnings file, or complete the schema of an existing one.

    Args:
        path: Location of the learnings file

    Returns:
        The path
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    try:
        conn = sqlite3.connect(str(path))
        try:
            with conn:
                conn.executescript(LEARNINGS_SCHEMA)
        finally:
            conn.close()
    except sqlite3.Error as e:
        raise StoreUnavailable(f"Cannot create learnings store at {path}: {e}") from e
    logger.debug(f"Learnings schema ready at {path}")
    return path
