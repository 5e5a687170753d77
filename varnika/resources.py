"""Locating per-language resources on disk."""

import logging
import os
from pathlib import Path
from typing import Iterable, List, Optional, Union

from .stores.schema import make_learnings_store

logger = logging.getLogger(__name__)

VST_DIR_ENV = "VARNIKA_VST_DIR"
SYSTEM_VST_DIRS = [Path("/usr/local/share/varnika/vst"), Path("/usr/share/varnika/vst")]


def user_data_dir() -> Path:
    """Return the per-user data directory (XDG_DATA_HOME aware)."""
    base = os.environ.get("XDG_DATA_HOME")
    return Path(base) if base else Path.home() / ".local" / "share"


def vst_search_dirs(extra_dirs: Optional[Iterable[Union[str, Path]]] = None) -> List[Path]:
    """Directories searched for symbol tables, in priority order."""
    dirs = []
    env_dir = os.environ.get(VST_DIR_ENV)
    if env_dir:
        dirs.append(Path(env_dir))
    dirs.extend(Path(d) for d in (extra_dirs or []))
    dirs.append(user_data_dir() / "varnika" / "vst")
    dirs.extend(SYSTEM_VST_DIRS)
    return dirs


def find_vst_path(
    lang_code: str, search_dirs: Optional[Iterable[Union[str, Path]]] = None
) -> Optional[Path]:
    """Find ``<lang_code>.vst``.

    Args:
        lang_code: Language code, e.g. "ml"
        search_dirs: Extra directories searched after $VARNIKA_VST_DIR

    Returns:
        Path of the first match, or None
    """
    for directory in vst_search_dirs(search_dirs):
        candidate = directory / f"{lang_code}.vst"
        if candidate.is_file():
            logger.debug(f"Found symbol table for {lang_code}: {candidate}")
            return candidate
    return None


def find_learnings_path(lang_code: str, learnings_dir: Optional[Union[str, Path]] = None) -> Path:
    """Path of the learnings file for ``lang_code`` (may not exist yet)."""
    directory = Path(learnings_dir) if learnings_dir else user_data_dir() / "varnika" / "learnings"
    return directory / f"{lang_code}.vst.learnings"


def ensure_learnings_store(path: Union[str, Path]) -> bool:
    """Create an empty learnings file if absent.

    Returns:
        True if the file was created
    """
    path = Path(path)
    if path.is_file():
        return False
    logger.info(f"Making learnings file at {path}")
    make_learnings_store(path)
    return True
