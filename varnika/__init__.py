"""varnika - Transliteration engine with learned words and pattern shortcuts."""

__version__ = "0.1.0"

from .config import Config
from .engine import Transliterator, init_from_lang, load_language_rules
from .errors import MalformedLanguageRules, ResourceNotFound, StoreUnavailable, VarnikaError
from .models import (
    AcceptCondition,
    GeneralKind,
    LanguageRules,
    MatchKind,
    PatternMatch,
    Suggestion,
    SymbolRule,
    Token,
    TransliterationResult,
)

__all__ = [
    "Config",
    "Transliterator",
    "init_from_lang",
    "load_language_rules",
    "VarnikaError",
    "ResourceNotFound",
    "MalformedLanguageRules",
    "StoreUnavailable",
    "AcceptCondition",
    "GeneralKind",
    "LanguageRules",
    "MatchKind",
    "PatternMatch",
    "Suggestion",
    "SymbolRule",
    "Token",
    "TransliterationResult",
]
