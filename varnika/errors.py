"""Exceptions raised by the transliteration engine."""


class VarnikaError(Exception):
    """Base class for all engine errors."""


class ResourceNotFound(VarnikaError, FileNotFoundError):
    """A language resource (symbol table) cannot be located or opened."""


class MalformedLanguageRules(VarnikaError, ValueError):
    """The symbol table lacks a rule the engine needs at start-up."""


class StoreUnavailable(VarnikaError):
    """A read or write against a persistent store failed."""
