"""Text helpers for rendered (target script) strings."""


def last_character(text: str) -> str:
    """Return the last code point of ``text``, or an empty string.

    Args:
        text: Rendered text

    Returns:
        Last character
    """
    return text[-1:] if text else ""


def strip_trailing(text: str, glyph: str) -> str:
    """Remove one trailing ``glyph`` from ``text`` if present.

    Args:
        text: Rendered text
        glyph: Glyph to strip (e.g. the script's virama)

    Returns:
        Text without the trailing glyph
    """
    if glyph and text.endswith(glyph):
        return text[: -len(glyph)]
    return text
