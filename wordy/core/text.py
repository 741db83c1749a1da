"""Clue and answer text normalization."""

from __future__ import annotations

import html
import re
import unicodedata

_COMBINING_MARKS = re.compile("[\u0300-\u036f]")


def decode_text(raw: str) -> str:
    """Decode HTML entities in clue text. Case is preserved."""
    return html.unescape(raw)


def normalize_answer(raw: str) -> str:
    """Return the comparison form of an answer: decoded, diacritics stripped, upper-cased.

    ``"Bogot&aacute;"`` and ``"BOGOTÁ"`` both become ``"BOGOTA"``.
    """
    decomposed = unicodedata.normalize("NFD", html.unescape(raw))
    return _COMBINING_MARKS.sub("", decomposed).upper()
