"""Ingredient text normalization.

Turns a free-text ingredient phrase ("2 cups (diced) Tomatoes") into the key
used to decide whether two mentions refer to the same product ("tomato").
The key is never shown to the user; the original phrase is kept for display.
"""
import re

from chefgenie.utilities.constants import QUANTITY_UNITS

_PARENS = re.compile(r"\([^)]*\)")
_NON_WORD = re.compile(r"[^a-z0-9\s]")
_QUANTITY = re.compile(r"^([\d./\s]+)?(" + "|".join(QUANTITY_UNITS) + r")?\s+(of\s+)?")
_LEADING_NUMBERS = re.compile(r"^[\d\s./]+")


def _singular(word: str) -> str:
    # Simple plural to singular heuristics (not perfect, acceptable for matching)
    if len(word) > 4 and word.endswith('oes'):
        return word[:-2]  # tomatoes -> tomato, potatoes -> potato
    if len(word) > 3 and word.endswith('s') and not word.endswith('ss'):
        return word[:-1]
    return word


def normalize(text: str) -> str:
    """Return the matching key for an ingredient phrase.

    Total: degenerate input (empty, all digits) gives an empty or very short key.
    """
    cleaned = (text or '').lower()
    cleaned = _PARENS.sub('', cleaned)
    cleaned = _NON_WORD.sub('', cleaned)
    cleaned = _QUANTITY.sub('', cleaned, count=1).strip()
    cleaned = _LEADING_NUMBERS.sub('', cleaned).strip()
    return _singular(cleaned)


__all__ = ['normalize']
