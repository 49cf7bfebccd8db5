"""
Key normalization: snake_case raw keys to camelCase.

Policy (v1):
- empty keys and keys made only of underscores are returned unchanged
- leading and trailing underscore runs are preserved verbatim
- runs of underscores in the middle count as a single separator
- a key with no underscores is returned unchanged
"""

from __future__ import annotations

from .rules import KEY_SEPARATOR


def _split_affixes(key: str) -> tuple[str, str, str]:
    stripped = key.lstrip(KEY_SEPARATOR)
    leading = key[: len(key) - len(stripped)]
    middle = stripped.rstrip(KEY_SEPARATOR)
    trailing = stripped[len(middle):]
    return leading, middle, trailing


def normalize_key(key: str) -> str:
    """
    Convert a snake_case key to camelCase.

    `_first__name_` -> `_firstName_`. Underscores that only lead or trail the
    key survive, so such keys never match a bare camelCase field name.
    """
    if KEY_SEPARATOR not in key:
        return key

    leading, middle, trailing = _split_affixes(key)
    if not middle:
        # only underscores
        return key

    words = [w for w in middle.split(KEY_SEPARATOR) if w]
    joined = words[0].lower() + "".join(w.capitalize() for w in words[1:])
    return leading + joined + trailing
