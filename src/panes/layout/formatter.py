"""
Keyword substitution for leaf pane source text.

Leaf text may reference a small set of `{NAME}` placeholders (for example
`{URI}` for the asset URI prefix). Unknown names are left in place.
"""

from __future__ import annotations

import logging
from typing import Dict, Mapping

from .errors import FormatIterationLimit

logger = logging.getLogger(__name__)

DEFAULT_ITERATION_LIMIT = 100


def build_keywords(uri_prefix: str = "") -> Dict[str, str]:
    """
    Build the fixed placeholder table used for leaf text.

    Args:
        uri_prefix: Prefix that asset paths receive when turned into URIs.

    Returns:
        Mapping of placeholder name to replacement text.
    """
    return {
        "URI": uri_prefix,
        "BACKSLASH": "\\",
    }


def _find_placeholder(text: str, start: int) -> int:
    """
    Return the index of the next `{` that opens a placeholder, or -1.

    A `{` opens a placeholder when a `}` follows at least two characters later
    without a `)` in between.
    """
    brace = text.find("{", start)
    while brace != -1:
        paren = text.find(")", brace + 1)
        stop = len(text) if paren == -1 else paren
        if text.find("}", brace + 2, stop) != -1:
            return brace
        brace = text.find("{", brace + 1)
    return -1


def format_source(
    text: str,
    keywords: Mapping[str, str],
    *,
    limit: int = DEFAULT_ITERATION_LIMIT,
    strict: bool = False,
) -> str:
    """
    Substitute known `{NAME}` placeholders in a single left-to-right pass.

    Replacement values are copied through without being scanned again, so the
    result is stable once no remaining name is in `keywords`.

    Args:
        text: Leaf source text.
        keywords: Placeholder table (see `build_keywords`).
        limit: Maximum number of placeholder occurrences to examine.
        strict: Raise instead of logging when `limit` is exceeded.

    Returns:
        The formatted text.

    Raises:
        FormatIterationLimit: If `strict` is set and more than `limit`
            placeholders are present.
    """
    pieces = []
    position = 0
    examined = 0
    while True:
        start = _find_placeholder(text, position)
        if start == -1:
            break
        if examined >= limit:
            message = f"hit iteration limit ({limit}) while formatting source"
            if strict:
                raise FormatIterationLimit(message)
            logger.error(message)
            break
        examined += 1

        end = text.find("}", start + 1)
        name = text[start + 1 : end]
        value = keywords.get(name)
        if value is None:
            pieces.append(text[position : start + 1])
            position = start + 1
            continue
        pieces.append(text[position:start])
        pieces.append(value)
        position = end + 1

    pieces.append(text[position:])
    return "".join(pieces)
