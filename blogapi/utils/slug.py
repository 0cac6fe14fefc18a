"""Slug generation utilities."""
from __future__ import annotations

import re
import unicodedata

_NON_ALNUM_RUN = re.compile(r"[^a-z0-9]+")


def slugify(text: str) -> str:
    """
    Convert a string to a URL-friendly slug.

    Lower-cases the text, strips diacritics after canonical decomposition,
    collapses every run of characters outside ``[a-z0-9]`` into a single
    hyphen and trims hyphens from both ends.

    Args:
        text: The text to convert to a slug

    Returns:
        A URL-friendly slug string, empty when ``text`` has no letters or digits
    """
    if not text:
        return ""

    text = unicodedata.normalize("NFD", text.lower())

    # Drop combining marks left behind by the decomposition (é -> e)
    text = "".join(ch for ch in text if not unicodedata.combining(ch))

    text = _NON_ALNUM_RUN.sub("-", text)

    return text.strip("-")
