from __future__ import annotations

import re

_SPACES = re.compile(r"\s+")
_NON_WORD = re.compile(r"[^\w]+")
_UNDERSCORES = re.compile(r"_+")
_TRAILING = re.compile(r"_+\Z")


def normalize(title: str) -> str:
    """Return the anchor slug for a heading title.

    Lowercase word characters separated by single underscores. Titles made
    only of punctuation give an empty slug. Duplicates are not resolved.
    """
    slug = (title or "").strip().lower()
    slug = _SPACES.sub("_", slug)
    slug = _NON_WORD.sub("_", slug)
    slug = _UNDERSCORES.sub("_", slug)
    return _TRAILING.sub("", slug)
