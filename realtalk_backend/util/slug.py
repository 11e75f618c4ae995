from __future__ import annotations

import re


def slugify(name: str | None) -> str:
    """Derive a URL slug from a display name.

    Lowercase, every character outside [a-z0-9] becomes "-", runs of "-" are
    collapsed and leading/trailing "-" are trimmed. Non-ASCII letters are not
    transliterated, so "Café" -> "caf".

    >>> slugify("My Org!!")
    'my-org'
    >>> slugify(" Foo  Bar ")
    'foo-bar'
    """
    s = (name or "").lower()
    s = re.sub(r"[^a-z0-9]", "-", s)
    s = re.sub(r"-+", "-", s)
    return s.strip("-")
