"""
Text Utils
==========
Normalization helpers shared by the claims extractor and the drift validator.
"""
import re
from typing import Iterable

_SEPARATOR_RUN = re.compile(r"[\s\-_.]+")
_TRAILING_JS = re.compile(r"\.js$")


def normalize_tech_name(name: str) -> str:
    """
    Reduce a technology name to a comparison key.

    "Tailwind CSS" and "tailwindcss" both become "tailwindcss";
    "Node.js" and "nodejs" both become "nodejs".

    Idempotent: normalizing an already-normalized name returns it unchanged.
    """
    key = _SEPARATOR_RUN.sub("", name.lower())
    return _TRAILING_JS.sub("js", key)


def dedupe(items: Iterable[str]) -> list[str]:
    """Drop repeated items, keeping the first occurrence's position."""
    seen: set[str] = set()
    unique: list[str] = []
    for item in items:
        if item not in seen:
            seen.add(item)
            unique.append(item)
    return unique
