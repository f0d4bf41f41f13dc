from __future__ import annotations

from typing import Iterable, Optional


def normalize_search_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    text = value.strip()
    return text or None


def matches_any(term: Optional[str], *values: Optional[str]) -> bool:
    """Coincidencia por subcadena sin distinguir mayúsculas; sin término siempre coincide."""
    needle = normalize_search_text(term)
    if needle is None:
        return True
    needle = needle.lower()
    return any(needle in (value or "").lower() for value in values)


def distinct_sorted(values: Iterable[Optional[str]]) -> list[str]:
    return sorted({value for value in values if value})
