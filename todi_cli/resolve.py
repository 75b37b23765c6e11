"""
Name-to-entity resolution over a full listing.

Matching is exact and case-sensitive. There is no ranking and no fuzzy
matching. Callers pass the already-aggregated collection.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, TypeVar

from todi_cli.exceptions import NotFoundError, NotUniqueError

T = TypeVar("T")

# kind -> (attribute compared, noun in the not-unique message)
MATCH_FIELDS: dict[str, tuple[str, str]] = {
    "project": ("name", "name"),
    "label": ("name", "name"),
    "section": ("name", "name"),
    "task": ("content", "title"),
}

DEFAULT_HINT = "--id"


def find_unique(items: Iterable[T], name: str, kind: str, hint: str | None = None) -> T:
    """Return the single item of *kind* whose match field equals *name*.

    Raises NotFoundError for zero matches and NotUniqueError for more than one.
    *hint* names the flag that takes an ID instead; None means --id and an
    empty string suggests nothing.
    """
    attr, noun = MATCH_FIELDS[kind]
    if hint is None:
        hint = DEFAULT_HINT
    matches = [item for item in items if _field(item, attr) == name]
    if not matches:
        raise NotFoundError(kind, name)
    if len(matches) > 1:
        raise NotUniqueError(kind, name, noun=noun, hint=hint)
    return matches[0]


def _field(item: Any, attr: str) -> Any:
    if isinstance(item, dict):
        return item.get(attr)
    return getattr(item, attr, None)
