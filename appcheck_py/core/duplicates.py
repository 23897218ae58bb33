"""Duplicate-value detection within a single catalog."""

from __future__ import annotations

import json
from collections.abc import Iterable

from .model import Catalog, DuplicateGroup


def _identity(value: object) -> tuple[str, object]:
    # 1 == True in Python; keep distinct JSON types apart
    if isinstance(value, (dict, list)):
        # API records may carry structured values, which are unhashable
        return (type(value).__name__, json.dumps(value, sort_keys=True))
    return (type(value).__name__, value)


def find_duplicate_leaves(
    leaves: Iterable[tuple[str, object]], *, source: str = ""
) -> tuple[DuplicateGroup, ...]:
    """Group keys sharing one value, in order of their first duplication."""
    first_key: dict[tuple[str, object], str] = {}
    grouped: dict[tuple[str, object], list[str]] = {}
    values: dict[tuple[str, object], object] = {}
    for key, value in leaves:
        ident = _identity(value)
        seen = first_key.get(ident)
        if seen is None:
            first_key[ident] = key
            continue
        keys = grouped.get(ident)
        if keys is None:
            grouped[ident] = [seen, key]
            values[ident] = value
        else:
            keys.append(key)
    return tuple(
        DuplicateGroup(value=values[ident], keys=tuple(keys), source=source)
        for ident, keys in grouped.items()
    )


def find_duplicates(catalog: Catalog) -> tuple[DuplicateGroup, ...]:
    """Scan the unfiltered leaves of *catalog*; ignore rules do not apply here."""
    return find_duplicate_leaves(
        catalog.leaves().items(), source=catalog.source_label
    )
