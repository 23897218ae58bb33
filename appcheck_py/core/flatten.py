from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from .ignore_rules import IgnoreRules

if TYPE_CHECKING:
    from .model import Catalog


def _walk(node: Any, prefix: str, out: dict[str, object]) -> None:
    if isinstance(node, Mapping):
        items = ((str(key), value) for key, value in node.items())
    else:
        items = ((str(index), value) for index, value in enumerate(node))
    for key, value in items:
        full_key = f"{prefix}.{key}" if prefix else key
        if isinstance(value, (Mapping, list)):
            _walk(value, full_key, out)
        else:
            out[full_key] = value


def flatten_catalog(tree: Mapping[str, Any]) -> dict[str, object]:
    """Flatten a nested catalog into {dotted.key: leaf}, depth first.

    Lists recurse with their index as the segment; intermediate nodes never
    become keys.
    """
    out: dict[str, object] = {}
    _walk(tree, "", out)
    return out


def flatten_keys(
    source: Catalog | Mapping[str, Any], rules: IgnoreRules | None = None
) -> frozenset[str]:
    """Return the leaf keys of *source* that survive *rules*."""
    if isinstance(source, Mapping):
        leaves = flatten_catalog(source)
    else:
        leaves = source.leaves()
    if not rules:
        return frozenset(leaves)
    return frozenset(
        key for key, value in leaves.items() if not rules.should_ignore(key, value)
    )
