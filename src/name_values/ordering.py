"""Reorder a collection by a caller-supplied key sequence."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Sequence

if TYPE_CHECKING:
    from .collection import NameValues


def sort_by_key(values: NameValues, key_order: Optional[Sequence[str]]) -> NameValues:
    """Return a collection holding the entries named in *key_order*, in that order.

    ``None`` or an empty *key_order* returns *values* itself.  Names are
    matched case-insensitively; names with no match are skipped and entries
    not named are dropped.  A repeated name keeps its first position.
    """
    if not key_order:
        return values

    ordered = {}
    for key in key_order:
        name = key.lower()
        if name in values:
            ordered[name] = values[name]
    return values.derive(ordered)
