"""Look up records by family or order name.

Matching is exact equality, ignoring case. query() returns an empty tuple
when nothing matches; find() raises NotFoundError with some close names
for the caller to offer instead.
"""

from __future__ import annotations

import difflib
from enum import Enum
from typing import TYPE_CHECKING

from floral.errors import NotFoundError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from floral.formula import FloralRecord

# difflib similarity a name needs to be suggested
SUGGESTION_CUTOFF = 0.6
MAX_SUGGESTIONS = 3


class QueryMode(Enum):
    """Which field a lookup key is matched against."""

    FAMILY = "family"
    ORDER = "order"
    ALL = "all"  # every record, key ignored


def _name(record: FloralRecord, mode: QueryMode) -> str:
    return record.order if mode is QueryMode.ORDER else record.family


def query(
    records: Iterable[FloralRecord],
    key: str,
    mode: QueryMode = QueryMode.FAMILY,
) -> tuple[FloralRecord, ...]:
    """Return the records matching key, in load order.

    Args:
        records: The loaded records.
        key: Family or order name, compared case-insensitively.
        mode: FAMILY or ORDER to match that field; ALL returns every record.

    Returns:
        The matching records; empty if there are none.
    """
    if mode is QueryMode.ALL:
        return tuple(records)

    wanted = key.strip().casefold()
    return tuple(record for record in records if _name(record, mode).casefold() == wanted)


def names(records: Iterable[FloralRecord], mode: QueryMode = QueryMode.FAMILY) -> list[str]:
    """Distinct family (or order) names in load order."""
    seen: dict[str, str] = {}
    for record in records:
        name = _name(record, mode)
        seen.setdefault(name.casefold(), name)
    return list(seen.values())


def suggest(
    records: Iterable[FloralRecord],
    key: str,
    mode: QueryMode = QueryMode.FAMILY,
    limit: int = MAX_SUGGESTIONS,
) -> list[str]:
    """Names close to key, best first. Used for "did you mean" hints."""
    if mode is QueryMode.ALL:
        return []

    by_folded = {name.casefold(): name for name in names(records, mode)}
    matches = difflib.get_close_matches(
        key.strip().casefold(), list(by_folded), n=limit, cutoff=SUGGESTION_CUTOFF
    )
    return [by_folded[match] for match in matches]


def find(
    records: Iterable[FloralRecord],
    key: str,
    mode: QueryMode = QueryMode.FAMILY,
) -> tuple[FloralRecord, ...]:
    """Like query(), but raise NotFoundError when nothing matches."""
    records = tuple(records)
    matches = query(records, key, mode)
    if not matches:
        raise NotFoundError(key, mode, suggest(records, key, mode))
    return matches
