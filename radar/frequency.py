"""
Count-by-key helpers shared by every distribution on the dashboard.
"""
from __future__ import annotations

import math
from typing import Callable, Dict, Hashable, Iterable, List, Mapping, Optional, Sequence, TypeVar

from radar.models import KeyCount

T = TypeVar("T")
K = TypeVar("K", bound=Hashable)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up, matching the dashboard's rounding."""
    return int(math.floor(value + 0.5))


def percentage(count: float, total: float) -> int:
    if not total:
        return 0
    return round_half_up(count / total * 100)


def count_by(items: Iterable[T], key_fn: Callable[[T], Optional[K]]) -> Dict[K, int]:
    """
    Count items per key, preserving first-seen key order.

    Items whose key is ``None`` are skipped.
    """
    counts: Dict[K, int] = {}
    for item in items:
        key = key_fn(item)
        if key is None:
            continue
        counts[key] = counts.get(key, 0) + 1
    return counts


def fixed_counts(items: Iterable[T], key_fn: Callable[[T], Optional[K]], keys: Sequence[K]) -> Dict[K, int]:
    """Like :func:`count_by` but every key in ``keys`` is present (zero when unseen)."""
    counts: Dict[K, int] = {key: 0 for key in keys}
    for key, count in count_by(items, key_fn).items():
        counts[key] = counts.get(key, 0) + count
    return counts


def top_n(counts: Mapping[K, int], n: Optional[int] = None, total: Optional[int] = None) -> List[KeyCount]:
    """
    Sort counts descending. Equal counts keep mapping order since ``sorted`` is stable.

    When ``total`` is given each entry carries its percentage of it.
    """
    ranked = sorted(counts.items(), key=lambda kv: kv[1], reverse=True)
    if n is not None:
        ranked = ranked[:n]
    return [
        KeyCount(key=_key_str(key), count=count, percentage=percentage(count, total) if total is not None else 0)
        for key, count in ranked
    ]


def as_distribution(counts: Mapping[K, int], total: Optional[int] = None) -> List[KeyCount]:
    """Keep mapping order; percentages against ``total`` or the sum of counts."""
    denominator = sum(counts.values()) if total is None else total
    return [
        KeyCount(key=_key_str(key), count=count, percentage=percentage(count, denominator))
        for key, count in counts.items()
    ]


def _key_str(key: Hashable) -> str:
    value = getattr(key, "value", key)
    return str(value)
