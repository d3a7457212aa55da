"""Fractional order-index placement for lists and tasks.

Siblings are kept sortable by a float ``order_index``. New items are appended
``ORDER_STEP`` above the current maximum, insertions between two siblings take
the midpoint, and when the numeric space runs out the caller renumbers every
sibling with :func:`generate_reindexed_order` and retries.
"""
from typing import List, Optional

from gsd.exceptions import OrderIndexExhausted

ORDER_STEP = 1000.0
INITIAL_ORDER_INDEX = 1000.0


def calculate_top_position(current_max: Optional[float]) -> float:
    """Return the index for an item appended after ``current_max``."""
    if current_max is None:
        return INITIAL_ORDER_INDEX
    return current_max + ORDER_STEP


def calculate_insert_at_top(current_min: Optional[float]) -> float:
    """Return the index for an item placed before ``current_min``.

    Raises :class:`OrderIndexExhausted` when the result would not be positive.
    """
    if current_min is None:
        return INITIAL_ORDER_INDEX

    new_index = current_min - ORDER_STEP
    if new_index <= 0:
        raise OrderIndexExhausted()
    return new_index


def calculate_between(before: float, after: Optional[float]) -> float:
    """Return an index strictly between two neighbours.

    ``after`` is ``None`` when ``before`` is the last sibling.
    """
    if after is None:
        return calculate_top_position(before)

    low, high = min(before, after), max(before, after)
    midpoint = (low + high) / 2
    if not low < midpoint < high:
        raise OrderIndexExhausted()
    return midpoint


def generate_reindexed_order(count: int, start_index: float = INITIAL_ORDER_INDEX) -> List[float]:
    return [start_index + i * ORDER_STEP for i in range(count)]


def needs_reindexing(min_index: float) -> bool:
    return min_index <= ORDER_STEP
