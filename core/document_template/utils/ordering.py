import logging
from typing import List, Optional, Sequence, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


def reorder(sequence: Sequence[T], from_index: int, to_index: Optional[int]) -> List[T]:
    """
    Moves one element to a new position, keeping everything else in order.

    The element at ``from_index`` is removed and reinserted at ``to_index`` of
    the shortened list. A missing ``to_index`` means the drag was released
    outside a drop target and the input order is returned unchanged.

    Raises:
        IndexError: if either index is outside the valid range.
    """
    items = list(sequence)
    if to_index is None:
        return items

    if not 0 <= from_index < len(items):
        raise IndexError(f"Source index {from_index} out of range for {len(items)} items")

    moved = items.pop(from_index)
    if not 0 <= to_index <= len(items):
        raise IndexError(f"Destination index {to_index} out of range for {len(items) + 1} items")

    items.insert(to_index, moved)
    logger.debug(f"Moved item from position {from_index} to {to_index}")
    return items
