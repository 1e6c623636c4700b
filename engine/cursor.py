# engine/cursor.py

from __future__ import annotations

from typing import Optional, Sequence


def position(cursor: int, visible: Sequence[int]) -> int:
    try:
        return list(visible).index(cursor)
    except ValueError:
        return -1


def previous_target(cursor: int, visible: Sequence[int]) -> Optional[int]:
    pos = position(cursor, visible)
    if pos > 0:
        return visible[pos - 1]
    return None


def next_target(cursor: int, visible: Sequence[int]) -> Optional[int]:
    pos = position(cursor, visible)
    if pos != -1 and pos < len(visible) - 1:
        return visible[pos + 1]
    return None


def correct_for_wrong_mode(cursor: int, wrong: Sequence[int]) -> int:
    """
    Where the cursor should sit once the wrong-only view is active.
    Stays put when there is nothing wrong to show.
    """
    if wrong and cursor not in wrong:
        return wrong[0]
    return cursor
