"""Directional proximity search: read the value printed next to a label."""

import logging
import math
import re
from typing import List, Optional, Pattern, Sequence, Union

from ..config.profile_manager import get_tolerance
from ..models.fragment import TextFragment

logger = logging.getLogger(__name__)

RIGHT = "right"
LEFT = "left"
UP = "up"
DOWN = "down"
SAME_LINE = "same-line"

DIRECTIONS = (RIGHT, LEFT, UP, DOWN, SAME_LINE)


def find_landmark(
    fragments: Sequence[TextFragment],
    pattern: Union[str, Pattern[str]]
) -> Optional[int]:
    """Index of the first fragment whose text matches pattern, or None."""
    regex = re.compile(pattern) if isinstance(pattern, str) else pattern
    for i, fragment in enumerate(fragments):
        if regex.search(fragment.text):
            return i
    return None


def _in_corridor(
    item: TextFragment,
    ref: TextFragment,
    direction: str,
    max_distance: float,
    line_tolerance: float
) -> bool:
    dx = item.x - ref.x
    dy = item.y - ref.y

    if direction == RIGHT:
        return abs(dy) < line_tolerance and 0 < dx < max_distance
    if direction == LEFT:
        return abs(dy) < line_tolerance and 0 < -dx < max_distance
    if direction == UP:
        return abs(dx) < max_distance / 2 and 0 < -dy < max_distance
    if direction == DOWN:
        return abs(dx) < max_distance / 2 and 0 < dy < max_distance
    # same-line
    return abs(dy) < line_tolerance and abs(dx) < max_distance


def extract_nearby_text(
    fragments: Sequence[TextFragment],
    pattern: Union[str, Pattern[str]],
    direction: str,
    max_distance: float
) -> str:
    """Extract the text found next to a landmark in the given direction.

    Args:
        fragments: Page fragments
        pattern: Landmark pattern (matched with re.search against fragment text)
        direction: One of "right", "left", "up", "down", "same-line"
        max_distance: Max offset from the landmark along the direction

    Returns:
        Space-joined text of the candidates in reading order, trimmed;
        "" if no landmark matches

    Raises:
        ValueError: If direction is not one of DIRECTIONS

    Candidates containing a colon are dropped: they are further labels, not
    values. Y grows downward, so "up" means smaller Y.
    """
    if direction not in DIRECTIONS:
        raise ValueError(f"direction must be one of {', '.join(DIRECTIONS)}, got '{direction}'")

    ref_index = find_landmark(fragments, pattern)
    if ref_index is None:
        return ""

    ref = fragments[ref_index]
    line_tolerance = get_tolerance("line_y")

    candidates: List[TextFragment] = [
        item for i, item in enumerate(fragments)
        if i != ref_index and _in_corridor(item, ref, direction, max_distance, line_tolerance)
    ]

    candidates.sort(key=lambda c: math.hypot(c.x - ref.x, c.y - ref.y))

    # Reading order for the direction (stable, so distance breaks ties)
    if direction in (RIGHT, SAME_LINE):
        candidates.sort(key=lambda c: c.x)
    elif direction == LEFT:
        candidates.sort(key=lambda c: c.x, reverse=True)
    elif direction == UP:
        candidates.sort(key=lambda c: c.y, reverse=True)
    else:
        candidates.sort(key=lambda c: c.y)

    return " ".join(c.text for c in candidates if not c.has_colon).strip()
