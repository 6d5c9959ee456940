"""Fragment-to-row grouping based on Y-position alignment."""

from typing import List, Sequence

from ..models.fragment import TextFragment
from ..models.row import Row


def group_fragments_to_rows(fragments: Sequence[TextFragment], y_tolerance: float) -> List[Row]:
    """Group fragments into visual rows based on Y-position alignment.

    Args:
        fragments: Fragments in (roughly) reading order
        y_tolerance: Max |dy| between a fragment and a row's anchor

    Returns:
        List of Row objects, ordered top-to-bottom

    Algorithm:
    - Scan fragments in input order
    - Join the first row whose anchor Y (first fragment's Y) is within tolerance,
      else open a new row
    - Sort each row left-to-right, then rows by anchor Y

    Greedy single pass: row membership depends on insertion order.
    """
    if not fragments:
        return []

    groups: List[List[TextFragment]] = []

    for fragment in fragments:
        for group in groups:
            if abs(group[0].y - fragment.y) <= y_tolerance:
                group.append(fragment)
                break
        else:
            groups.append([fragment])

    rows = [_create_row_from_fragments(group) for group in groups]
    rows.sort(key=lambda r: r.y)
    return rows


def _create_row_from_fragments(fragments: List[TextFragment]) -> Row:
    """Create a Row from one cluster (first fragment is the anchor)."""
    anchor_y = fragments[0].y
    sorted_fragments = sorted(fragments, key=lambda f: f.x)

    return Row(
        fragments=sorted_fragments,
        y=anchor_y,
        x_min=min(f.x for f in sorted_fragments),
        x_max=max(f.right for f in sorted_fragments),
        text=" ".join(f.text for f in sorted_fragments)
    )
