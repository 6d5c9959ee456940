"""Row data model representing a visual row of fragments grouped by Y-position."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator, List

if TYPE_CHECKING:
    from .fragment import TextFragment


@dataclass
class Row:
    """Represents a visual row of fragments grouped by Y-position.

    Important: fragments is the source of truth.
    text is CONVENIENCE only - use fragments for exact positioning.

    Attributes:
        fragments: List of TextFragment objects in this row, left-to-right
        y: Anchor Y-coordinate (Y of the fragment that opened the row)
        x_min: Minimum X-coordinate in row
        x_max: Maximum right edge in row
        text: Space-joined text from all fragments (CONVENIENCE only)
    """

    fragments: List[TextFragment]
    y: float
    x_min: float
    x_max: float
    text: str

    def __post_init__(self):
        """Validate that row has fragments."""
        if not self.fragments:
            raise ValueError("Row must have at least one fragment")

        if self.x_min > self.x_max:
            raise ValueError(
                f"Row x_min ({self.x_min}) must be <= x_max ({self.x_max})"
            )

    def __len__(self) -> int:
        return len(self.fragments)

    def __iter__(self) -> Iterator[TextFragment]:
        return iter(self.fragments)

    def __getitem__(self, index: int) -> TextFragment:
        return self.fragments[index]
