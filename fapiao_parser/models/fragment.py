"""TextFragment data model representing a positioned text token on a page."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class TextFragment:
    """Represents one positioned text token produced by the page renderer.

    Coordinate system:
    - Origin (0, 0) is top-left corner
    - X increases rightward
    - Y increases downward

    Attributes:
        text: The text content
        x: X-coordinate (left edge)
        y: Y-coordinate (top edge)
        width: Fragment width
        height: Fragment height
        page_index: Page index (starts at 0)
        font_name: Optional font name (if available from source)
    """

    text: str
    x: float
    y: float
    width: float
    height: float
    page_index: int = 0
    font_name: Optional[str] = None

    def __post_init__(self):
        """Validate bbox dimensions are non-negative."""
        if self.width < 0 or self.height < 0:
            raise ValueError(
                f"Fragment dimensions must be non-negative: "
                f"width={self.width}, height={self.height}"
            )

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def has_colon(self) -> bool:
        """True if the text carries an ASCII or full-width colon (marks a label)."""
        return ':' in self.text or '：' in self.text

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TextFragment':
        """Create TextFragment from dictionary.

        Accepts the renderer's camelCase keys (pageIndex, fontName) as well as
        snake_case keys.
        """
        page_index = data.get('page_index', data.get('pageIndex', 0))
        font_name = data.get('font_name', data.get('fontName'))
        return cls(
            text=str(data.get('text', '')),
            x=float(data.get('x', 0.0)),
            y=float(data.get('y', 0.0)),
            width=float(data.get('width', 0.0)),
            height=float(data.get('height', 0.0)),
            page_index=int(page_index or 0),
            font_name=font_name
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'text': self.text,
            'x': self.x,
            'y': self.y,
            'width': self.width,
            'height': self.height,
            'page_index': self.page_index,
            'font_name': self.font_name
        }
