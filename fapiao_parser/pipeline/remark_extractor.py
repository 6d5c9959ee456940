"""Remark (备注) block extraction."""

import logging
from typing import Sequence

from ..config.profile_manager import get_tolerance
from ..models.fragment import TextFragment
from ..models.invoice import Invoice

logger = logging.getLogger(__name__)

REMARK_HEADER = "备"


def extract_remark_info(fragments: Sequence[TextFragment], invoice: Invoice) -> None:
    """Extract the remark block to the right of the "备" glyph into invoice.remark.

    Fragments keep reading order; a line break is inserted whenever Y changes
    from one collected fragment to the next.
    """
    header = next((item for item in fragments if item.text == REMARK_HEADER), None)
    if header is None:
        logger.debug("Remark header not found")
        return

    top = header.y - get_tolerance("remark_above")
    bottom = header.y + get_tolerance("remark_below")

    area = [
        item for item in fragments
        if item.x >= header.right and top <= item.y <= bottom
    ]

    parts = []
    for i, item in enumerate(area):
        if i > 0 and area[i - 1].y != item.y:
            parts.append("\n")
        parts.append(item.text)

    invoice.remark = "".join(parts)
