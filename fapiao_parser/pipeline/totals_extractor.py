"""Totals (合计 row and 价税合计 in figures) extraction."""

import logging
import re
from typing import List, Sequence

from ..config.profile_manager import get_tolerance
from ..models.fragment import TextFragment
from ..models.invoice import Invoice
from .proximity import RIGHT, extract_nearby_text

logger = logging.getLogger(__name__)

_TOTALS_TEXTS = ("计", "合计")
_CURRENCY_SYMBOLS = ("¥", "￥")

_AMOUNT_PATTERN = re.compile(r"^[¥￥]?\d+(\.\d+)?$")
_BARE_NUMBER_PATTERN = re.compile(r"^\d+(\.\d+)?$")
# 价税合计（大写）... （小写）¥138.40
_IN_FIGURES_PATTERN = re.compile(r"[（(]?小写[)）]?")


def strip_currency(text: str) -> str:
    for symbol in _CURRENCY_SYMBOLS:
        text = text.replace(symbol, "")
    return text


def _scan_amounts(row: List[TextFragment]) -> List[str]:
    """Numeric strings in a totals row, left to right.

    The renderer sometimes splits "¥128.50" into "¥" and "128.50"; a lone
    symbol followed by a bare number counts as one amount.
    """
    values = []
    i = 0
    while i < len(row):
        text = row[i].text
        if _AMOUNT_PATTERN.match(text):
            values.append(strip_currency(text))
        elif text in _CURRENCY_SYMBOLS and i + 1 < len(row):
            next_text = row[i + 1].text
            if _BARE_NUMBER_PATTERN.match(next_text):
                values.append(next_text)
                i += 1
        i += 1
    return values


def extract_total_amount_and_tax(fragments: Sequence[TextFragment], invoice: Invoice) -> None:
    """Extract total_amount, total_tax and total_amount_tax into invoice.

    Without a totals landmark all three totals keep their defaults.
    """
    landmark = next((item for item in fragments if item.text in _TOTALS_TEXTS), None)
    if landmark is None:
        logger.debug("Totals landmark not found")
        return

    row_tolerance = get_tolerance("totals_row_y")
    same_row = sorted(
        (t for t in fragments if abs(t.y - landmark.y) < row_tolerance and t.x > landmark.x),
        key=lambda t: t.x
    )

    values = _scan_amounts(same_row)
    if values:
        invoice.total_amount = values[0]
        if len(values) > 1:
            invoice.total_tax = values[1]

    amount_tax = strip_currency(
        extract_nearby_text(fragments, _IN_FIGURES_PATTERN, RIGHT, 100.0)
    ).strip()
    if amount_tax:
        invoice.total_amount_tax = amount_tax
