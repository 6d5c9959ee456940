"""Line item extraction from the goods/services table.

The printed table has a fixed column order (name, model, unit, quantity, price,
amount, tax rate, tax) but model/unit cells are often blank, so fields are
assigned by offset from the END of each row and checked against the expected
format. Rows that fail a format check simply leave that field empty.
"""

import logging
import re
from typing import List, Sequence, Set

from ..config.profile_manager import get_tolerance
from ..models.fragment import TextFragment
from ..models.invoice import Invoice, InvoiceItem
from ..models.row import Row
from .row_grouping import group_fragments_to_rows

logger = logging.getLogger(__name__)

# Column header cells: 货物或应税劳务、服务名称 / 项目名称
_HEADER_KEYWORDS = ("货物", "项目")
_FOOTER_TEXTS = ("合", "合计")

# New items start with a "*category*" prefix; anything else may be a wrapped name
_ITEM_MARKER = "*"

_QUANTITY_PATTERN = re.compile(r"^\d+$")
_MONEY_PATTERN = re.compile(r"^[¥￥]?-?[\d.]+$")

UNRECOGNIZED_TABLE = "unrecognized"
UNRECOGNIZED_ITEM = "unrecognized item"


def _is_continuation_row(row: Row, row_index: int, items: List[InvoiceItem]) -> bool:
    return (
        len(row) <= 3
        and not row[0].text.startswith(_ITEM_MARKER)
        and row_index > 0
        and bool(items)
    )


def _parse_item_row(row: Row) -> InvoiceItem:
    """Assign a row's cells to item fields by offset from the row end."""
    item = InvoiceItem()
    count = len(row)
    consumed: Set[int] = set()

    for index, fragment in enumerate(row):
        value = fragment.text

        if index == 0:
            item.name = value

        if count > 5 and index in (count - 5, count - 4):
            if _QUANTITY_PATTERN.match(value) and index not in consumed:
                consumed.add(index)
                item.quantity = value
            if _MONEY_PATTERN.match(value) and index not in consumed:
                consumed.add(index)
                item.price = value

        if count > 3 and index == count - 3 and _MONEY_PATTERN.match(value):
            item.amount = value

        if count > 2 and index == count - 2 and "%" in value:
            item.tax_rate = value

        if count > 1 and index == count - 1 and _MONEY_PATTERN.match(value):
            item.tax = value

    return item


def _table_fragments(
    fragments: Sequence[TextFragment],
    header: TextFragment,
    footer: TextFragment
) -> List[TextFragment]:
    """Fragments strictly between the header row and the totals row."""
    top = max(header.y - get_tolerance("item_header_pad"), 0.0)
    bottom = footer.y
    guard = get_tolerance("item_footer_guard")
    first_value_y = header.y + get_tolerance("item_header_skip")

    return [
        item for item in fragments
        if top <= item.y < bottom
        and abs(bottom - item.y) >= guard
        and item.y >= first_value_y
    ]


def extract_invoice_items(fragments: Sequence[TextFragment], invoice: Invoice) -> None:
    """Extract line items into invoice.items.

    Args:
        fragments: Page fragments
        invoice: Invoice to update

    Behaviour:
    - No table header: one "unrecognized" sentinel item
    - Header but no totals row: items untouched
    - Otherwise one item per row, wrapped name rows appended to the previous
      item, and an "unrecognized item" sentinel if nothing was recognized
    """
    header = next(
        (item for item in fragments if any(k in item.text for k in _HEADER_KEYWORDS)),
        None
    )
    if header is None:
        logger.debug("Item table header not found")
        invoice.items.append(InvoiceItem.sentinel(UNRECOGNIZED_TABLE))
        return

    footer = next((item for item in fragments if item.text in _FOOTER_TEXTS), None)
    if footer is None:
        logger.debug("Item table footer not found below header at y=%.1f", header.y)
        return

    rows = group_fragments_to_rows(
        _table_fragments(fragments, header, footer),
        get_tolerance("item_row_y")
    )
    logger.debug("Item table: %d row(s)", len(rows))

    for row_index, row in enumerate(rows):
        if _is_continuation_row(row, row_index, invoice.items):
            invoice.items[-1].name += row[0].text
            continue

        invoice.items.append(_parse_item_row(row))

    if not invoice.items:
        invoice.items.append(InvoiceItem.sentinel(UNRECOGNIZED_ITEM))
