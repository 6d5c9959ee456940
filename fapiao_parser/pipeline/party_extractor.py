"""Buyer/seller block extraction.

The party block on a VAT e-invoice is headed by a vertical run of single glyphs
(购买方信息 / 销售方信息) in the left margin. The header glyph and the closing
glyph bound a rectangle to their right; each field is read as the text to the
right of its label inside that rectangle.
"""

import logging
import math
import re
from typing import List, Optional, Sequence

from ..config.profile_manager import get_tolerance
from ..models.fragment import TextFragment
from ..models.invoice import INVOICE_TYPE_GENERAL, Invoice, InvoiceParty

logger = logging.getLogger(__name__)

BUYER_HEADER = "购"
SELLER_HEADER = "销"

# Closing glyphs of the vertical header run; "⽅" is the Kangxi radical form
FOOTER_GLYPH = "息"
FALLBACK_FOOTER_GLYPHS = ("方", "⽅")

NAME_LABEL = re.compile(r"称[:：]?$")
TAX_CODE_LABEL = re.compile(r"识别号[:：]?$")
ADDRESS_PHONE_LABEL = re.compile(r"电话[:：]?$")
BANK_ACCOUNT_LABEL = re.compile(r"开户行及账号[:：]?$")

# (left offset, right offset, vertical pad) from the header glyph
GENERAL_INVOICE_OFFSETS = (8.0, 250.0, 0.0)
VAT_INVOICE_OFFSETS = (15.0, 300.0, 8.0)


def _find_footer(fragments: Sequence[TextFragment], header: TextFragment) -> Optional[TextFragment]:
    """Closing glyph below the header in the same column.

    The last matching "息" wins; a "方" within the footer window is only
    taken while nothing else has been found.
    """
    column_tolerance = get_tolerance("party_footer_x")
    window = get_tolerance("party_footer_window")

    footer = None
    for item in fragments:
        if abs(header.x - item.x) > column_tolerance or item.y <= header.y:
            continue
        if item.text == FOOTER_GLYPH:
            footer = item
        elif (
            item.text in FALLBACK_FOOTER_GLYPHS
            and item.y - header.y < window
            and footer is None
        ):
            footer = item
    return footer


def _collect_area(
    fragments: Sequence[TextFragment],
    header: TextFragment,
    footer: TextFragment,
    invoice_type: str
) -> List[TextFragment]:
    if invoice_type == INVOICE_TYPE_GENERAL:
        offset_left, offset_right, offset_y = GENERAL_INVOICE_OFFSETS
    else:
        offset_left, offset_right, offset_y = VAT_INVOICE_OFFSETS

    left = math.floor(header.x) + offset_left
    right = math.floor(header.x) + offset_right
    top = math.floor(header.y) - offset_y
    bottom = math.floor(footer.y) + offset_y

    return [
        item for item in fragments
        if left <= item.x <= right
        and top <= item.y <= bottom
        and item.page_index == footer.page_index
    ]


def _field_value(area: List[TextFragment], label_pattern: re.Pattern) -> str:
    """Concatenate the area fragments printed to the right of the label."""
    label_index = next(
        (i for i, item in enumerate(area) if label_pattern.search(item.text)),
        None
    )
    if label_index is None:
        return ""

    label = area[label_index]
    y_tolerance = get_tolerance("party_label_y")

    return "".join(
        item.text for i, item in enumerate(area)
        if i != label_index
        and item.x >= label.right
        and abs(item.y - label.y) <= y_tolerance
        and not item.has_colon
    )


def extract_party_info(
    fragments: Sequence[TextFragment],
    invoice: Invoice,
    header_char: str,
    is_seller: bool
) -> None:
    """Extract a party block into invoice.buyer or invoice.seller.

    Args:
        fragments: Page fragments
        invoice: Invoice to update (invoice_type picks the region offsets)
        header_char: Header glyph, BUYER_HEADER or SELLER_HEADER
        is_seller: Write to invoice.seller instead of invoice.buyer

    A missing header, footer or label leaves the field empty.
    """
    header = next((item for item in fragments if item.text == header_char), None)
    if header is None:
        logger.debug("Party header %r not found", header_char)
        return

    footer = _find_footer(fragments, header)
    if footer is None:
        logger.debug("Party footer for %r not found below y=%.1f", header_char, header.y)
        return

    area = _collect_area(fragments, header, footer, invoice.invoice_type)

    party = InvoiceParty(
        name=_field_value(area, NAME_LABEL),
        tax_code=_field_value(area, TAX_CODE_LABEL),
        address_phone=_field_value(area, ADDRESS_PHONE_LABEL),
        bank_account=_field_value(area, BANK_ACCOUNT_LABEL)
    )

    if is_seller:
        invoice.seller = party
    else:
        invoice.buyer = party
