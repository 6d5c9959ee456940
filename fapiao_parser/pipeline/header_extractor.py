"""Title, identifying fields and signatories, read next to their printed labels."""

import logging
import re
from typing import Sequence

from ..models.fragment import TextFragment
from ..models.invoice import INVOICE_TYPE_GENERAL, INVOICE_TYPE_VAT, Invoice
from .proximity import RIGHT, extract_nearby_text, find_landmark

logger = logging.getLogger(__name__)

# 电子发票 / 电⼦发票 (Kangxi radical variant) / 增值税电子普通发票 ...
_TITLE_PATTERN = re.compile(r"电[⼦子]\S*")
_VAT_KEYWORD = "增值"
DEFAULT_TITLE = "invoice"

# (attribute, label pattern, max distance to the right of the label)
_HEADER_FIELDS = (
    ("code", re.compile(r"发票代码[:：]?"), 100.0),
    ("number", re.compile(r"发票号码[:：]?"), 100.0),
    ("date", re.compile(r"开票日期[:：]?"), 150.0),
    ("checksum", re.compile(r"^校验码[:：]|^码[:：]"), 250.0),
    ("machine_number", re.compile(r"机器编号[:：]?"), 150.0),
)

_SIGNATORY_FIELDS = (
    ("drawer", re.compile(r"^开票.?[:：]$"), 100.0),
    ("payee", re.compile(r"^收款.?[:：]$"), 100.0),
    ("reviewer", re.compile(r"^复核.?[:：]$"), 100.0),
)


def page_title(title: str, page_index: int) -> str:
    """Append the page number for pages after the first."""
    if page_index > 0:
        return f"{title} (page {page_index + 1})"
    return title


def extract_title(fragments: Sequence[TextFragment], invoice: Invoice, page_index: int) -> None:
    """Set invoice.title and invoice.invoice_type from the title landmark.

    Without a landmark the title falls back to "invoice" and the type stays
    unknown ("").
    """
    title_index = find_landmark(fragments, _TITLE_PATTERN)

    if title_index is None:
        logger.debug("Title landmark not found on page %d", page_index + 1)
        invoice.title = page_title(DEFAULT_TITLE, page_index)
        return

    text = fragments[title_index].text
    invoice.title = page_title(text, page_index)
    invoice.invoice_type = INVOICE_TYPE_VAT if _VAT_KEYWORD in text else INVOICE_TYPE_GENERAL


def extract_header_fields(fragments: Sequence[TextFragment], invoice: Invoice) -> None:
    """Code, number, date, checksum and machine number."""
    for attribute, pattern, max_distance in _HEADER_FIELDS:
        setattr(invoice, attribute, extract_nearby_text(fragments, pattern, RIGHT, max_distance))


def extract_signatories(fragments: Sequence[TextFragment], invoice: Invoice) -> None:
    """Drawer (开票人), payee (收款人) and reviewer (复核人)."""
    for attribute, pattern, max_distance in _SIGNATORY_FIELDS:
        setattr(invoice, attribute, extract_nearby_text(fragments, pattern, RIGHT, max_distance))
