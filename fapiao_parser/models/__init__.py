"""Data models for fragments, rows and invoice records."""

from .fragment import TextFragment
from .invoice import (
    INVOICE_TYPE_GENERAL,
    INVOICE_TYPE_VAT,
    STATUS_DUPLICATE,
    STATUS_FAILED,
    STATUS_NORMAL,
    STATUS_PENDING,
    Invoice,
    InvoiceItem,
    InvoiceParty,
    create_empty_invoice,
)
from .row import Row

__all__ = [
    "TextFragment",
    "Row",
    "Invoice",
    "InvoiceItem",
    "InvoiceParty",
    "create_empty_invoice",
    "STATUS_PENDING",
    "STATUS_NORMAL",
    "STATUS_DUPLICATE",
    "STATUS_FAILED",
    "INVOICE_TYPE_VAT",
    "INVOICE_TYPE_GENERAL",
]
