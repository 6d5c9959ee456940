"""Layout-based extraction of Chinese VAT e-invoices from positioned text fragments."""

from .models import Invoice, InvoiceItem, InvoiceParty, TextFragment
from .pipeline import parse_invoice_pages

__all__ = ["Invoice", "InvoiceItem", "InvoiceParty", "TextFragment", "parse_invoice_pages"]
