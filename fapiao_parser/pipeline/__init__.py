"""Pipeline stages for invoice page parsing."""

from .page_parser import parse_invoice_pages, parse_page
from .proximity import extract_nearby_text
from .row_grouping import group_fragments_to_rows

__all__ = ["parse_invoice_pages", "parse_page", "extract_nearby_text", "group_fragments_to_rows"]
