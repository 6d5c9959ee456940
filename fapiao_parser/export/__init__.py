"""Spreadsheet export of invoice batches."""

from .excel_export import DEFAULT_EXPORT_FIELDS, EXPORT_FIELDS, export_invoices

__all__ = ["export_invoices", "EXPORT_FIELDS", "DEFAULT_EXPORT_FIELDS"]
