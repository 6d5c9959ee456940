"""Batch collection and statistics."""

from .aggregation import ProcessingStats, compute_processing_stats
from .runner import InvoiceBatch, parse_documents, run_batch

__all__ = ["ProcessingStats", "compute_processing_stats", "InvoiceBatch", "parse_documents", "run_batch"]
