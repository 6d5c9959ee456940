"""Batch statistics derived from the current invoice records."""

from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterable

from ..models.invoice import STATUS_DUPLICATE, STATUS_FAILED, STATUS_NORMAL, Invoice


@dataclass
class ProcessingStats:
    """Summary of a batch.

    Attributes:
        total_amount: Sum of total_amount over normal records, two decimals
        total_tax: Sum of total_tax over normal records, two decimals
        invoice_count: Number of records in the batch
        duplicate_count: Records marked duplicate
        success_count: Records marked normal
        fail_count: Records marked parse failed
    """
    total_amount: str = "0.00"
    total_tax: str = "0.00"
    invoice_count: int = 0
    duplicate_count: int = 0
    success_count: int = 0
    fail_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _to_float(value: str) -> float:
    """Parse a printed amount; unparsable text counts as 0."""
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def compute_processing_stats(invoices: Iterable[Invoice]) -> ProcessingStats:
    """Recompute statistics from a full pass over the batch."""
    total_amount = 0.0
    total_tax = 0.0
    invoice_count = 0
    success_count = 0
    duplicate_count = 0
    fail_count = 0

    for invoice in invoices:
        invoice_count += 1
        if invoice.status == STATUS_NORMAL:
            success_count += 1
            total_amount += _to_float(invoice.total_amount)
            total_tax += _to_float(invoice.total_tax)
        elif invoice.status == STATUS_DUPLICATE:
            duplicate_count += 1
        elif invoice.status == STATUS_FAILED:
            fail_count += 1

    return ProcessingStats(
        total_amount=f"{total_amount:.2f}",
        total_tax=f"{total_tax:.2f}",
        invoice_count=invoice_count,
        duplicate_count=duplicate_count,
        success_count=success_count,
        fail_count=fail_count
    )
