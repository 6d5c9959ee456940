"""Unit tests for batch statistics."""

from fapiao_parser.batch.aggregation import ProcessingStats, compute_processing_stats
from fapiao_parser.models.invoice import (
    STATUS_DUPLICATE,
    STATUS_FAILED,
    STATUS_NORMAL,
    STATUS_PENDING,
    Invoice,
)


def _invoice(status, amount="0.00", tax="0.00"):
    return Invoice(status=status, total_amount=amount, total_tax=tax)


def test_empty_batch():
    stats = compute_processing_stats([])

    assert stats == ProcessingStats()
    assert stats.total_amount == "0.00"


def test_only_normal_records_summed():
    invoices = [
        _invoice(STATUS_NORMAL, "128.50", "16.11"),
        _invoice(STATUS_NORMAL, "100", "6"),
        _invoice(STATUS_DUPLICATE, "128.50", "16.11"),
        _invoice(STATUS_FAILED, "999.00", "1.00"),
    ]

    stats = compute_processing_stats(invoices)

    assert stats.total_amount == "228.50"
    assert stats.total_tax == "22.11"
    assert stats.invoice_count == 4
    assert stats.success_count == 2
    assert stats.duplicate_count == 1
    assert stats.fail_count == 1


def test_pending_counted_but_not_classified():
    stats = compute_processing_stats([_invoice(STATUS_PENDING, "10.00")])

    assert stats.invoice_count == 1
    assert stats.success_count == 0
    assert stats.total_amount == "0.00"


def test_unparsable_amount_counts_as_zero():
    stats = compute_processing_stats([_invoice(STATUS_NORMAL, "¥12.00", "abc"), _invoice(STATUS_NORMAL, "3.25")])

    assert stats.total_amount == "3.25"
    assert stats.total_tax == "0.00"


def test_to_dict():
    stats = compute_processing_stats([_invoice(STATUS_NORMAL, "1.50", "0.10")])

    assert stats.to_dict() == {
        "total_amount": "1.50",
        "total_tax": "0.10",
        "invoice_count": 1,
        "duplicate_count": 0,
        "success_count": 1,
        "fail_count": 0,
    }
