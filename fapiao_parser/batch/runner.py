"""Batch collection of invoice records with duplicate marking and statistics."""

import concurrent.futures
import copy
import logging
import threading
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from ..models.invoice import (
    STATUS_DUPLICATE,
    STATUS_FAILED,
    STATUS_NORMAL,
    Invoice,
    create_empty_invoice,
)
from ..pipeline.page_parser import FragmentLike, parse_invoice_pages
from ..pipeline.reader import FragmentLoadError, load_source
from .aggregation import ProcessingStats, compute_processing_stats

logger = logging.getLogger(__name__)

SOURCE_SUFFIXES = (".pdf", ".json")
LOAD_ERROR_REMARK = "file could not be read"

Document = Tuple[str, Sequence[Sequence[FragmentLike]]]


class InvoiceBatch:
    """The current batch of invoice records and its derived statistics.

    All writes happen under one lock and recompute stats from the full batch.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._invoices: List[Invoice] = []
        self._stats = ProcessingStats()

    @property
    def invoices(self) -> List[Invoice]:
        with self._lock:
            return list(self._invoices)

    @property
    def stats(self) -> ProcessingStats:
        with self._lock:
            return copy.copy(self._stats)

    def _find_duplicate(self, invoice: Invoice) -> int:
        """1-based batch position of an earlier record with the same code and number, or 0."""
        if not invoice.code or not invoice.number:
            return 0
        for position, existing in enumerate(self._invoices, start=1):
            if existing.code == invoice.code and existing.number == invoice.number:
                return position
        return 0

    def add_invoices(self, invoices: Iterable[Invoice]) -> List[Invoice]:
        """Classify and append freshly parsed records.

        Failed records stay failed; a record repeating an earlier (code, number)
        becomes duplicate; everything else becomes normal.

        Returns:
            The added records, with status assigned
        """
        added = []
        with self._lock:
            for invoice in invoices:
                if invoice.status != STATUS_FAILED:
                    duplicate_of = self._find_duplicate(invoice)
                    if duplicate_of:
                        invoice.status = STATUS_DUPLICATE
                        invoice.duplicate_info = f"duplicate of record #{duplicate_of}"
                    else:
                        invoice.status = STATUS_NORMAL
                self._invoices.append(invoice)
                added.append(invoice)
            self._stats = compute_processing_stats(self._invoices)
        return added

    def set_invoices(self, invoices: Iterable[Invoice]) -> ProcessingStats:
        """Replace the batch as-is (e.g. after user edits) and recompute stats."""
        with self._lock:
            self._invoices = list(invoices)
            self._stats = compute_processing_stats(self._invoices)
            logger.debug("Batch replaced: %d record(s)", len(self._invoices))
            return copy.copy(self._stats)

    def clear(self) -> None:
        self.set_invoices([])


def parse_documents(
    documents: Sequence[Document],
    batch: InvoiceBatch,
    max_workers: int = 1
) -> List[Invoice]:
    """Parse (filename, pages) documents and merge them into batch in input order.

    Args:
        documents: Sources to parse
        batch: Batch receiving the records
        max_workers: >1 parses documents on a thread pool

    Returns:
        All records added, in input order
    """
    if max_workers > 1 and len(documents) > 1:
        with concurrent.futures.ThreadPoolExecutor(max_workers=max_workers) as executor:
            parsed = list(executor.map(lambda doc: parse_invoice_pages(*doc), documents))
    else:
        parsed = [parse_invoice_pages(filename, pages) for filename, pages in documents]

    added = []
    for invoices in parsed:
        added.extend(batch.add_invoices(invoices))
    return added


def find_sources(input_path: Path) -> List[Path]:
    """PDF and fragment JSON files at input_path (a file or a directory)."""
    if input_path.is_file():
        return [input_path]
    return sorted(
        p for p in input_path.iterdir()
        if p.is_file() and p.suffix.lower() in SOURCE_SUFFIXES
    )


def run_batch(
    input_path: Union[str, Path],
    batch: Optional[InvoiceBatch] = None,
    max_workers: int = 1,
    verbose: bool = False
) -> InvoiceBatch:
    """Load every source under input_path, parse it and collect the records.

    A file that cannot be loaded yields one failed record named after the
    file; processing continues with the next file.

    Raises:
        ValueError: If input_path holds no PDF or fragment JSON files
    """
    input_path = Path(input_path)
    sources = find_sources(input_path)
    if not sources:
        raise ValueError(f"No PDF or fragment JSON files found in: {input_path}")

    batch = batch if batch is not None else InvoiceBatch()
    documents: List[Document] = []

    for i, source in enumerate(sources, start=1):
        if verbose:
            logger.info("Loading %d/%d: %s", i, len(sources), source.name)
        try:
            documents.append(load_source(source))
        except (FragmentLoadError, OSError) as e:
            logger.warning("Skipping %s: %s", source.name, e)
            # Flush what was loaded so record order follows file order
            parse_documents(documents, batch, max_workers)
            documents = []
            failed = create_empty_invoice(source.name, STATUS_FAILED, 0)
            failed.remark = f"{LOAD_ERROR_REMARK}: {e}"
            batch.add_invoices([failed])

    parse_documents(documents, batch, max_workers)

    stats = batch.stats
    logger.info(
        "Batch complete: %d invoice(s), %d normal, %d duplicate, %d failed, amount %s, tax %s",
        stats.invoice_count, stats.success_count, stats.duplicate_count,
        stats.fail_count, stats.total_amount, stats.total_tax
    )
    return batch
