"""Page orchestrator: one invoice record per page, whatever happens on the page."""

import logging
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from ..models.fragment import TextFragment
from ..models.invoice import STATUS_FAILED, STATUS_PENDING, Invoice, InvoiceItem, create_empty_invoice
from .header_extractor import extract_header_fields, extract_signatories, extract_title
from .item_extractor import UNRECOGNIZED_ITEM, extract_invoice_items
from .party_extractor import BUYER_HEADER, SELLER_HEADER, extract_party_info
from .remark_extractor import extract_remark_info
from .totals_extractor import extract_total_amount_and_tax

logger = logging.getLogger(__name__)

EMPTY_PAGE_REMARK = "page has no recognizable text"
NO_PAGES_REMARK = "no invoice information could be recognized"
PARSE_ERROR_REMARK = "invoice parsing raised an error"

FragmentLike = Union[TextFragment, Dict[str, Any]]


class PageState(Enum):
    """Stage reached by the page pipeline."""
    EMPTY = "empty"
    TITLE_RESOLVED = "title_resolved"
    PARTIES_RESOLVED = "parties_resolved"
    ITEMS_RESOLVED = "items_resolved"
    TOTALS_RESOLVED = "totals_resolved"
    DONE = "done"
    FAILED = "failed"


def _enter(state: PageState, page_index: int) -> PageState:
    logger.debug("Page %d: %s", page_index + 1, state.value)
    return state


def parse_page(fragments: Sequence[TextFragment], invoice: Invoice, page_index: int) -> Invoice:
    """Run every extractor over one page, updating invoice in place.

    Args:
        fragments: The page's fragments (read-only)
        invoice: Default record for this page
        page_index: Page index (starts at 0)

    Returns:
        The updated invoice
    """
    _enter(PageState.EMPTY, page_index)
    invoice.index = page_index + 1

    extract_title(fragments, invoice, page_index)
    extract_header_fields(fragments, invoice)
    _enter(PageState.TITLE_RESOLVED, page_index)

    extract_party_info(fragments, invoice, BUYER_HEADER, is_seller=False)
    extract_party_info(fragments, invoice, SELLER_HEADER, is_seller=True)
    extract_signatories(fragments, invoice)
    extract_remark_info(fragments, invoice)
    _enter(PageState.PARTIES_RESOLVED, page_index)

    extract_invoice_items(fragments, invoice)
    # Header without a totals row leaves the table empty
    if not invoice.items:
        invoice.items.append(InvoiceItem.sentinel(UNRECOGNIZED_ITEM))
    _enter(PageState.ITEMS_RESOLVED, page_index)

    extract_total_amount_and_tax(fragments, invoice)
    _enter(PageState.TOTALS_RESOLVED, page_index)

    _enter(PageState.DONE, page_index)
    return invoice


def _parse_page_safely(
    fragments: Sequence[TextFragment],
    filename: str,
    page_index: int
) -> Tuple[bool, Invoice, Optional[str]]:
    """Fault boundary around parse_page.

    Returns:
        (success, invoice, error). On failure invoice is a fresh failed record
        carrying an explanatory remark.
    """
    invoice = create_empty_invoice(filename, STATUS_PENDING, page_index)
    try:
        return True, parse_page(fragments, invoice, page_index), None
    except Exception as e:
        logger.exception("Page %d of %s could not be parsed", page_index + 1, filename)
        _enter(PageState.FAILED, page_index)
        failed = create_empty_invoice(filename, STATUS_FAILED, page_index)
        failed.remark = f"{PARSE_ERROR_REMARK}: {e}"
        return False, failed, str(e)


def _as_fragments(page: Sequence[FragmentLike]) -> List[TextFragment]:
    return [f if isinstance(f, TextFragment) else TextFragment.from_dict(f) for f in page]


def parse_invoice_pages(filename: str, pages: Sequence[Sequence[FragmentLike]]) -> List[Invoice]:
    """Parse every page of one source into invoice records.

    Args:
        filename: Source filename (used for record identity)
        pages: One fragment list per page, in page order; fragments may be
            TextFragment objects or renderer dicts

    Returns:
        One Invoice per page in input order; a single failed record if there
        are no pages. Never raises for page content problems.
    """
    results: List[Invoice] = []

    for page_index, page in enumerate(pages):
        try:
            fragments = _as_fragments(page)
        except (TypeError, ValueError, AttributeError) as e:
            logger.warning("Page %d of %s has malformed fragments: %s", page_index + 1, filename, e)
            failed = create_empty_invoice(filename, STATUS_FAILED, page_index)
            failed.remark = f"{PARSE_ERROR_REMARK}: {e}"
            results.append(failed)
            continue

        if not fragments:
            logger.warning("Page %d of %s has no text fragments, skipping", page_index + 1, filename)
            failed = create_empty_invoice(filename, STATUS_FAILED, page_index)
            failed.remark = EMPTY_PAGE_REMARK
            results.append(failed)
            continue

        _, invoice, _ = _parse_page_safely(fragments, filename, page_index)
        results.append(invoice)

    if not results:
        failed = create_empty_invoice(filename, STATUS_FAILED, 0)
        failed.remark = NO_PAGES_REMARK
        results.append(failed)

    logger.info(
        "Parsed %s: %d page(s), %d failed",
        filename, len(results), sum(1 for r in results if r.is_failed)
    )
    return results
