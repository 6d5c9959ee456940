"""Invoice data models: parties, line items and the per-page invoice record."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List

# Lifecycle tags
STATUS_PENDING = "pending"
STATUS_NORMAL = "normal"
STATUS_DUPLICATE = "duplicate"
STATUS_FAILED = "parse failed"

STATUSES = (STATUS_PENDING, STATUS_NORMAL, STATUS_DUPLICATE, STATUS_FAILED)

INVOICE_TYPE_VAT = "VAT e-invoice"
INVOICE_TYPE_GENERAL = "general invoice"

DEFAULT_TOTAL = "0.00"


@dataclass
class InvoiceParty:
    """Buying or selling entity on one invoice."""

    name: str = ""
    tax_code: str = ""
    address_phone: str = ""
    bank_account: str = ""


@dataclass
class InvoiceItem:
    """One line item.

    All values are the printed source text (currency symbols and formatting
    kept as-is). A field the table row could not populate stays "".
    """

    name: str = ""
    quantity: str = ""
    price: str = ""
    amount: str = ""
    tax_rate: str = ""
    tax: str = ""

    @classmethod
    def sentinel(cls, name: str) -> 'InvoiceItem':
        """Placeholder item used when no table rows are recognized."""
        return cls(name=name, quantity="0", price="0", amount="0", tax_rate="0", tax="0")


@dataclass
class Invoice:
    """Structured invoice record extracted from one page.

    Attributes:
        filename: Source filename, suffixed with "#page<n>" for pages after the first
        index: 1-based page position within the source
        title: Printed title (page-suffixed after the first page)
        invoice_type: INVOICE_TYPE_VAT, INVOICE_TYPE_GENERAL or "" if unknown
        code, number, date, checksum, machine_number, password: Identifying fields
        remark: Free text from the remark block, or the failure explanation
        buyer, seller: Party blocks
        items: Line items in table order
        total_amount, total_tax, total_amount_tax: Printed totals ("0.00" when absent)
        payee, reviewer, drawer: Signatories
        status: One of STATUSES
        duplicate_info: Which earlier record this one duplicates
    """

    filename: str = ""
    index: int = 0
    title: str = ""
    invoice_type: str = ""
    code: str = ""
    number: str = ""
    date: str = ""
    checksum: str = ""
    machine_number: str = ""
    password: str = ""
    remark: str = ""
    buyer: InvoiceParty = field(default_factory=InvoiceParty)
    seller: InvoiceParty = field(default_factory=InvoiceParty)
    items: List[InvoiceItem] = field(default_factory=list)
    total_amount: str = DEFAULT_TOTAL
    total_tax: str = DEFAULT_TOTAL
    total_amount_tax: str = DEFAULT_TOTAL
    payee: str = ""
    reviewer: str = ""
    drawer: str = ""
    status: str = STATUS_PENDING
    duplicate_info: str = ""

    def __post_init__(self):
        """Validate status tag."""
        if self.status not in STATUSES:
            raise ValueError(
                f"status must be one of {', '.join(STATUSES)}, got '{self.status}'"
            )

    @property
    def is_failed(self) -> bool:
        return self.status == STATUS_FAILED

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serialisable dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Invoice':
        """Create Invoice from dictionary (inverse of to_dict)."""
        values = dict(data)
        values['buyer'] = InvoiceParty(**(values.get('buyer') or {}))
        values['seller'] = InvoiceParty(**(values.get('seller') or {}))
        values['items'] = [InvoiceItem(**item) for item in values.get('items') or []]
        return cls(**values)


def page_filename(filename: str, page_index: int) -> str:
    """Disambiguate a multi-page source: pages after the first get a "#page<n>" suffix."""
    if page_index > 0:
        return f"{filename}#page{page_index + 1}"
    return filename


def create_empty_invoice(filename: str, status: str, page_index: int) -> Invoice:
    """Create the default record for one page.

    Args:
        filename: Source filename
        status: Initial lifecycle tag
        page_index: Page index (starts at 0)

    Returns:
        Invoice with every field at its documented default
    """
    return Invoice(
        filename=page_filename(filename, page_index),
        index=page_index + 1,
        status=status
    )
