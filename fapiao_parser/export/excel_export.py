"""Excel export of the invoice batch with Chinese column names."""

import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

import pandas as pd
from openpyxl.styles import Border, Font, PatternFill, Side
from openpyxl.worksheet.worksheet import Worksheet

from ..config.settings import get_default_export_name
from ..models.invoice import STATUS_DUPLICATE, Invoice

logger = logging.getLogger(__name__)

SUMMARY_SHEET = "发票汇总"
DETAIL_SHEET = "发票明细"

# Canonical field key -> (column header, column width)
EXPORT_FIELDS: Dict[str, tuple] = {
    "index": ("序号", 10),
    "filename": ("文件名", 30),
    "status": ("状态", 10),
    "title": ("发票标题", 30),
    "invoice_type": ("发票类型", 20),
    "code": ("发票代码", 20),
    "number": ("发票号码", 20),
    "date": ("开票日期", 15),
    "checksum": ("校验码", 25),
    "machine_number": ("机器编号", 20),
    "buyer_name": ("购买方名称", 30),
    "buyer_tax_code": ("购买方税号", 25),
    "buyer_address_phone": ("购买方地址、电话", 40),
    "buyer_bank_account": ("购买方开户行账号", 40),
    "seller_name": ("销售方名称", 30),
    "seller_tax_code": ("销售方税号", 25),
    "seller_address_phone": ("销售方地址电话", 40),
    "seller_bank_account": ("销售方开户行账号", 40),
    "payee": ("收款人", 15),
    "reviewer": ("复核人", 15),
    "drawer": ("开票人", 15),
    "total_amount": ("金额", 15),
    "total_tax": ("税额", 15),
    "total_amount_tax": ("价税合计", 15),
    "remark": ("备注", 30),
    "duplicate_info": ("重复信息", 20),
}

DEFAULT_EXPORT_FIELDS = [
    "index", "filename", "status", "code", "number", "date",
    "buyer_name", "buyer_tax_code", "buyer_address_phone", "buyer_bank_account",
    "seller_name", "seller_tax_code", "seller_address_phone", "seller_bank_account",
    "payee", "reviewer", "drawer",
    "total_amount", "total_tax", "total_amount_tax",
    "remark", "duplicate_info",
]

_NUMERIC_FIELDS = frozenset(["total_amount", "total_tax", "total_amount_tax"])

DETAIL_COLUMNS = [
    ("序号", 10), ("发票日期", 25), ("发票号码", 25), ("项目名称", 40),
    ("数量", 15), ("单价", 15), ("金额", 15), ("税率", 15), ("税额", 15),
]
# Detail columns merged across an invoice's item rows (1-based)
_MERGED_DETAIL_COLUMNS = (1, 2, 3)

_THIN = Side(style="thin")
_BORDER = Border(left=_THIN, right=_THIN, top=_THIN, bottom=_THIN)
_HEADER_FILL = PatternFill(start_color="D9E1F2", end_color="D9E1F2", fill_type="solid")
_DUPLICATE_FILLS = [
    PatternFill(start_color=color, end_color=color, fill_type="solid")
    for color in ("FFCCCB", "FFDAB9", "FAFAD2", "E0FFFF", "D8BFD8")
]

Opener = Callable[[Path], Any]


def _number_or_text(value: str) -> Union[float, str]:
    """Write amounts as numbers when they parse, otherwise keep the printed text."""
    try:
        return float(value)
    except (TypeError, ValueError):
        return value


def _field_value(invoice: Invoice, key: str) -> Any:
    if key.startswith("buyer_"):
        return getattr(invoice.buyer, key[len("buyer_"):])
    if key.startswith("seller_"):
        return getattr(invoice.seller, key[len("seller_"):])
    value = getattr(invoice, key)
    if key in _NUMERIC_FIELDS:
        return _number_or_text(value)
    return value


def resolve_export_fields(export_fields: Optional[Sequence[str]]) -> List[str]:
    """Known field keys in the requested order; unknown keys are logged and skipped.

    Column headers (e.g. "发票号码") are accepted in place of keys.
    """
    if not export_fields:
        return list(DEFAULT_EXPORT_FIELDS)

    by_header = {header: key for key, (header, _) in EXPORT_FIELDS.items()}
    fields = []
    for name in export_fields:
        key = name if name in EXPORT_FIELDS else by_header.get(name)
        if key is None:
            logger.warning("Unknown export field skipped: %s", name)
            continue
        fields.append(key)
    return fields


def duplicate_groups(invoices: Sequence[Invoice]) -> Dict[tuple, int]:
    """Group number per (code, number) among duplicate records, in first-seen order."""
    groups: Dict[tuple, int] = {}
    for invoice in invoices:
        if invoice.status == STATUS_DUPLICATE:
            groups.setdefault((invoice.code, invoice.number), len(groups))
    return groups


def _style_header(worksheet: Worksheet, widths: Sequence[int]) -> None:
    for col_idx, width in enumerate(widths, start=1):
        cell = worksheet.cell(row=1, column=col_idx)
        cell.font = Font(bold=True)
        cell.border = _BORDER
        cell.fill = _HEADER_FILL
        worksheet.column_dimensions[cell.column_letter].width = width


def _write_summary(writer: pd.ExcelWriter, invoices: Sequence[Invoice], fields: List[str]) -> None:
    headers = [EXPORT_FIELDS[key][0] for key in fields]
    rows = [[_field_value(invoice, key) for key in fields] for invoice in invoices]
    pd.DataFrame(rows, columns=headers).to_excel(writer, index=False, sheet_name=SUMMARY_SHEET)

    worksheet = writer.sheets[SUMMARY_SHEET]
    _style_header(worksheet, [EXPORT_FIELDS[key][1] for key in fields])

    groups = duplicate_groups(invoices)
    for row_idx, invoice in enumerate(invoices, start=2):
        fill = None
        if invoice.status == STATUS_DUPLICATE:
            group = groups[(invoice.code, invoice.number)]
            fill = _DUPLICATE_FILLS[group % len(_DUPLICATE_FILLS)]
        for col_idx in range(1, len(fields) + 1):
            cell = worksheet.cell(row=row_idx, column=col_idx)
            cell.border = _BORDER
            if fill is not None:
                cell.fill = fill


def _write_details(writer: pd.ExcelWriter, invoices: Sequence[Invoice]) -> None:
    rows = []
    spans = []  # (first row, last row) per invoice with more than one item
    next_row = 2
    for invoice in invoices:
        if not invoice.items:
            continue
        for item in invoice.items:
            rows.append([
                str(invoice.index),
                invoice.date,
                invoice.number,
                item.name,
                _number_or_text(item.quantity),
                _number_or_text(item.price),
                _number_or_text(item.amount),
                item.tax_rate,
                _number_or_text(item.tax),
            ])
        last_row = next_row + len(invoice.items) - 1
        if last_row > next_row:
            spans.append((next_row, last_row))
        next_row = last_row + 1

    headers = [header for header, _ in DETAIL_COLUMNS]
    pd.DataFrame(rows, columns=headers).to_excel(writer, index=False, sheet_name=DETAIL_SHEET)

    worksheet = writer.sheets[DETAIL_SHEET]
    _style_header(worksheet, [width for _, width in DETAIL_COLUMNS])

    for row_idx in range(2, next_row):
        for col_idx in range(1, len(DETAIL_COLUMNS) + 1):
            worksheet.cell(row=row_idx, column=col_idx).border = _BORDER

    for first_row, last_row in spans:
        for col_idx in _MERGED_DETAIL_COLUMNS:
            worksheet.merge_cells(
                start_row=first_row, start_column=col_idx,
                end_row=last_row, end_column=col_idx
            )


def export_invoices(
    invoices: Sequence[Invoice],
    output_dir: Union[str, Path],
    filename: Optional[str] = None,
    export_fields: Optional[Sequence[str]] = None,
    with_details: bool = False,
    opener: Optional[Opener] = None
) -> Path:
    """Export the batch to <output_dir>/<filename>.xlsx.

    Args:
        invoices: Current batch of records
        output_dir: Output directory (created if needed)
        filename: Workbook name without extension (settings default if None)
        export_fields: Field keys (or Chinese headers) for the summary sheet;
            DEFAULT_EXPORT_FIELDS if None
        with_details: Also write one row per line item on a second sheet
        opener: Called with the written path (e.g. to open it in a desktop app)

    Returns:
        Path to created Excel file

    Raises:
        ValueError: If invoices is empty
    """
    if not invoices:
        raise ValueError("No invoice data to export")

    if filename is None:
        filename = get_default_export_name()

    fields = resolve_export_fields(export_fields)

    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)
    excel_path = output_path / f"{filename}.xlsx"

    with pd.ExcelWriter(excel_path, engine="openpyxl") as writer:
        _write_summary(writer, invoices, fields)
        if with_details:
            _write_details(writer, invoices)

    logger.info("Exported %d invoice(s) to %s", len(invoices), excel_path)

    if opener is not None:
        opener(excel_path)

    return excel_path
