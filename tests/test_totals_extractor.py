"""Unit tests for totals extraction."""

from fapiao_parser.models.fragment import TextFragment
from fapiao_parser.models.invoice import DEFAULT_TOTAL, Invoice
from fapiao_parser.pipeline.totals_extractor import extract_total_amount_and_tax, strip_currency


def _f(text, x, y, width=30, height=10):
    return TextFragment(text=text, x=x, y=y, width=width, height=height)


def test_split_currency_symbols():
    fragments = [
        _f("合计", 40, 260),
        _f("¥", 310, 260, width=8),
        _f("128.50", 320, 260),
        _f("¥", 420, 260, width=8),
        _f("8.90", 430, 260),
    ]
    invoice = Invoice()

    extract_total_amount_and_tax(fragments, invoice)

    assert invoice.total_amount == "128.50"
    assert invoice.total_tax == "8.90"
    assert invoice.total_amount_tax == DEFAULT_TOTAL


def test_joined_currency_symbols():
    fragments = [_f("合计", 40, 260), _f("￥8.90", 430, 261), _f("¥128.50", 310, 259)]
    invoice = Invoice()

    extract_total_amount_and_tax(fragments, invoice)

    assert invoice.total_amount == "128.50"
    assert invoice.total_tax == "8.90"


def test_amount_tax_in_figures():
    fragments = [
        _f("合计", 40, 260),
        _f("¥128.50", 310, 260),
        _f("¥16.11", 420, 260),
        _f("价税合计（大写）", 40, 275, width=80),
        _f("壹佰肆拾肆圆陆角壹分", 150, 275, width=100),
        _f("（小写）", 350, 275),
        _f("¥144.61", 390, 275),
    ]
    invoice = Invoice()

    extract_total_amount_and_tax(fragments, invoice)

    assert invoice.total_amount == "128.50"
    assert invoice.total_tax == "16.11"
    assert invoice.total_amount_tax == "144.61"


def test_single_value_sets_amount_only():
    fragments = [_f("合计", 40, 260), _f("¥100.00", 310, 260), _f("***", 420, 260)]
    invoice = Invoice()

    extract_total_amount_and_tax(fragments, invoice)

    assert invoice.total_amount == "100.00"
    assert invoice.total_tax == DEFAULT_TOTAL


def test_values_left_of_landmark_ignored():
    fragments = [_f("99.00", 10, 260), _f("合计", 40, 260), _f("¥100.00", 310, 260)]
    invoice = Invoice()

    extract_total_amount_and_tax(fragments, invoice)

    assert invoice.total_amount == "100.00"
    assert invoice.total_tax == DEFAULT_TOTAL


def test_no_landmark_keeps_defaults():
    invoice = Invoice()

    extract_total_amount_and_tax([_f("¥100.00", 310, 260)], invoice)

    assert invoice.total_amount == DEFAULT_TOTAL
    assert invoice.total_tax == DEFAULT_TOTAL
    assert invoice.total_amount_tax == DEFAULT_TOTAL


def test_strip_currency():
    assert strip_currency("¥1.00") == "1.00"
    assert strip_currency("￥1.00") == "1.00"
    assert strip_currency("1.00") == "1.00"
