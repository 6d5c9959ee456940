"""Shared fixtures."""

import pytest

from fapiao_parser.config.profile_manager import reset_profile
from fapiao_parser.models.fragment import TextFragment


@pytest.fixture(autouse=True)
def default_profile():
    """Every test starts from the default tolerance profile."""
    reset_profile()
    yield
    reset_profile()


def _f(text, x, y, width=10, height=10, page_index=0):
    return TextFragment(text=text, x=x, y=y, width=width, height=height, page_index=page_index)


def build_vat_page(number="12345678", page_index=0):
    """Fragments of a complete single-page VAT e-invoice."""
    def f(text, x, y, width=10):
        return _f(text, x, y, width=width, page_index=page_index)

    fragments = [
        f("增值税电子普通发票", 200, 20, width=120),
        f("发票代码:", 400, 40, width=50),
        f("044031900111", 455, 40, width=60),
        f("发票号码:", 400, 55, width=50),
        f(number, 455, 55, width=45),
        f("开票日期:", 400, 70, width=50),
        f("2024年01月15日", 455, 70, width=70),
        f("机器编号:", 20, 85, width=50),
        f("499099", 80, 85, width=35),
        f("校验码:", 400, 85, width=40),
        f("12345 67890", 455, 85, width=60),
    ]

    # Buyer block
    fragments += [f(ch, 20, 110 + 12 * i) for i, ch in enumerate("购买方信息")]
    fragments += [
        f("名称:", 40, 110, width=40),
        f("某某科技有限公司", 85, 110, width=80),
        f("纳税人识别号:", 40, 124, width=70),
        f("91110000MA01ABCD2X", 115, 124, width=90),
        f("地址、电话:", 40, 138, width=55),
        f("北京市海淀区", 100, 138, width=60),
        f("010-12345678", 180, 138, width=60),
        f("开户行及账号:", 40, 152, width=70),
        f("工商银行 1234", 115, 152, width=60),
    ]

    # Item table
    fragments += [
        f("货物或应税劳务、服务名称", 40, 180, width=110),
        f("规格型号", 160, 180, width=40),
        f("单位", 210, 180, width=20),
        f("数量", 240, 180, width=20),
        f("单价", 280, 180, width=20),
        f("金额", 330, 180, width=20),
        f("税率", 390, 180, width=20),
        f("税额", 430, 180, width=20),
    ]
    row = ["*办公用品*打印纸", "A4", "箱", "10", "12.00", "120.00", "13%", "15.60"]
    fragments += [f(text, x, 200, width=30) for text, x in zip(row, (40, 160, 210, 240, 280, 330, 390, 430))]
    fragments.append(f("（A4 80g）", 40, 212, width=50))
    row = ["*餐饮服务*餐费", "1", "8.50", "8.50", "6%", "0.51"]
    fragments += [f(text, x, 230, width=30) for text, x in zip(row, (40, 240, 280, 330, 390, 430))]

    # Totals
    fragments += [
        f("合计", 40, 260, width=20),
        f("¥", 310, 260),
        f("128.50", 320, 260, width=30),
        f("¥", 420, 260),
        f("16.11", 430, 260, width=25),
        f("价税合计（大写）", 40, 275, width=80),
        f("壹佰肆拾肆圆陆角壹分", 150, 275, width=100),
        f("（小写）", 350, 275, width=30),
        f("¥144.61", 390, 275, width=40),
    ]

    # Seller block
    fragments += [f(ch, 22, 300 + 12 * i) for i, ch in enumerate("销售方信息")]
    fragments += [
        f("名称:", 40, 300, width=40),
        f("某某商贸有限公司", 85, 300, width=80),
        f("纳税人识别号:", 40, 314, width=70),
        f("91440300MA5XXXXX1Y", 115, 314, width=90),
        f("地址、电话:", 40, 328, width=55),
        f("深圳市南山区0755-8888", 100, 328, width=100),
        f("开户行及账号:", 40, 342, width=70),
        f("建设银行 5678", 115, 342, width=60),
    ]

    # Remark
    fragments += [
        f("备", 500, 300),
        f("订单号 A001", 520, 300, width=50),
        f("合同 B", 520, 312, width=30),
    ]

    # Signatories
    fragments += [
        f("收款人:", 40, 380, width=35),
        f("张三", 80, 380, width=20),
        f("复核:", 160, 380, width=25),
        f("李四", 195, 380, width=20),
        f("开票人:", 280, 380, width=35),
        f("王五", 320, 380, width=20),
    ]
    return fragments


@pytest.fixture
def vat_page():
    return build_vat_page()


@pytest.fixture
def make_vat_page():
    """Factory for VAT pages with a chosen invoice number / page index."""
    return build_vat_page
