import io
import datetime as dt
from decimal import Decimal

import pytest

from app.domain.errors import RenderFault
from app.domain.models import EnrichedProduct, ExpiryStatus
from app.infra.report.proforma_pdf import compose_proforma_report, format_money

NOW = dt.datetime(2026, 5, 5, 12, 0, tzinfo=dt.timezone.utc)


def _item(code, quantity, price, name=None):
    return EnrichedProduct(
        id=code.lower(),
        code=code,
        name=name or f"Pintura {code}",
        brand="Sherwin",
        category="Latex",
        presentation="1 gal",
        expiry_date=NOW + dt.timedelta(days=30),
        entry_date=NOW,
        quantity=quantity,
        unit_price=Decimal(price),
        created_at=NOW,
        updated_at=NOW,
        days_left=30,
        status=ExpiryStatus.OK,
    )


def test_grand_total_is_exact():
    items = [_item("A", 2, "10.00"), _item("B", 1, "5.50"), _item("C", 3, "0.00")]
    out = io.BytesIO()
    summary = compose_proforma_report(items, "Sherwin", None, NOW, out)
    assert summary.grand_total == Decimal("25.50")
    assert format_money(summary.grand_total) == "$ 25.50"
    assert summary.pages == 1
    assert out.getvalue().startswith(b"%PDF-")


def test_pagination_keeps_every_row_once():
    n = 130
    items = [_item(f"P{i:03d}", 1, "1.10") for i in range(n)]
    summary = compose_proforma_report(items, "Sherwin", ExpiryStatus.OK, NOW, io.BytesIO())
    assert summary.pages >= 2
    assert summary.table_headers == summary.pages
    assert all(rows > 0 for rows in summary.rows_per_page)
    assert summary.rows == n
    assert summary.row_codes == [p.code for p in items]
    assert summary.grand_total == Decimal("143.00")


def test_empty_report_has_zero_total():
    summary = compose_proforma_report([], "Nadie", None, NOW, io.BytesIO())
    assert summary.pages == 1
    assert summary.rows == 0
    assert format_money(summary.grand_total) == "$ 0.00"


def test_long_names_do_not_break_layout():
    items = [_item("L1", 1, "1.00", name="Esmalte " * 40)]
    summary = compose_proforma_report(items, "Sherwin", None, NOW, io.BytesIO())
    assert summary.rows == 1


def test_format_money_two_decimals():
    assert format_money(Decimal("3")) == "$ 3.00"
    assert format_money(Decimal("1234.5")) == "$ 1234.50"
    assert format_money(Decimal("0.005")) == "$ 0.01"


class _BrokenSink:
    def write(self, data):
        raise OSError("disk full")


def test_render_errors_become_render_fault():
    with pytest.raises(RenderFault):
        compose_proforma_report([_item("A", 1, "1.00")], "Sherwin", None, NOW, _BrokenSink())
