# app/infra/report/proforma_pdf.py
"""
Proforma PDF for one brand: header block, a paginated product table with
per-row subtotals and a grand total at the end of the last page.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import BinaryIO, Iterable, List, Optional

from reportlab.lib.colors import HexColor
from reportlab.lib.pagesizes import A4
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas

from app.domain.errors import RenderFault
from app.domain.models import EnrichedProduct, ExpiryStatus

logger = logging.getLogger("inventory.report")

# ─── PALETTE ───
NAVY = HexColor('#1B2A4A')
SLATE = HexColor('#64748B')
SLATE_LIGHT = HexColor('#94A3B8')
SLATE_PALE = HexColor('#F1F5F9')
CHARCOAL = HexColor('#2D3748')

FONT = 'Helvetica'
FONT_BOLD = 'Helvetica-Bold'

W, H = A4
MARGIN = 40
CONTENT_W = W - 2 * MARGIN
ROW_H = 16
TABLE_HEADER_H = 20
FOOTER_H = 30
# rows never go below this line; the page number lives underneath
BOTTOM_LIMIT = MARGIN + 20

# (title, width, align)
COLUMNS = [
    ("Code", 70, "left"),
    ("Name", 165, "left"),
    ("Presentation", 90, "left"),
    ("Quantity", 55, "right"),
    ("Unit Price", 65, "right"),
    ("Subtotal", 70, "right"),
]

CENTS = Decimal("0.01")


def format_money(value: Decimal) -> str:
    return f"$ {value.quantize(CENTS, rounding=ROUND_HALF_UP):.2f}"


def filter_label(status_filter: Optional[ExpiryStatus]) -> str:
    return status_filter.value if status_filter else "TODOS"


@dataclass
class ProformaSummary:
    pages: int = 0
    table_headers: int = 0
    rows_per_page: List[int] = field(default_factory=list)
    row_codes: List[str] = field(default_factory=list)
    grand_total: Decimal = Decimal("0.00")

    @property
    def rows(self) -> int:
        return sum(self.rows_per_page)


class ProformaComposer:
    def __init__(
        self,
        out: BinaryIO,
        brand: str,
        status_filter: Optional[ExpiryStatus],
        generated_at: datetime,
    ):
        self.c = canvas.Canvas(out, pagesize=A4)
        self.c.setTitle(f"Proforma {brand}")
        self.c.setAuthor("Paint Inventory")
        self.brand = brand
        self.status_filter = status_filter
        self.generated_at = generated_at
        self.summary = ProformaSummary()
        self.y = H - MARGIN

    # ─── DRAWING PRIMITIVES ───

    def draw_text(self, text, x, y, font=FONT, size=9, color=CHARCOAL, align='left', max_width=None):
        self.c.saveState()
        self.c.setFont(font, size)
        self.c.setFillColor(color)
        if max_width:
            while stringWidth(text, font, size) > max_width and len(text) > 3:
                text = text[:-4] + '...'
        if align == 'right':
            self.c.drawRightString(x, y, text)
        else:
            self.c.drawString(x, y, text)
        self.c.restoreState()

    def draw_line(self, x1, y1, x2, y2, color=SLATE_LIGHT, width=0.5):
        self.c.saveState()
        self.c.setStrokeColor(color)
        self.c.setLineWidth(width)
        self.c.line(x1, y1, x2, y2)
        self.c.restoreState()

    # ─── PAGE INFRASTRUCTURE ───

    def new_page(self):
        if self.summary.pages > 0:
            self.c.showPage()
        self.summary.pages += 1
        self.summary.rows_per_page.append(0)
        self.y = H - MARGIN
        self.draw_text(f"Page {self.summary.pages}", W - MARGIN, MARGIN - 5,
                       size=7, color=SLATE_LIGHT, align='right')

    def fits(self, needed: float) -> bool:
        return self.y - needed >= BOTTOM_LIMIT

    def draw_document_header(self):
        self.draw_text("PROFORMA", MARGIN, self.y - 18, FONT_BOLD, 18, NAVY)
        self.y -= 26
        self.draw_line(MARGIN, self.y, W - MARGIN, self.y, NAVY, 1)
        self.y -= 16
        meta = [
            ("Generated", self.generated_at.strftime("%Y-%m-%d %H:%M UTC")),
            ("Brand", self.brand),
            ("Filter", filter_label(self.status_filter)),
        ]
        for label, value in meta:
            self.draw_text(f"{label}:", MARGIN, self.y, FONT_BOLD, 9, SLATE)
            self.draw_text(value, MARGIN + 70, self.y, FONT, 9, CHARCOAL, max_width=CONTENT_W - 70)
            self.y -= 13
        self.y -= 10

    def draw_table_header(self):
        self.c.saveState()
        self.c.setFillColor(SLATE_PALE)
        self.c.rect(MARGIN, self.y - TABLE_HEADER_H, CONTENT_W, TABLE_HEADER_H, fill=1, stroke=0)
        self.c.restoreState()
        self._draw_cells([title for title, _, _ in COLUMNS], self.y - 14, FONT_BOLD, NAVY)
        self.y -= TABLE_HEADER_H
        self.draw_line(MARGIN, self.y, W - MARGIN, self.y, NAVY, 0.8)
        self.summary.table_headers += 1

    def _draw_cells(self, values, y, font, color):
        cx = MARGIN
        for val, (_, width, align) in zip(values, COLUMNS):
            # amounts are never truncated
            if align == 'right':
                self.draw_text(val, cx + width - 4, y, font, 8, color, align='right')
            else:
                self.draw_text(val, cx + 4, y, font, 8, color, max_width=width - 8)
            cx += width

    def ensure_room(self, needed: float):
        if not self.fits(needed):
            self.new_page()
            self.draw_table_header()

    # ─── CONTENT ───

    def draw_row(self, p: EnrichedProduct):
        self.ensure_room(ROW_H)
        subtotal = p.quantity * p.unit_price
        self.summary.grand_total += subtotal
        values = [
            p.code,
            p.name,
            p.presentation,
            str(p.quantity),
            format_money(p.unit_price),
            format_money(subtotal),
        ]
        self._draw_cells(values, self.y - 11, FONT, CHARCOAL)
        self.y -= ROW_H
        self.draw_line(MARGIN, self.y, W - MARGIN, self.y, SLATE_PALE, 0.3)
        self.summary.rows_per_page[-1] += 1
        self.summary.row_codes.append(p.code)

    def draw_footer(self):
        self.ensure_room(FOOTER_H)
        self.y -= 6
        self.draw_line(W - MARGIN - 200, self.y, W - MARGIN, self.y, NAVY, 1)
        self.y -= 16
        self.draw_text(f"TOTAL: {format_money(self.summary.grand_total)}",
                       W - MARGIN - 4, self.y, FONT_BOLD, 11, NAVY, align='right')
        self.y -= 8

    def compose(self, records: Iterable[EnrichedProduct]) -> ProformaSummary:
        self.new_page()
        self.draw_document_header()
        self.draw_table_header()
        for p in records:
            self.draw_row(p)
        self.draw_footer()
        self.c.save()
        return self.summary


def compose_proforma_report(
    records: Iterable[EnrichedProduct],
    brand: str,
    status_filter: Optional[ExpiryStatus],
    generated_at: datetime,
    out: BinaryIO,
) -> ProformaSummary:
    """
    Render `records` in the given order into `out`. Filtering and sorting
    are the caller's job.
    """
    try:
        summary = ProformaComposer(out, brand, status_filter, generated_at).compose(records)
    except Exception as e:
        logger.exception("proforma rendering failed brand=%s", brand)
        raise RenderFault(f"Report generation failed: {e}") from e
    logger.info(
        "proforma brand=%s filter=%s rows=%d pages=%d total=%s",
        brand, filter_label(status_filter), summary.rows, summary.pages, summary.grand_total,
    )
    return summary
