# app/application/report_use_case.py
from __future__ import annotations

import os
import re
import tempfile
from dataclasses import dataclass
from typing import IO, AsyncIterator, Optional

from starlette.concurrency import run_in_threadpool

from app.domain.errors import ValidationError
from app.domain.expiry import ALL_STATUSES, enrich, parse_status_query
from app.domain.models import ExpiryStatus
from app.domain.ports import ProductRepoPort
from app.infra.report.proforma_pdf import ProformaSummary, compose_proforma_report

from .use_cases import Clock, utc_now

# rendered PDFs larger than this spill from memory to a temp file
SPOOL_MAX_BYTES = int(os.getenv("REPORT_SPOOL_MAX_BYTES", str(1024 * 1024)))
CHUNK_SIZE = 64 * 1024


@dataclass
class ProformaReport:
    filename: str
    summary: ProformaSummary
    file: IO[bytes]

    async def iter_chunks(self) -> AsyncIterator[bytes]:
        """Stream the rendered PDF; the spooled file is closed even if the client goes away."""
        try:
            while True:
                # a spilled spool reads from disk; keep it off the event loop
                chunk = await run_in_threadpool(self.file.read, CHUNK_SIZE)
                if not chunk:
                    break
                yield chunk
        finally:
            self.file.close()


def report_filename(brand: str, status_query: str, generated_at) -> str:
    slug = re.sub(r"[^A-Za-z0-9_-]+", "_", brand.strip()).strip("_") or "brand"
    return f"proforma_{slug}_{status_query}_{generated_at:%Y%m%d-%H%M%S}.pdf"


class ProformaReportUseCase:
    def __init__(self, repo: ProductRepoPort, clock: Clock = utc_now):
        self.repo = repo
        self.clock = clock

    async def render(self, brand: Optional[str], status: Optional[str] = None) -> ProformaReport:
        brand = (brand or "").strip()
        if not brand:
            raise ValidationError("brand is required")
        status_filter: Optional[ExpiryStatus] = parse_status_query(status)
        status_query = (status or ALL_STATUSES).strip().lower() or ALL_STATUSES

        now = self.clock()
        items = [enrich(p, now) for p in await self.repo.find_all(brand=brand)]
        if status_filter is not None:
            items = [p for p in items if p.status == status_filter]
        items.sort(key=lambda p: (p.name.casefold(), p.code))

        out = tempfile.SpooledTemporaryFile(max_size=SPOOL_MAX_BYTES)
        try:
            summary = await run_in_threadpool(
                compose_proforma_report, items, brand, status_filter, now, out
            )
        except BaseException:
            out.close()
            raise
        out.seek(0)
        return ProformaReport(
            filename=report_filename(brand, status_query, now),
            summary=summary,
            file=out,
        )
