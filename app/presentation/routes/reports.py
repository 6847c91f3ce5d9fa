# app/presentation/routes/reports.py
from __future__ import annotations
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse

from app.application.report_use_case import ProformaReportUseCase
from app.container import get_report_uc
from app.domain.errors import InventoryError
from app.presentation.errors import to_http_error

router = APIRouter(tags=["reports"])


@router.get("/proforma", response_class=StreamingResponse)
async def proforma_report(
    brand: Optional[str] = Query(None, description="Brand to report on (required)"),
    status: Optional[str] = Query(None, description="ok | por-vencer | vencido | todos"),
    uc: ProformaReportUseCase = Depends(get_report_uc),
):
    """
    Brand proforma as PDF. Rows are sorted by name and carry
    quantity x unit price subtotals; the grand total closes the last page.
    """
    try:
        report = await uc.render(brand, status)
    except InventoryError as e:
        raise to_http_error(e)

    return StreamingResponse(
        report.iter_chunks(),
        media_type="application/pdf",
        headers={"Content-Disposition": f'inline; filename="{report.filename}"'},
    )
