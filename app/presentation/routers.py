# app/presentation/routers.py
from __future__ import annotations

from fastapi import APIRouter

from app.presentation import health
from app.presentation.routes import products as product_routes
from app.presentation.routes import reports as report_routes

router = APIRouter()

# ── PRODUCTS (CRUD + expiry status) ──────────────────────────────
router.include_router(product_routes.router)

# ── REPORTS (PDF proforma) ───────────────────────────────────────
router.include_router(report_routes.router, prefix="/reports")

# ── HEALTH ───────────────────────────────────────────────────────
router.include_router(health.router)
