# main.py
from dotenv import load_dotenv
load_dotenv()

import os
import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.container import close_product_repo, get_product_repo
from app.presentation.routers import router as api_router

APP_NAME = "Paint Inventory API"
APP_VERSION = os.getenv("APP_VERSION", "0.1.0")

app = FastAPI(title=APP_NAME, version=APP_VERSION)

# --- logging config before anything logs ---
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

app_logger = logging.getLogger("inventory.request")

@app.middleware("http")
async def log_requests(request: Request, call_next):
    app_logger.info(f"Incoming {request.method} {request.url.path}")
    try:
        response = await call_next(request)
        app_logger.info(f"Completed {request.method} {request.url.path} -> {response.status_code}")
        return response
    except Exception:
        app_logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        raise

# ─────────────────────────────────────────────────────────────
# CORS (env: CORS_ALLOW_ORIGINS="https://foo.com,https://bar.com")
# ─────────────────────────────────────────────────────────────
raw_origins = os.getenv("CORS_ALLOW_ORIGINS", "*")
allow_origins = [o.strip().rstrip("/") for o in raw_origins.split(",") if o.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials="*" not in allow_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ─────────────────────────────────────────────────────────────
# Malformed bodies / params are client faults -> 400
# ─────────────────────────────────────────────────────────────
@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content=jsonable_encoder({"detail": exc.errors()}))

# ─────────────────────────────────────────────────────────────
# Routes
# ─────────────────────────────────────────────────────────────
app.include_router(api_router)

@app.get("/")
async def root():
    return {
        "ok": True,
        "name": APP_NAME,
        "version": APP_VERSION,
        "message": "API Inventario Pinturas",
    }

# ─────────────────────────────────────────────────────────────
# Store lifecycle
# ─────────────────────────────────────────────────────────────
@app.on_event("startup")
async def open_store():
    await get_product_repo().ensure_indexes()

@app.on_event("shutdown")
async def close_store():
    await close_product_repo()
