# app/presentation/health.py
from fastapi import APIRouter, Depends
from app.container import get_product_repo
from app.domain.ports import ProductRepoPort

router = APIRouter(tags=["health"])

@router.get("/healthz")
async def healthz():
    return {"ok": True}

@router.get("/readyz")
async def readyz(repo: ProductRepoPort = Depends(get_product_repo)):
    checks = {}; ok = True
    # Mongo
    try:
        checks["mongo"] = await repo.ping(); ok = ok and checks["mongo"]
    except Exception as e:
        checks["mongo"] = False; checks["mongo_error"] = str(e); ok = False
    return {"ok": ok, **checks}
