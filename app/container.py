# app/container.py
from functools import lru_cache

from fastapi import Depends

from app.domain.ports import ProductRepoPort
from app.infra.repo.mongo_repo import MongoProductRepo

from app.application.use_cases import InventoryUseCase
from app.application.report_use_case import ProformaReportUseCase


@lru_cache
def _repo() -> MongoProductRepo: return MongoProductRepo()

def get_product_repo() -> ProductRepoPort: return _repo()

def get_inventory_uc(repo: ProductRepoPort = Depends(get_product_repo)) -> InventoryUseCase:
    return InventoryUseCase(repo=repo)

def get_report_uc(repo: ProductRepoPort = Depends(get_product_repo)) -> ProformaReportUseCase:
    return ProformaReportUseCase(repo=repo)

async def close_product_repo() -> None:
    if _repo.cache_info().currsize:
        await _repo().close()
        _repo.cache_clear()
