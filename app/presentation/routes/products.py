# app/presentation/routes/products.py
from __future__ import annotations
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from app.application.use_cases import InventoryUseCase
from app.container import get_inventory_uc
from app.domain.errors import InventoryError
from app.domain.expiry import parse_status_query
from app.domain.models import EnrichedProduct, Product
from app.presentation.errors import to_http_error
from app.presentation.schemas import DeleteResponse, ProductCreateRequest, ProductUpdateRequest

router = APIRouter(prefix="/products", tags=["products"])


@router.get("", response_model=List[EnrichedProduct])
async def list_products(
    status_q: Optional[str] = Query(None, alias="status", description="ok | por-vencer | vencido | todos"),
    uc: InventoryUseCase = Depends(get_inventory_uc),
):
    try:
        return await uc.list_products(parse_status_query(status_q))
    except InventoryError as e:
        raise to_http_error(e)


@router.get("/{product_id}", response_model=EnrichedProduct)
async def get_product(product_id: str, uc: InventoryUseCase = Depends(get_inventory_uc)):
    try:
        return await uc.get(product_id)
    except InventoryError as e:
        raise to_http_error(e)


@router.post("", response_model=Product, status_code=status.HTTP_201_CREATED)
async def create_product(req: ProductCreateRequest, uc: InventoryUseCase = Depends(get_inventory_uc)):
    try:
        return await uc.create(req.model_dump(exclude_unset=True))
    except InventoryError as e:
        raise to_http_error(e)


@router.put("/{product_id}", response_model=Product)
async def update_product(
    product_id: str,
    req: ProductUpdateRequest,
    uc: InventoryUseCase = Depends(get_inventory_uc),
):
    try:
        return await uc.update(product_id, req.model_dump(exclude_unset=True))
    except InventoryError as e:
        raise to_http_error(e)


@router.delete("/{product_id}", response_model=DeleteResponse)
async def delete_product(product_id: str, uc: InventoryUseCase = Depends(get_inventory_uc)):
    try:
        await uc.delete(product_id)
    except InventoryError as e:
        raise to_http_error(e)
    return DeleteResponse()
