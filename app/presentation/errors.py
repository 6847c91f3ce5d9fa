# app/presentation/errors.py
import logging

from fastapi import HTTPException, status

from app.domain.errors import (
    ConflictError, InventoryError, NotFoundError, RenderFault, StoreFault, ValidationError,
)

logger = logging.getLogger("inventory.api")


def to_http_error(e: InventoryError) -> HTTPException:
    if isinstance(e, ValidationError):
        return HTTPException(status.HTTP_400_BAD_REQUEST, detail=str(e))
    if isinstance(e, ConflictError):
        return HTTPException(status.HTTP_409_CONFLICT, detail=str(e))
    if isinstance(e, NotFoundError):
        return HTTPException(status.HTTP_404_NOT_FOUND, detail=str(e))
    if isinstance(e, RenderFault):
        return HTTPException(status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Report generation failed")
    if isinstance(e, StoreFault):
        logger.error("store fault: %s", e)
    else:
        logger.error("unmapped inventory error: %r", e)
    return HTTPException(status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal error")
