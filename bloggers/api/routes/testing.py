"""Test-support routes."""

import logging

from fastapi import APIRouter, Depends, Response, status

from bloggers.adapters.repository import Storage
from bloggers.api.dependencies import get_storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/testing", tags=["testing"])


@router.delete(
    "/all-data",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove all data",
)
def delete_all_data(storage: Storage = Depends(get_storage)) -> Response:
    storage.clear_all()
    logger.info("All collections cleared")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
