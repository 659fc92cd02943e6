"""
Canteen API — Canteen Route Handlers
=====================================

What:  GET/POST/PUT /canteens and DELETE /canteens/{id}.
How:   Request bodies are validated by the Pydantic schemas and the path id by
       `Path(...)` before the handler runs; the handler delegates to
       CanteenService and returns its envelope. 404/500 envelopes come from
       the exception handlers registered in main.py.
"""

from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from canteen_api.database import get_db_session
from canteen_api.schemas.canteen import CanteenCreate, CanteenUpdate
from canteen_api.schemas.common import ApiResponse, ValidationErrorResponse
from canteen_api.services.canteen_service import canteen_service

router = APIRouter(prefix="/canteens", tags=["Canteens"])

_ERRORS = {
    400: {"description": "Invalid request", "model": ValidationErrorResponse},
    500: {"description": "Server error", "model": ApiResponse},
}


@router.get(
    "",
    response_model=ApiResponse,
    response_model_exclude_unset=True,
    responses={404: {"description": "No canteens", "model": ApiResponse}, **_ERRORS},
    summary="List canteens with their signature menus",
)
async def list_canteens(db: AsyncSession = Depends(get_db_session)) -> ApiResponse:
    return await canteen_service.list_canteens(db)


@router.post(
    "",
    status_code=201,
    response_model=ApiResponse,
    response_model_exclude_unset=True,
    responses=_ERRORS,
    summary="Create a canteen",
)
async def create_canteen(
    payload: CanteenCreate,
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse:
    return await canteen_service.create_canteen(db, payload)


@router.put(
    "",
    response_model=ApiResponse,
    response_model_exclude_unset=True,
    responses=_ERRORS,
    summary="Partially update a canteen",
    description=(
        "Only the fields present in the body are written. A null `name` or "
        "`imageUrl` leaves the stored value unchanged."
    ),
)
async def update_canteen(
    payload: CanteenUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse:
    return await canteen_service.update_canteen(db, payload)


@router.delete(
    "/{canteen_id}",
    response_model=ApiResponse,
    response_model_exclude_unset=True,
    responses={404: {"description": "Canteen not found", "model": ApiResponse}, **_ERRORS},
    summary="Delete a canteen",
)
async def delete_canteen(
    canteen_id: str = Path(min_length=1, max_length=100),
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse:
    return await canteen_service.delete_canteen(db, canteen_id)
