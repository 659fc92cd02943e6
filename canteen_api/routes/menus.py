"""
Canteen API — Menu Route Handlers
==================================

What:  GET/POST/PUT /menus and DELETE /menus/{id}.
"""

from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from canteen_api.database import get_db_session
from canteen_api.schemas.common import ApiResponse, ValidationErrorResponse
from canteen_api.schemas.menu import MenuCreate, MenuUpdate
from canteen_api.services.menu_service import menu_service

router = APIRouter(prefix="/menus", tags=["Menus"])

_ERRORS = {
    400: {"description": "Invalid request", "model": ValidationErrorResponse},
    500: {"description": "Server error", "model": ApiResponse},
}


@router.get(
    "",
    response_model=ApiResponse,
    response_model_exclude_unset=True,
    responses={404: {"description": "No menus", "model": ApiResponse}, **_ERRORS},
    summary="List menus",
)
async def list_menus(db: AsyncSession = Depends(get_db_session)) -> ApiResponse:
    return await menu_service.list_menus(db)


@router.post(
    "",
    status_code=201,
    response_model=ApiResponse,
    response_model_exclude_unset=True,
    responses=_ERRORS,
    summary="Create a menu",
    description="`canteenId` must reference an existing canteen; the database enforces it.",
)
async def create_menu(
    payload: MenuCreate,
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse:
    return await menu_service.create_menu(db, payload)


@router.put(
    "",
    response_model=ApiResponse,
    response_model_exclude_unset=True,
    responses=_ERRORS,
    summary="Partially update a menu",
    description=(
        "Omitted fields are left alone. `imageUrl` and `description` are "
        "cleared by an explicit null; a null on any other field is ignored."
    ),
)
async def update_menu(
    payload: MenuUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse:
    return await menu_service.update_menu(db, payload)


@router.delete(
    "/{menu_id}",
    response_model=ApiResponse,
    response_model_exclude_unset=True,
    responses={404: {"description": "Menu not found", "model": ApiResponse}, **_ERRORS},
    summary="Delete a menu",
)
async def delete_menu(
    menu_id: str = Path(min_length=1, max_length=100),
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse:
    return await menu_service.delete_menu(db, menu_id)
