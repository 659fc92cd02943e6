"""
Canteen API — Menu Service
===========================

What:  Validated menu input → one MenuRepository call → response envelope.
Who:   Called by the /menus route handlers.

The create path does not check that `canteenId` exists; the foreign key does,
and a violation surfaces as a 500 whose log line carries kind=constraint.
"""

import logging
from typing import Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from canteen_api.exceptions import DatabaseError, DatabaseErrorKind, NotFoundError
from canteen_api.repositories import MenuRepository
from canteen_api.schemas.common import ApiResponse
from canteen_api.schemas.menu import MenuCreate, MenuRead, MenuUpdate
from canteen_api.services import new_id

logger = logging.getLogger(__name__)


class MenuService:
    """Response mapping for menu operations."""

    def __init__(self, id_factory: Callable[[], str] = new_id):
        self.id_factory = id_factory

    async def list_menus(self, db: AsyncSession) -> ApiResponse:
        try:
            menus = await MenuRepository(db).list_all()
        except (SQLAlchemyError, OSError) as e:
            logger.error("Database error listing menus: %s", e, exc_info=True)
            raise DatabaseError.from_exception(e, {"operation": "list_menus"})

        if not menus:
            raise NotFoundError(resource="menu")

        data = [MenuRead.model_validate(menu).model_dump(by_alias=True) for menu in menus]
        return ApiResponse(status=True, status_code=200, count=len(data), data=data)

    async def create_menu(self, db: AsyncSession, payload: MenuCreate) -> ApiResponse:
        values = payload.model_dump()
        values["id"] = self.id_factory()
        try:
            menu = await MenuRepository(db).create(values)
            await db.commit()
        except (SQLAlchemyError, OSError) as e:
            logger.error("Database error creating menu for canteen %s: %s", payload.canteen_id, e)
            raise DatabaseError.from_exception(
                e, {"operation": "create_menu", "canteen_id": payload.canteen_id}
            )

        if menu is None:
            raise DatabaseError(
                kind=DatabaseErrorKind.NO_ROW,
                context={"operation": "create_menu", "menu_id": values["id"]},
            )

        logger.info("Menu created: %s (canteen %s)", menu.id, menu.canteen_id)
        return ApiResponse(
            status=True,
            status_code=201,
            message="create menu success",
            data=MenuRead.model_validate(menu).model_dump(by_alias=True),
        )

    async def update_menu(self, db: AsyncSession, payload: MenuUpdate) -> ApiResponse:
        changes = payload.changes()
        try:
            menu = await MenuRepository(db).update(payload.id, changes)
            await db.commit()
        except (SQLAlchemyError, OSError) as e:
            logger.error("Database error updating menu %s: %s", payload.id, e)
            raise DatabaseError.from_exception(
                e, {"operation": "update_menu", "menu_id": payload.id}
            )

        if menu is None:
            raise DatabaseError(
                kind=DatabaseErrorKind.NO_ROW,
                context={"operation": "update_menu", "menu_id": payload.id},
            )

        logger.info("Menu %s updated: %s", menu.id, sorted(changes))
        return ApiResponse(
            status=True,
            status_code=200,
            message="Update menu success",
            data=MenuRead.model_validate(menu).model_dump(by_alias=True),
        )

    async def delete_menu(self, db: AsyncSession, menu_id: str) -> ApiResponse:
        try:
            deleted = await MenuRepository(db).delete(menu_id)
            await db.commit()
        except (SQLAlchemyError, OSError) as e:
            logger.error("Database error deleting menu %s: %s", menu_id, e)
            raise DatabaseError.from_exception(e, {"operation": "delete_menu", "menu_id": menu_id})

        if not deleted:
            raise NotFoundError(resource="menu", resource_id=menu_id)

        logger.info("Menu deleted: %s", menu_id)
        return ApiResponse(status=True, status_code=200, message="menu deleted success")


menu_service = MenuService()
