"""
Canteen API — Canteen Service
==============================

What:  Validated canteen input → one CanteenRepository call → response envelope.
Who:   Called by the /canteens route handlers.

Outcome mapping:
    list    empty → 404 "canteen not found",        else 200 + count/data
    create  no row → 500,                           else 201
    update  no row → 500,                           else 200 + updated row
    delete  nothing deleted → 404,                  else 200
    any datastore exception → 500 (kind logged)
"""

import logging
from typing import Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from canteen_api.exceptions import DatabaseError, DatabaseErrorKind, NotFoundError
from canteen_api.repositories import CanteenRepository
from canteen_api.schemas.canteen import (
    CanteenCreate,
    CanteenRead,
    CanteenUpdate,
    CanteenWithMenus,
)
from canteen_api.schemas.common import ApiResponse
from canteen_api.services import new_id

logger = logging.getLogger(__name__)


class CanteenService:
    """
    Response mapping for canteen operations.

    Error Handling Strategy:
        Every repository call sits in its own try block, and writes commit
        inside that same block. SQLAlchemy and socket errors (commit failures
        included) become DatabaseError with a kind; NotFoundError/DatabaseError
        raised here propagate unchanged to the global handlers.
    """

    def __init__(self, id_factory: Callable[[], str] = new_id):
        self.id_factory = id_factory

    async def list_canteens(self, db: AsyncSession) -> ApiResponse:
        """All canteens with their signature menus."""
        try:
            canteens = await CanteenRepository(db).list_with_signature_menus()
        except (SQLAlchemyError, OSError) as e:
            logger.error("Database error listing canteens: %s", e, exc_info=True)
            raise DatabaseError.from_exception(e, {"operation": "list_canteens"})

        if not canteens:
            raise NotFoundError(resource="canteen")

        data = [
            CanteenWithMenus.model_validate(canteen).model_dump(by_alias=True)
            for canteen in canteens
        ]
        return ApiResponse(status=True, status_code=200, count=len(data), data=data)

    async def create_canteen(self, db: AsyncSession, payload: CanteenCreate) -> ApiResponse:
        canteen_id = self.id_factory()
        try:
            canteen = await CanteenRepository(db).create(
                canteen_id=canteen_id,
                name=payload.name,
                image_url=payload.image_url,
            )
            await db.commit()
        except (SQLAlchemyError, OSError) as e:
            logger.error("Database error creating canteen: %s", e)
            raise DatabaseError.from_exception(e, {"operation": "create_canteen"})

        if canteen is None:
            raise DatabaseError(
                kind=DatabaseErrorKind.NO_ROW,
                context={"operation": "create_canteen", "canteen_id": canteen_id},
            )

        logger.info("Canteen created: %s", canteen.id)
        return ApiResponse(
            status=True,
            status_code=201,
            message="create canteen success",
            data=CanteenRead.model_validate(canteen).model_dump(by_alias=True),
        )

    async def update_canteen(self, db: AsyncSession, payload: CanteenUpdate) -> ApiResponse:
        """
        Partial update: only columns in `payload.changes()` are written.

        An unknown id is reported as 500 (no row affected), not 404.
        """
        changes = payload.changes()
        try:
            canteen = await CanteenRepository(db).update(payload.id, changes)
            await db.commit()
        except (SQLAlchemyError, OSError) as e:
            logger.error("Database error updating canteen %s: %s", payload.id, e)
            raise DatabaseError.from_exception(
                e, {"operation": "update_canteen", "canteen_id": payload.id}
            )

        if canteen is None:
            raise DatabaseError(
                kind=DatabaseErrorKind.NO_ROW,
                context={"operation": "update_canteen", "canteen_id": payload.id},
            )

        logger.info("Canteen %s updated: %s", canteen.id, sorted(changes))
        return ApiResponse(
            status=True,
            status_code=200,
            message="Update canteen success",
            data=CanteenRead.model_validate(canteen).model_dump(by_alias=True),
        )

    async def delete_canteen(self, db: AsyncSession, canteen_id: str) -> ApiResponse:
        try:
            deleted = await CanteenRepository(db).delete(canteen_id)
            await db.commit()
        except (SQLAlchemyError, OSError) as e:
            # A canteen that still has menus fails the FK check here
            logger.error("Database error deleting canteen %s: %s", canteen_id, e)
            raise DatabaseError.from_exception(
                e, {"operation": "delete_canteen", "canteen_id": canteen_id}
            )

        if not deleted:
            raise NotFoundError(resource="canteen", resource_id=canteen_id)

        logger.info("Canteen deleted: %s", canteen_id)
        return ApiResponse(status=True, status_code=200, message="canteen deleted success")


# ── Singleton Instance ────────────────────────────────────────────────────
# Stateless; the session arrives per call
canteen_service = CanteenService()
