"""Canteen repository for database operations."""

from typing import Any, Dict, List, Optional

from sqlalchemy import and_, delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import contains_eager

from canteen_api.models import Canteen, Menu


class CanteenRepository:
    """Repository for Canteen database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_with_signature_menus(self) -> List[Canteen]:
        """
        All canteens, each with `signature_menus` filled from one LEFT OUTER JOIN.

        Canteens without signature menus come back with an empty list. Row
        order is whatever the datastore returns.
        """
        stmt = (
            select(Canteen)
            .outerjoin(
                Menu,
                and_(Menu.canteen_id == Canteen.id, Menu.signature.is_(True)),
            )
            .options(contains_eager(Canteen.signature_menus))
        )
        result = await self.db.execute(stmt)
        # unique(): the join yields one row per (canteen, menu) pair
        return list(result.unique().scalars().all())

    async def create(self, canteen_id: str, name: str, image_url: str) -> Optional[Canteen]:
        """INSERT … RETURNING; `None` means the datastore reported no row written."""
        stmt = (
            insert(Canteen)
            .values(id=canteen_id, name=name, image_url=image_url)
            .returning(Canteen)
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def update(self, canteen_id: str, changes: Dict[str, Any]) -> Optional[Canteen]:
        """
        UPDATE … RETURNING for the given columns.

        With nothing to change, reads the row back instead so the caller
        still gets the stored state from a single statement.
        """
        if not changes:
            result = await self.db.execute(select(Canteen).where(Canteen.id == canteen_id))
            return result.scalar_one_or_none()

        stmt = (
            update(Canteen)
            .where(Canteen.id == canteen_id)
            .values(**changes)
            .returning(Canteen)
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def delete(self, canteen_id: str) -> bool:
        """DELETE … RETURNING id; True when a row was removed."""
        result = await self.db.execute(
            delete(Canteen).where(Canteen.id == canteen_id).returning(Canteen.id)
        )
        return result.scalar_one_or_none() is not None
