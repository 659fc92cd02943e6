"""Menu repository for database operations."""

from typing import Any, Dict, List, Optional

from sqlalchemy import delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from canteen_api.models import Menu


class MenuRepository:
    """Repository for Menu database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_all(self) -> List[Menu]:
        result = await self.db.execute(select(Menu))
        return list(result.scalars().all())

    async def create(self, values: Dict[str, Any]) -> Optional[Menu]:
        """INSERT … RETURNING. `values` must include the generated `id`."""
        result = await self.db.execute(insert(Menu).values(**values).returning(Menu))
        return result.scalar_one_or_none()

    async def update(self, menu_id: str, changes: Dict[str, Any]) -> Optional[Menu]:
        """UPDATE … RETURNING, or a plain read-back when `changes` is empty."""
        if not changes:
            result = await self.db.execute(select(Menu).where(Menu.id == menu_id))
            return result.scalar_one_or_none()

        result = await self.db.execute(
            update(Menu).where(Menu.id == menu_id).values(**changes).returning(Menu)
        )
        return result.scalar_one_or_none()

    async def delete(self, menu_id: str) -> bool:
        result = await self.db.execute(
            delete(Menu).where(Menu.id == menu_id).returning(Menu.id)
        )
        return result.scalar_one_or_none() is not None
