"""
Canteen API — Canteen SQLAlchemy Model
=======================================

What:  ORM model representing the `canteens` table.
Who:   Used by CanteenRepository for its single-statement operations and by
       `init_db` for table creation.

Table Design Rationale:
    - String primary key: ids are generated in Python (`str(uuid4())`) by the
      service layer, so the column stays portable across PostgreSQL and SQLite.
    - image_url: TEXT, NOT NULL. URLs have no useful upper bound.
    - No timestamps, no soft-delete flag: rows are created, updated in place
      and deleted.
"""

from typing import List

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from canteen_api.database import Base


class Canteen(Base):
    """
    A dining facility.

    Query Patterns:
        - List with signature menus: SELECT ... FROM canteens
          LEFT OUTER JOIN menus ON menus.canteen_id = canteens.id
          AND menus.signature = true
          → `signature_menus` is populated from the joined rows
        - Update / delete by id: primary key lookup
    """

    __tablename__ = "canteens"

    id: Mapped[str] = mapped_column(String(100), primary_key=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    image_url: Mapped[str] = mapped_column(Text, nullable=False)

    # Read-only view of the canteen's highlighted dishes. Only ever filled by
    # an explicit join (contains_eager); lazy="raise" keeps an accidental
    # second round trip from happening silently.
    signature_menus: Mapped[List["Menu"]] = relationship(  # noqa: F821
        "Menu",
        primaryjoin="and_(Canteen.id == foreign(Menu.canteen_id), Menu.signature == true())",
        viewonly=True,
        lazy="raise",
    )

    def __repr__(self) -> str:
        return f"<Canteen(id={self.id}, name='{self.name}')>"

