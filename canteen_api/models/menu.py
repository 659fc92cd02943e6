"""
Canteen API — Menu SQLAlchemy Model
====================================

What:  ORM model representing the `menus` table.
Who:   Used by MenuRepository and joined by CanteenRepository for the
       signature-menu listing.

Column notes:
    - canteen_id: FOREIGN KEY → canteens.id. Existence of the canteen is
      never checked by the service layer; the datastore rejects a dangling
      reference and the service reports it as a constraint error.
    - price: FLOAT. Request validation bounds it to [1, 1_000_000].
    - signature: marks a canteen's highlighted dish; defaults to false.
    - image_url / description: the only nullable columns. An explicit null in
      an update clears them.
"""

from typing import Optional

from sqlalchemy import Boolean, Float, ForeignKey, Index, String, Text, false
from sqlalchemy.orm import Mapped, mapped_column

from canteen_api.database import Base


class Menu(Base):
    """A dish served by exactly one canteen."""

    __tablename__ = "menus"

    id: Mapped[str] = mapped_column(String(100), primary_key=True)

    name: Mapped[str] = mapped_column(String(100), nullable=False)

    type: Mapped[str] = mapped_column(String(100), nullable=False)

    canteen_id: Mapped[str] = mapped_column(
        String(100),
        ForeignKey("canteens.id"),
        nullable=False,
    )

    price: Mapped[float] = mapped_column(Float, nullable=False)

    signature: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
    )

    image_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    description: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    # Backs the canteen listing join (canteen_id, signature = true)
    __table_args__ = (
        Index("idx_menus_canteen_signature", "canteen_id", "signature"),
    )

    def __repr__(self) -> str:
        return f"<Menu(id={self.id}, name='{self.name}', canteen_id={self.canteen_id})>"
