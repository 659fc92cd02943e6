"""
Canteen API — Canteen Schemas
==============================

One set of field types, composed into the create body, the update body and
the response row. Changing a bound here changes it everywhere.
"""

from typing import Annotated, ClassVar, FrozenSet, List, Optional

from pydantic import Field

from canteen_api.schemas.common import CamelModel, EntityId, PartialUpdate, UrlStr
from canteen_api.schemas.menu import MenuRead

CanteenName = Annotated[str, Field(min_length=1, max_length=255)]


class CanteenCreate(CamelModel):
    """POST /canteens body."""

    name: CanteenName
    image_url: UrlStr


class CanteenUpdate(PartialUpdate):
    """
    PUT /canteens body.

    Both columns are NOT NULL, so a null `name` or `imageUrl` leaves the
    stored value as it is.
    """

    nullable_fields: ClassVar[FrozenSet[str]] = frozenset()

    id: EntityId
    name: Optional[CanteenName] = None
    image_url: Optional[UrlStr] = None


class CanteenRead(CamelModel):
    id: str
    name: str
    image_url: str


class CanteenWithMenus(CanteenRead):
    """Listing row: the canteen plus its signature menus."""

    menus: List[MenuRead] = Field(
        default_factory=list,
        validation_alias="signature_menus",
        description="Menus of this canteen flagged as signature dishes",
    )
