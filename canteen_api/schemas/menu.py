"""
Canteen API — Menu Schemas
===========================

Shared field types for menu create/update/read. The update body allows a
longer `id` (up to 256 characters) than the delete path parameter; a longer
id simply matches no row.
"""

from typing import Annotated, ClassVar, FrozenSet, Optional

from pydantic import Field

from canteen_api.schemas.common import CamelModel, EntityId, PartialUpdate, UrlStr

MenuName = Annotated[str, Field(min_length=1, max_length=100)]
MenuType = Annotated[str, Field(min_length=1, max_length=100)]
MenuDescription = Annotated[str, Field(min_length=1, max_length=100)]
# strict: JSON numbers only, no "12" strings; ints are accepted as floats
Price = Annotated[float, Field(ge=1, le=1_000_000, strict=True)]
Signature = Annotated[bool, Field(strict=True)]


class MenuCreate(CamelModel):
    """POST /menus body. `imageUrl` and `description` must be present but may be null."""

    name: MenuName
    type: MenuType
    canteen_id: EntityId
    price: Price
    signature: Signature = False
    image_url: Optional[UrlStr]
    description: Optional[MenuDescription]


class MenuUpdate(PartialUpdate):
    """PUT /menus body. `imageUrl` and `description` can be cleared with null."""

    nullable_fields: ClassVar[FrozenSet[str]] = frozenset({"image_url", "description"})

    id: Annotated[str, Field(min_length=1, max_length=256)]
    name: Optional[MenuName] = None
    type: Optional[MenuType] = None
    canteen_id: Optional[EntityId] = None
    price: Optional[Price] = None
    signature: Optional[Signature] = None
    image_url: Optional[UrlStr] = None
    description: Optional[MenuDescription] = None


class MenuRead(CamelModel):
    id: str
    name: str
    type: str
    canteen_id: str
    price: float
    signature: bool
    image_url: Optional[str] = None
    description: Optional[str] = None
