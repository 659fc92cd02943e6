"""ORM models. Importing this package registers every table with `Base.metadata`."""

from canteen_api.models.canteen import Canteen
from canteen_api.models.menu import Menu

__all__ = ["Canteen", "Menu"]
