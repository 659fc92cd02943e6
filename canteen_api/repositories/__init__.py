"""
Repositories: one parameterized statement per method call.

They return rows, `None`, or `bool` and let datastore exceptions propagate;
translating outcomes into HTTP semantics is the services' job.
"""

from canteen_api.repositories.canteen_repository import CanteenRepository
from canteen_api.repositories.menu_repository import MenuRepository

__all__ = ["CanteenRepository", "MenuRepository"]
