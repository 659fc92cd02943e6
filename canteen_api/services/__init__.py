# Services package init
"""
Canteen API — Services Layer
=============================

What:  The mapping layer between routes (HTTP) and repositories (persistence).
How:   Each service method makes exactly one repository call and maps the
       outcome:
         row / rows present   → ApiResponse envelope (status=True)
         empty on read/delete → NotFoundError   (404)
         empty on write       → DatabaseError(kind=no_row)   (500)
         datastore exception  → DatabaseError(kind=...)      (500)

Service Inventory:
    - CanteenService: list (with signature menus), create, update, delete
    - MenuService:    list, create, update, delete

Services are stateless; the session is passed into every call and the id
generator is injected at construction, so tests can swap both.
"""

import uuid


def new_id() -> str:
    """Default identifier generator for created rows."""
    return str(uuid.uuid4())
