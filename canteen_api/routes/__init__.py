# Routes package init
"""
Canteen API — API Routes Package
=================================

Route Inventory:
    - canteens.py: GET/POST/PUT /canteens, DELETE /canteens/{id}
    - menus.py:    GET/POST/PUT /menus,    DELETE /menus/{id}
    - health.py:   GET /health

Routes are THIN: they declare the input contract (schemas, path constraints),
pull a session from the dependency and hand both to a service.
"""
