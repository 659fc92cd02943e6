# Middleware package init
"""
Canteen API — Middleware Package
=================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID: correlation id for every log line of the request
    2. Logging: one access line per request, with that id
    3. GZip / CORS: Starlette's stock middleware

    Responses pass back through the chain in reverse, so the X-Request-ID
    header is set and the access line carries the final status and duration.
"""
