# Middleware package init
"""
Movie Catalog API — Middleware Package
========================================

Middleware Chain (outermost first, as assembled in main.create_app):
    Request → [Request ID] → [Access Log] → [GZip] → [CORS] → Route Handler

    1. Request ID first, so the access log and error handlers can read it
    2. Access log wraps everything after it, so its duration covers the handler
    3. GZip is Starlette's GZipMiddleware (bodies of 500 bytes and up)
    4. CORS is FastAPI's CORSMiddleware (handles preflight)

Unhandled exceptions are rendered outside this chain, by the fallback
handler in main.py, which reads the id from request.state.
"""
