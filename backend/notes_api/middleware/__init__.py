# Middleware package init
"""
Notes API - Middleware Package
==============================

Middleware Chain (order matters):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID first so every later log line carries it
    2. Logging measures everything below it, including compression
    3. CORS is FastAPI's CORSMiddleware (handles preflight)

Responses travel the chain in reverse, which is where X-Request-ID is
added and the access log line is written.
"""
