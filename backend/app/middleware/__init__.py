"""
PlotRegistry Backend — Middleware Package
=========================================

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID: Generate correlation ID for logging and tracing
    2. Logging: Log request details with the generated request ID
    3. CORS: Applied by FastAPI's CORSMiddleware (handles preflight)

    The order is reversed for responses, so the request ID header is set
    and the logged status/duration are final when the client sees them.
"""
