# Middleware package init
"""
Versioned User API: Middleware Package
========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [CORS] → [HTTPS Redirect] → [Request ID] → [Logging] → [API Version] → Route

    Why this order:
    1. CORS: FastAPI's CORSMiddleware, outermost so every response (including
       400s written by the API version middleware) carries CORS headers
    2. HTTPS redirect (optional): nothing else should run over plain HTTP
    3. Request ID: correlation ID for every later log line
    4. Logging: wraps versioning so rejected versions are logged with status
    5. API Version: must run before routing; VersionedAPIRoute reads its result
"""
