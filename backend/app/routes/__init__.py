# Routes package init
"""
Versioned User API: API Routes Package
========================================

Route Inventory:
    - users_v1.py:  POST /User?api-version=1   (default version)
    - users_v2.py:  POST /User?api-version=2
    - users.py:     outcome → HTTP response mapping shared by both versions
    - docs.py:      GET  /swagger, GET /swagger/{group}/swagger.json
    - health.py:    GET  /health

Design Principle:
    Routes are THIN: they pick the request/response models of their version
    and delegate validation and formatting to services.greeting_service.
"""
