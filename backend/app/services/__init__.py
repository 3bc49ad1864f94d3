# Services package init
"""
Versioned User API: Services Package
======================================

Business logic independent of HTTP and of API versions:
    - greeting_service.py: payload validation and greeting / failure messages
"""
