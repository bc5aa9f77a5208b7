"""
Influencer Network Backend: Middleware Package
===============================================

What:  Cross-cutting request handling.

Middleware chain (outermost first):
    Request → [Rate Limit] → [Request ID] → [Access Log] → [GZip] → [CORS] → Router

    - Rate limit rejects abusive IPs before any other work.
    - Request ID is assigned before logging so every access line carries it.

Per-route dependencies (auth.py):
    get_current_user, require_roles, require_verified_email, rate_limit_by_user
"""
