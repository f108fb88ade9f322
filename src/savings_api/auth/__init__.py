"""
savings_api.auth

Authentication/authorization package.

Responsibilities:
- JWT and password helpers for self-issued tokens.
- Identity provider client for delegated tokens.
- Token verifier strategies and FastAPI auth dependencies (Principal + RoleCheck).
"""

# Package marker.
