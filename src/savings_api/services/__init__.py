"""
savings_api.services

Service layer package.

Responsibilities:
- Own transaction boundaries (commit/rollback) for account and goal operations.
- Keep API routers thin and free of persistence details.
"""

# Package marker.
