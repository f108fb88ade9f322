"""
savings_api.api

API package for the Savings Goals service.

Responsibilities:
- FastAPI app factory and router modules.
- API-layer dependency wiring and error translation.
"""

# Package marker.
