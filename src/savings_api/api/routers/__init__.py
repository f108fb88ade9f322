"""
savings_api.api.routers

HTTP routers: health, auth, users (admin), goals.
"""
