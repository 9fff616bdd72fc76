"""API routers."""

from directory_api.routers import auth, employees, subscriptions

__all__ = ["auth", "employees", "subscriptions"]
