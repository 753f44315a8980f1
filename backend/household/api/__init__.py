"""API routes for the household service."""

from household.api.router import api_router

__all__ = ["api_router"]
