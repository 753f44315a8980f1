"""Household API Router - aggregates all API routes."""

from fastapi import APIRouter

from household.api import auth, calendar, health, items, recipes, stores

api_router = APIRouter()

api_router.include_router(health.router)
api_router.include_router(auth.router)
api_router.include_router(items.router)
api_router.include_router(stores.router)
api_router.include_router(recipes.router)
api_router.include_router(calendar.router)
