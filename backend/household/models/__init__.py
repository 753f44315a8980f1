# Household API Models
from household.models.base import BaseModel
from household.models.calendar_event import CalendarEvent
from household.models.item import Item
from household.models.recipe import Recipe
from household.models.store import Store
from household.models.token_blacklist import TokenBlacklist
from household.models.user import User, UserRole

__all__ = [
    "BaseModel",
    "CalendarEvent",
    "Item",
    "Recipe",
    "Store",
    "TokenBlacklist",
    "User",
    "UserRole",
]
