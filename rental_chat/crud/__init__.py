# rental_chat/crud/__init__.py
"""
CRUD layer for the rental chat assistant

Modules:
- AISettings: generative backend configuration (read-only)
- Listing: available listings (read-only)
- Alert: property alert subscriptions (insert)
"""

from .ai_settings import AISettingsCRUD, get_ai_settings_crud
from .listing import ListingCRUD, get_listing_crud
from .alert import AlertCRUD, get_alert_crud

__all__ = [
    "AISettingsCRUD",
    "get_ai_settings_crud",
    "ListingCRUD",
    "get_listing_crud",
    "AlertCRUD",
    "get_alert_crud",
]
