"""
Read access to available listings (chat candidates)
"""
from typing import List
from supabase import Client
from pydantic import ValidationError
import logging

from rental_chat.core.config import settings
from rental_chat.core.exceptions import CandidateLoadError
from rental_chat.models import Property

logger = logging.getLogger(__name__)

LISTING_COLUMNS = (
    "id, title, description, location, price, bedrooms, bathrooms, sqft, "
    "amenities, images, type, featured, created_at"
)


class ListingCRUD:
    def __init__(self, db: Client):
        self.db = db
        self.table = "listings"

    def list_available(self, limit: int = None) -> List[Property]:
        """
        Available listings, featured first then newest first.

        Raises:
            CandidateLoadError: If the store cannot be queried
        """
        limit = limit or settings.CANDIDATE_LIMIT
        try:
            result = self.db.table(self.table)\
                .select(LISTING_COLUMNS)\
                .eq("status", "available")\
                .order("featured", desc=True)\
                .order("created_at", desc=True)\
                .limit(limit)\
                .execute()
        except Exception as e:
            logger.error(f"✗ Listing query failed: {e}")
            raise CandidateLoadError(str(e)) from e

        properties = []
        for row in result.data or []:
            try:
                properties.append(Property(**row))
            except ValidationError as e:
                logger.warning(f"⚠️ Skipping malformed listing {row.get('id')}: {e.error_count()} error(s)")

        logger.info(f"🔍 Fetched {len(properties)} listings for property query")
        return properties[:limit]


def get_listing_crud(db: Client) -> ListingCRUD:
    return ListingCRUD(db)
