"""
Write access to the property_alerts table
"""
from typing import Dict
from supabase import Client
import logging

from rental_chat.core.exceptions import AlertPersistenceError
from rental_chat.models import AlertRequest

logger = logging.getLogger(__name__)


class AlertCRUD:
    def __init__(self, db: Client):
        self.db = db
        self.table = "property_alerts"

    def save_alert(self, alert: AlertRequest) -> Dict[str, bool]:
        """
        Persist a property alert.

        Returns:
            {"success": bool}

        Raises:
            AlertPersistenceError: If the insert fails
        """
        try:
            result = self.db.table(self.table).insert(alert.to_row()).execute()
        except Exception as e:
            logger.error(f"✗ Alert insert failed: {e}")
            raise AlertPersistenceError(str(e)) from e

        success = bool(result.data)
        if success:
            logger.info(f"✓ Property alert saved: {result.data[0].get('id')}")
        else:
            logger.warning("⚠️ Alert insert returned no row")
        return {"success": success}


def get_alert_crud(db: Client) -> AlertCRUD:
    return AlertCRUD(db)
