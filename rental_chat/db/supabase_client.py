"""
Supabase client for the rental chat assistant.
Owns the connection to the hosted database (listings, AI settings, alerts).
"""
from supabase import create_client, Client
from functools import lru_cache
import logging

from rental_chat.core.config import settings
from rental_chat.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class SupabaseClient:
    """
    Wrapper around the Supabase client.
    Creates the connection lazily on first use.
    """
    
    _instance: Client = None
    
    @classmethod
    def get_client(cls) -> Client:
        """
        Return the Supabase client instance (singleton).
        
        Returns:
            Configured Supabase client
            
        Raises:
            ConfigurationError: If SUPABASE_URL or SUPABASE_KEY is missing
        """
        if cls._instance is None:
            if not settings.SUPABASE_URL or not settings.SUPABASE_KEY:
                raise ConfigurationError("SUPABASE_URL / SUPABASE_KEY not set")
            
            try:
                logger.info("🔌 Initializing Supabase client...")
                
                cls._instance = create_client(
                    supabase_url=settings.SUPABASE_URL,
                    supabase_key=settings.SUPABASE_KEY
                )
                
                logger.info("✅ Supabase client initialized")
                
            except Exception as e:
                logger.error(f"❌ Supabase initialization failed: {str(e)}")
                raise
        
        return cls._instance


@lru_cache()
def get_supabase_client() -> Client:
    """
    Return the shared Supabase client.
    
    Returns:
        Configured Supabase client
    """
    return SupabaseClient.get_client()


__all__ = [
    "SupabaseClient",
    "get_supabase_client",
]
