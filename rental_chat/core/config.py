"""Application configuration for the rental chat assistant"""
from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """Configuration parameters"""
    
    # Application
    APP_NAME: str = "Rental Chat Assistant"
    VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    
    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    
    # CORS - allowed origins
    CORS_ORIGINS: str = "http://localhost:8000,http://localhost:3000,http://127.0.0.1:3000"
    
    # Supabase
    SUPABASE_URL: str = ""
    SUPABASE_KEY: str = ""
    
    # Generative backend (OpenAI-compatible chat completions)
    OPENAI_API_KEY: str = ""  # fallback when ai_settings has no key
    OPENAI_API_BASE: str = "https://api.openai.com/v1"
    LLM_MODEL: str = "gpt-4o-mini"
    LLM_TEMPERATURE: float = 0.7
    LLM_MAX_TOKENS: int = 1000
    LLM_TIMEOUT_SECONDS: float = 30.0
    
    # Chat pipeline
    CANDIDATE_LIMIT: int = 20
    HISTORY_LIMIT: int = 10
    SHOW_MORE_LOOKBACK: int = 4
    
    @property
    def cors_origins_list(self) -> List[str]:
        """Split CORS_ORIGINS into a list"""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]
    
    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


# Global instance
settings = Settings()
