"""Rental chat assistant - main application"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from rental_chat.core.config import settings
from rental_chat.api.v1.api import api_router
import logging

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    description="Property-matching chat assistant for the rental marketplace",
    version=settings.VERSION,
    debug=settings.DEBUG
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.on_event("startup")
async def startup_event():
    if not settings.SUPABASE_URL or not settings.SUPABASE_KEY:
        logger.warning("⚠️ SUPABASE_URL / SUPABASE_KEY not set, chat requests will fail")
    else:
        logger.info(f"✓ {settings.APP_NAME} starting (default model {settings.LLM_MODEL})")

@app.get("/")
async def root():
    return {
        "app": settings.APP_NAME,
        "version": settings.VERSION,
        "status": "running"
    }

@app.get("/health")
async def health_check():
    return {"status": "healthy"}

# API routes
app.include_router(api_router, prefix="/api/v1")

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host=settings.HOST, port=settings.PORT, reload=settings.DEBUG)
