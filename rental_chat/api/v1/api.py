"""Main v1 API router"""
from fastapi import APIRouter
from rental_chat.api.v1.endpoints import chat

api_router = APIRouter()

# ==================== AI ASSISTANT ====================
api_router.include_router(
    chat.router,
    prefix="/ai",
    tags=["AI Assistant"]
)
