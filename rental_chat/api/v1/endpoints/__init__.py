"""API endpoints"""
from rental_chat.api.v1.endpoints import chat

__all__ = ["chat"]
