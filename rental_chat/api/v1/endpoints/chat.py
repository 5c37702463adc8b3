"""Endpoints for the conversational property assistant"""
from fastapi import APIRouter, Request
from starlette.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from pydantic import ValidationError
import json
import logging

from rental_chat.ai.agent import RentalChatAgent
from rental_chat.core.config import settings
from rental_chat.core.exceptions import ChatError, InputParseError
from rental_chat.db import get_supabase_client
from rental_chat.models import ChatRequest

logger = logging.getLogger(__name__)
router = APIRouter()

_agent_instance = None


def get_agent() -> RentalChatAgent:
    """Factory for the agent instance (lazy loading)"""
    global _agent_instance
    if _agent_instance is None:
        logger.info("🤖 Initializing chat agent...")
        _agent_instance = RentalChatAgent(get_supabase_client())
    return _agent_instance


def _error_response(error: ChatError) -> JSONResponse:
    return JSONResponse(
        status_code=error.status_code,
        content={"reply": error.user_message, "properties": [], "error": error.code},
    )


def _parse_request(raw_body: bytes) -> ChatRequest:
    try:
        body = json.loads(raw_body or b"")
    except ValueError as e:
        raise InputParseError(f"Body is not valid JSON: {e}") from e
    if not isinstance(body, dict):
        raise InputParseError("Body must be a JSON object")
    try:
        return ChatRequest.model_validate(body)
    except ValidationError as e:
        raise InputParseError(f"Invalid chat request: {e.error_count()} error(s)") from e


@router.post("/chat")
async def chat(request: Request):
    """
    Send a message to the assistant

    - **message**: user message
    - **context**: prior turns `{role, content, selectedProperties?}`
    """
    raw_body = await request.body()
    try:
        chat_request = _parse_request(raw_body)
    except InputParseError as e:
        logger.warning(f"⚠️ Rejected chat request: {e.detail}")
        return _error_response(e)

    return await run_in_threadpool(_run_turn, chat_request)


def _run_turn(chat_request: ChatRequest) -> JSONResponse:
    try:
        agent = get_agent()
        reply = agent.handle_turn(chat_request.message, chat_request.context)
    except ChatError as e:
        logger.error(f"❌ Chat turn failed: {e.code} - {e.detail}")
        return _error_response(e)
    except Exception as e:
        logger.exception(f"❌ Unexpected chatbot error: {e}")
        return _error_response(ChatError(str(e)))

    return JSONResponse(status_code=200, content=reply.to_response())


@router.get("/health")
def health_check():
    """Check that the chat agent is available"""
    try:
        get_agent()
        return {
            "status": "healthy",
            "agent": settings.APP_NAME,
            "model": settings.LLM_MODEL
        }
    except Exception as e:
        return {
            "status": "error",
            "error": str(e)
        }
