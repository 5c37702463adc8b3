"""
Chat agent for the rental marketplace.
Turns one inbound message into a reply plus at most one property card.
"""
from typing import Callable, List, Optional
import logging

from rental_chat.core.config import settings
from rental_chat.core.exceptions import ConfigurationError, ToolArgumentParseError
from rental_chat.crud import get_ai_settings_crud, get_alert_crud, get_listing_crud
from rental_chat.models import (
    ChatReply,
    ModelSettings,
    PriorTurn,
    Property,
    shown_property_ids,
)
from .composer import compose
from .generation import GenerationClient, TextReply, ToolCallRequest
from .intent import classify
from .prompts import EMERGENCY_SELECTION_REPLY, EMPTY_MODEL_REPLY, FAQ_REPLIES
from .sanitizer import sanitize
from .selection import SelectionRule, resolve
from .tools import AlertToolExecutor

logger = logging.getLogger(__name__)


class RentalChatAgent:
    """
    Stateless per-turn orchestrator.

    Steps (strictly sequential):
    settings -> intent -> (listings) -> compose -> generate -> (alert tool)
    -> selection -> sanitize

    Conversation history and the shown-property set come from the caller on
    every turn; nothing is kept between calls.
    """

    def __init__(
        self,
        supabase_client,
        generation_client_factory: Optional[Callable[[ModelSettings], object]] = None
    ):
        """
        Args:
            supabase_client: Supabase client (settings, listings, alerts)
            generation_client_factory: Builds a generation client from the
                request's ModelSettings (defaults to GenerationClient)
        """
        self.settings_crud = get_ai_settings_crud(supabase_client)
        self.listing_crud = get_listing_crud(supabase_client)
        self.alert_crud = get_alert_crud(supabase_client)
        self.generation_client_factory = generation_client_factory or GenerationClient

        logger.info("✅ RentalChatAgent initialized")

    def handle_turn(self, message: str, history: List[PriorTurn]) -> ChatReply:
        """
        Process one chat message.

        Args:
            message: User message
            history: Prior turns of the conversation (oldest first)

        Returns:
            ChatReply with at most one property

        Raises:
            ChatError subclasses for fatal failures (configuration, listing
            store, generative backend)
        """
        logger.info(f"📩 Message received ({len(message)} chars, {len(history)} context turns)")

        # 1. Settings
        model_settings = self.settings_crud.load()
        if not model_settings.api_credential:
            logger.error("❌ OpenAI API key not configured")
            raise ConfigurationError("OpenAI API key not configured in database settings")

        # 2. Intent
        intent = classify(message, history, lookback=settings.SHOW_MORE_LOOKBACK)
        logger.info(
            f"Property query: {intent.is_property_query}, "
            f"direct FAQ: {intent.direct_faq.value if intent.direct_faq else None}"
        )

        if intent.direct_faq is not None:
            logger.info(f"Direct answer for {intent.direct_faq.value}")
            return ChatReply(reply=FAQ_REPLIES[intent.direct_faq.value], properties=[])

        # 3. Candidates (property queries only)
        candidates: List[Property] = []
        if intent.is_property_query:
            candidates = self.listing_crud.list_available(settings.CANDIDATE_LIMIT)
        else:
            logger.info("Not a property query, skipping listings fetch")

        shown_ids = shown_property_ids(history)
        if shown_ids:
            logger.info(f"Previously shown properties: {', '.join(sorted(shown_ids))}")

        # 4. Prompt
        request = compose(
            model_settings,
            candidates,
            shown_ids,
            history[-settings.HISTORY_LIMIT:] if settings.HISTORY_LIMIT > 0 else [],
            message,
        )

        # 5. Generation
        client = self.generation_client_factory(model_settings)
        result = client.generate(request)

        # 6. Tool path
        alert_saved: Optional[bool] = None
        declined = False
        if isinstance(result, ToolCallRequest):
            executor = AlertToolExecutor(self.alert_crud.save_alert, client)
            try:
                outcome = executor.execute(request, result, message)
                raw_reply = outcome.reply
                alert_saved = outcome.alert_saved
                declined = True
            except ToolArgumentParseError as e:
                logger.error(f"❌ Tool path aborted: {e.detail}")
                raw_reply = ""
                alert_saved = False
        else:
            raw_reply = result.text if isinstance(result, TextReply) else ""

        if not raw_reply.strip() and alert_saved is None:
            raw_reply = EMPTY_MODEL_REPLY

        # 7. Selection
        selection = resolve(
            raw_reply,
            request.unshown_candidates,
            intent.is_property_query,
            declined=declined,
        )
        properties = [selection.property] if selection.property is not None else []

        # 8. Sanitize
        if selection.rule is SelectionRule.emergency:
            reply = EMERGENCY_SELECTION_REPLY
        else:
            reply = sanitize(raw_reply, selection_was_made=bool(properties))

        logger.info(f"✅ Reply ready: {len(properties)} property, alert_saved={alert_saved}")

        return ChatReply(reply=reply, properties=properties, alert_saved=alert_saved)
