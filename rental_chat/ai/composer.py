"""
Builds the request sent to the generative backend for one chat turn.
"""
from typing import List, Dict, Any, Optional, Set
from pydantic import BaseModel, Field
import logging

from rental_chat.models import ModelSettings, PriorTurn, Property
from .prompts import (
    ALERT_GUIDANCE,
    CANDIDATE_TEMPLATE,
    NO_CANDIDATES_LEFT,
    SELECTION_TASK,
)
from .tools import SAVE_ALERT_TOOL

logger = logging.getLogger(__name__)


class StructuredRequest(BaseModel):
    """Chat-completions request plus the candidate numbering it was built with"""
    model: str
    messages: List[Dict[str, Any]]
    max_tokens: int
    temperature: float
    tools: Optional[List[Dict[str, Any]]] = None
    tool_choice: Optional[str] = None

    # 1-based numbering used in the prompt; never sent to the backend
    unshown_candidates: List[Property] = Field(default_factory=list, exclude=True)

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)

    def without_tools(self, extra_messages: List[Dict[str, Any]]) -> "StructuredRequest":
        """Follow-up request: same conversation plus `extra_messages`, no tool declaration"""
        return self.model_copy(update={
            "messages": self.messages + extra_messages,
            "tools": None,
            "tool_choice": None,
        })


def filter_unshown(candidates: List[Property], shown_ids: Set[str]) -> List[Property]:
    """Candidates not yet surfaced, in their original order"""
    return [prop for prop in candidates if prop.id not in shown_ids]


def format_candidate(index: int, prop: Property) -> str:
    return CANDIDATE_TEMPLATE.format(
        index=index,
        id=prop.id,
        title=prop.title,
        location=prop.location or "Not specified",
        type=prop.type or "Not specified",
        price=prop.price,
        bedrooms=prop.bedrooms,
        bathrooms=f"{prop.bathrooms:g}",
        sqft=f", {prop.sqft} sqft" if prop.sqft else "",
        amenities=", ".join(prop.amenities) or "None listed",
        description=prop.description or "No description",
        featured="Yes" if prop.featured else "No",
    )


def detect_preferences(history: List[PriorTurn]) -> List[str]:
    """Coarse preference tags from the earlier user messages"""
    text = " ".join(t.content for t in history if t.role.value == "user").lower()
    preferences = []
    if any(w in text for w in ("budget", "afford", "cheap")):
        preferences.append("Budget-conscious")
    if any(w in text for w in ("space", "big", "large")):
        preferences.append("Wants spacious property")
    if any(w in text for w in ("location", "area", "near")):
        preferences.append("Location-focused")
    return preferences


def _selection_block(
    unshown: List[Property],
    shown_ids: Set[str],
    history: List[PriorTurn],
    message: str,
) -> str:
    if unshown:
        candidates = "\n\n".join(format_candidate(i, p) for i, p in enumerate(unshown, 1))
    else:
        candidates = NO_CANDIDATES_LEFT

    previous_queries = [t.content for t in history if t.role.value == "user" and t.content]

    return SELECTION_TASK.format(
        shown_ids=", ".join(sorted(shown_ids)) or "None",
        candidates=candidates,
        previous_queries=" | ".join(previous_queries) or "This is the first query",
        preferences=", ".join(detect_preferences(history)) or "None detected yet",
        message=message,
    )


def compose(
    settings: ModelSettings,
    candidates: List[Property],
    shown_ids: Set[str],
    history: List[PriorTurn],
    message: str,
) -> StructuredRequest:
    """
    Compose the backend request.

    The selection block (numbered candidates + SELECTED_PROPERTY contract) is
    only added when candidates were loaded for this turn. The alert tool is
    always declared.

    Args:
        settings: Model settings for this request
        candidates: Loaded listings (empty for non-property turns)
        shown_ids: Ids already surfaced in the conversation
        history: Prior turns, already truncated by the caller
        message: New user message

    Returns:
        StructuredRequest carrying the numbered unshown candidates
    """
    unshown = filter_unshown(candidates, shown_ids)

    system_parts = [settings.system_instructions]
    if candidates:
        system_parts.append(_selection_block(unshown, shown_ids, history, message))
    system_parts.append(ALERT_GUIDANCE)

    messages = [{"role": "system", "content": "\n\n".join(system_parts)}]
    messages.extend(turn.to_message() for turn in history)
    messages.append({"role": "user", "content": message})

    logger.debug(
        f"Composed request: {len(unshown)}/{len(candidates)} unshown candidates, "
        f"{len(history)} history turns"
    )

    return StructuredRequest(
        model=settings.model_id,
        messages=messages,
        max_tokens=settings.max_tokens,
        temperature=settings.temperature,
        tools=[SAVE_ALERT_TOOL],
        tool_choice="auto",
        unshown_candidates=unshown,
    )
