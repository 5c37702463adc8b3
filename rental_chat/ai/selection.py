"""
Maps the model reply back to at most one listing.

Rules, first match wins:
0.   decline already known (the alert tool ran) -> nothing
1-2. valid SELECTED_PROPERTY: [N] marker within range -> that candidate
3.   decline language -> nothing
4.   otherwise -> first unshown candidate, featured ones first
5.   property query that still has nothing without declining -> first unshown
"""
from typing import List, Optional
from enum import Enum
from dataclasses import dataclass
import logging
import re

from rental_chat.models import Property

logger = logging.getLogger(__name__)

SELECTION_MARKER_RE = re.compile(r"SELECTED_PROPERTY:\s*\[(\d+)\]")

DECLINE_PHRASES = (
    "no properties match", "no property matches", "nothing matches", "nothing that matches",
    "no exact match", "not a good match", "isn't a good match", "doesn't match",
    "don't have any", "do not have any", "don't currently have", "do not currently have",
    "couldn't find", "could not find", "can't find", "cannot find", "wasn't able to find",
    "none of our", "none of the available", "no listings",
    "notify you", "let you know when", "alert you", "set up an alert", "save an alert",
    "property alert", "email you when", "keep an eye out",
)


class SelectionRule(str, Enum):
    marker = "marker"
    declined = "declined"
    fallback = "fallback"
    emergency = "emergency"
    none = "none"


@dataclass(frozen=True)
class Selection:
    property: Optional[Property]
    rule: SelectionRule


def extract_marker(reply: str) -> Optional[int]:
    """1-based index from the last selection marker, or None"""
    matches = SELECTION_MARKER_RE.findall(reply or "")
    if not matches:
        return None
    return int(matches[-1])


def is_decline(reply: str) -> bool:
    text = (reply or "").lower().replace("’", "'")
    return any(phrase in text for phrase in DECLINE_PHRASES)


def fallback_candidate(unshown: List[Property]) -> Optional[Property]:
    """First featured unshown candidate, else the first unshown one"""
    if not unshown:
        return None
    return next((prop for prop in unshown if prop.featured), unshown[0])


def resolve(
    raw_reply: str,
    unshown_candidates: List[Property],
    is_property_query: bool,
    declined: bool = False,
) -> Selection:
    """
    Resolve the property to show for this turn.

    Args:
        raw_reply: Unsanitized model reply
        unshown_candidates: Candidates in the order they were numbered in the prompt
        is_property_query: Classification of this turn
        declined: The decline is already known (e.g. the model saved an alert)

    Returns:
        Selection with the chosen property (or None) and the rule that fired
    """
    index = extract_marker(raw_reply)

    if declined:
        selection = Selection(None, SelectionRule.declined)
    elif index is not None and 1 <= index <= len(unshown_candidates):
        selection = Selection(unshown_candidates[index - 1], SelectionRule.marker)
    elif is_decline(raw_reply):
        selection = Selection(None, SelectionRule.declined)
    elif unshown_candidates:
        if index is not None:
            logger.warning(f"⚠️ Marker [{index}] out of range (1..{len(unshown_candidates)}), using fallback")
        selection = Selection(fallback_candidate(unshown_candidates), SelectionRule.fallback)
    else:
        selection = Selection(None, SelectionRule.none)

    # guard: only reachable if the fallback comes back empty
    if (
        selection.property is None
        and selection.rule is not SelectionRule.declined
        and is_property_query
        and unshown_candidates
    ):
        logger.warning("EMERGENCY FALLBACK: forcing selection of first available property")
        selection = Selection(unshown_candidates[0], SelectionRule.emergency)

    if selection.property is not None:
        logger.info(f"Selected property {selection.property.id} via {selection.rule.value}")
    else:
        logger.info(f"No property selected ({selection.rule.value})")
    return selection
