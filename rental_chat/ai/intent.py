"""
Intent classification of an inbound chat message.
Pure keyword matching: no I/O, same inputs give the same answer.
"""
from typing import List, Optional
from enum import Enum
from dataclasses import dataclass
import logging
import re

from rental_chat.models import PriorTurn

logger = logging.getLogger(__name__)


class FaqKind(str, Enum):
    """Questions answered directly, without the model"""
    list_property = "list_property"
    view_stats = "view_stats"


@dataclass(frozen=True)
class Intent:
    is_property_query: bool
    direct_faq: Optional[FaqKind] = None


HOUSING_STEMS = (
    'propert', 'rent', 'apartment', 'condo', 'house', 'home', 'unit',
    'villa', 'studio', 'bedroom', 'bathroom', 'lease', 'leasing', 'available',
    'listing', 'tour', 'showing', 'visit', 'looking', 'search', 'find', 'need',
    'want', 'price', 'pricing', 'cost', 'budget', 'afford', 'location', 'area',
    'neighborhood', 'near',
)

# too short to prefix-match ("br" would hit "brunch")
HOUSING_WORDS = frozenset(['br', 'bed', 'beds', 'bath', 'baths'])

HOUSING_STEM_RE = re.compile(r"\b(?:" + "|".join(HOUSING_STEMS) + r")")

HOUSING_PHRASES = ('do you have',)

SHOW_MORE_KEYWORDS = frozenset([
    'more', 'another', 'other', 'others', 'different', 'next', 'else', 'additional',
])

SHOW_MORE_PHRASES = ('show me', 'see some')

LIST_PROPERTY_PHRASES = (
    'list my property', 'list a property', 'list property', 'add my property',
    'submit property', 'submit my property', 'post property', 'post my property',
    'upload property', 'upload my property',
)

VIEW_STATS_PHRASES = (
    'how many viewed', 'how many views', 'how many people viewed', 'views on my property',
    'views on my listing', 'views did my', 'property views', 'listing views',
    'view statistics', 'view stats', 'people viewed',
)

_WORD_RE = re.compile(r"[a-z0-9']+")


def _tokens(text: str) -> set:
    return set(_WORD_RE.findall(text))


def _has_recent_results(history: List[PriorTurn], lookback: int) -> bool:
    """True when one of the last `lookback` turns surfaced a property"""
    recent = history[-lookback:] if lookback > 0 else []
    return any(turn.selected_properties for turn in recent)


def detect_faq(text: str) -> Optional[FaqKind]:
    """Return the FAQ kind matched by the (lowercased) text, if any"""
    if any(phrase in text for phrase in LIST_PROPERTY_PHRASES):
        return FaqKind.list_property
    if any(phrase in text for phrase in VIEW_STATS_PHRASES):
        return FaqKind.view_stats
    return None


def classify(message: str, history: List[PriorTurn], lookback: int = 4) -> Intent:
    """
    Classify one message.

    Args:
        message: Raw user message
        history: Prior turns supplied by the client
        lookback: Number of trailing turns inspected for earlier results

    Returns:
        Intent with the property-query flag and the direct FAQ kind (if any)
    """
    text = message.lower()
    words = _tokens(text)

    faq = detect_faq(text)

    housing = (
        bool(HOUSING_STEM_RE.search(text))
        or bool(words & HOUSING_WORDS)
        or any(p in text for p in HOUSING_PHRASES)
    )
    show_more = bool(words & SHOW_MORE_KEYWORDS) or any(p in text for p in SHOW_MORE_PHRASES)
    has_results = _has_recent_results(history, lookback)

    is_property_query = housing or (show_more and has_results)

    logger.debug(
        f"Intent: housing={housing}, show_more={show_more}, "
        f"recent_results={has_results}, faq={faq}"
    )

    return Intent(is_property_query=is_property_query, direct_faq=faq)
