"""
Cleans the model reply before it reaches the user.
"""
import logging
import random
import re

from .prompts import FOUND_MATCH_REPLIES, HERE_TO_HELP_REPLIES

logger = logging.getLogger(__name__)

MIN_REPLY_LENGTH = 10

MARKER_LABEL_RE = re.compile(r"SELECTED_PROPERTY:?\s*\d*", re.IGNORECASE)
CODE_FENCE_RE = re.compile(r"`{3,}[a-zA-Z0-9_+-]*")
BRACKETS_RE = re.compile(r"[{}\[\]]")
INLINE_SPACE_RE = re.compile(r"[ \t\f\v]+")
BLANK_LINES_RE = re.compile(r"\n{3,}")

# still looks like structured data after stripping
LEAK_RE = re.compile(r'`{3,}|\bjson\b|"[\w\s-]{1,40}"\s*:', re.IGNORECASE)


def _strip_markers(text: str) -> str:
    # removing one label can splice two halves into a new one
    previous = None
    while previous != text:
        previous = text
        text = MARKER_LABEL_RE.sub("", text)
    return text


def _collapse_whitespace(text: str) -> str:
    lines = [INLINE_SPACE_RE.sub(" ", line).strip() for line in text.split("\n")]
    return BLANK_LINES_RE.sub("\n\n", "\n".join(lines)).strip()


def sanitize(raw_reply: str, selection_was_made: bool) -> str:
    """
    Remove the selection marker and leaked structured-data syntax.

    Args:
        raw_reply: Model reply
        selection_was_made: A property card accompanies the reply

    Returns:
        Clean reply, or a canned sentence when too little survives
    """
    text = raw_reply or ""
    text = CODE_FENCE_RE.sub("", text)
    text = BRACKETS_RE.sub("", text)
    text = _strip_markers(text)
    text = _collapse_whitespace(text)

    if len(text) < MIN_REPLY_LENGTH or LEAK_RE.search(text):
        pool = FOUND_MATCH_REPLIES if selection_was_made else HERE_TO_HELP_REPLIES
        fallback = random.choice(pool)
        logger.info(f"Problematic reply ({len(text)} chars), using fallback: {fallback}")
        return fallback

    return text
