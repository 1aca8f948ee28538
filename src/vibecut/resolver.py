"""Filter resolution — remote suggestion with keyword-rule fallback."""

import logging

from .errors import InferenceError
from .filters import drawtext

logger = logging.getLogger(__name__)


# ── Mood rules ────────────────────────────────────────────────────
# Evaluated in order against the lower-cased prompt; first match wins.

MOOD_RULES = [
    (("energetic", "fast"), "energetic"),
    (("chill", "calm"), "chill"),
]
DEFAULT_MOOD = "action"

MOOD_FILTERS = {
    "energetic": ["setpts=0.85*PTS", "hue=s=1.25", drawtext("VIBE: ENERGETIC")],
    "chill": ["setpts=1.05*PTS", "hue=s=0.8", drawtext("VIBE: CHILL")],
    "action": ["setpts=1.0*PTS", "hue=s=1.0", drawtext("VIBE: ACTION")],
}


def classify_mood(prompt: str) -> str:
    lowered = prompt.lower()
    for keywords, mood in MOOD_RULES:
        if any(k in lowered for k in keywords):
            return mood
    return DEFAULT_MOOD


def fallback_filters(prompt: str) -> list[str]:
    """Fixed three-directive chain for the prompt's mood."""
    return list(MOOD_FILTERS[classify_mood(prompt)])


def resolve_filters(prompt: str, client) -> tuple[list[str], bool]:
    """Return (candidate directives, used_remote).

    The remote result is used whole or not at all: any InferenceError
    from the client selects the keyword fallback.
    """
    try:
        filters = client.suggest_filters(prompt)
    except InferenceError as e:
        logger.warning("Remote filter suggestion unavailable (%s); using keyword rules", e)
        return fallback_filters(prompt), False
    return filters, True
