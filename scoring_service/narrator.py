"""
Narrator variables for the voice agent.
Pure mapping of scoring JSON + parsed feedback sections, no side effects.
"""
from typing import Any, Dict

from .models import FeedbackSections, NarratorVars
from .utils import is_falsy

PERSONAL_BEST_LINE = "Personal best achieved."
BADGE_LINE_TEMPLATE = "Badge unlocked: {name}"
SUMMARY_FALLBACK = "Solid work. Keep building consistency rep to rep."


def _badge_name(badge: Any) -> str:
    if isinstance(badge, dict):
        return str(badge.get("name", ""))
    return str(badge)


def build_narrator_vars(scoring: Dict[str, Any], sections: FeedbackSections) -> NarratorVars:
    """
    Maps results to narrator fields.

    Only EVALUATION_SUMMARY gets a fallback sentence; strengths, improvements
    and next step stay empty when their section is missing.
    """
    badges = scoring.get("badgesAwarded")
    badge_line = ""
    if isinstance(badges, list) and badges:
        badge_line = BADGE_LINE_TEMPLATE.format(name=_badge_name(badges[0]))

    highlights = sections.highlights

    return NarratorVars(
        DISPLAYED_SCORE=scoring.get("displayedScore"),
        BAND=scoring.get("band"),
        OPTIONAL_PERSONAL_BEST_LINE="" if is_falsy(scoring.get("personalBest")) else PERSONAL_BEST_LINE,
        OPTIONAL_BADGE_LINE=badge_line,
        EVALUATION_SUMMARY=" ".join(highlights[:2]) if highlights else SUMMARY_FALLBACK,
        EVALUATION_STRENGTHS=" ".join(highlights),
        EVALUATION_IMPROVEMENTS=" ".join(sections.growth),
        EVALUATION_NEXT_STEP=sections.challenge or "",
    )
