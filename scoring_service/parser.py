import json
import logging
import re
from typing import Any, Dict, List, Optional

from .errors import ScoringParseError
from .models import FeedbackSections

logger = logging.getLogger(__name__)

HIGHLIGHTS_HEADER = re.compile(r"^highlights\b", re.IGNORECASE)
GROWTH_HEADER = re.compile(r"^growth focus\b", re.IGNORECASE)
CHALLENGE_HEADER = re.compile(r"^next rep challenge\b", re.IGNORECASE)
BULLET = re.compile(r"^[-*•]\s+")


def extract_output_text(envelope: Any) -> str:
    """
    Collects the text of a Responses API envelope.

    Walks envelope["output"] -> items of type "message" -> content entries of
    type "output_text" and concatenates their "text" in encounter order.
    Any level with an unexpected shape is skipped, never raised on.

    Args:
        envelope: parsed JSON returned by the provider (any shape).

    Returns:
        Trimmed concatenated text, "" when nothing matched.
    """
    if not isinstance(envelope, dict):
        return ""
    output = envelope.get("output")
    if not isinstance(output, list):
        return ""

    parts: List[str] = []
    for item in output:
        if not isinstance(item, dict) or item.get("type") != "message":
            continue
        content = item.get("content")
        if not isinstance(content, list):
            continue
        for entry in content:
            if not isinstance(entry, dict) or entry.get("type") != "output_text":
                continue
            text = entry.get("text")
            if isinstance(text, str):
                parts.append(text)

    return "".join(parts).strip()


def _reject_constant(name: str):
    # NaN / Infinity are not JSON
    raise ValueError(f"Invalid JSON constant: {name}")


def _loads_object(text: str) -> Optional[Dict[str, Any]]:
    try:
        parsed = json.loads(text, parse_constant=_reject_constant)
    except (ValueError, TypeError):
        return None
    return parsed if isinstance(parsed, dict) else None


def parse_json_object(text: str) -> Dict[str, Any]:
    """
    Parses a JSON object out of model output.

    First the whole text is parsed. If that fails, the span from the first "{"
    to the last "}" is parsed, which recovers output wrapped in commentary.

    Raises:
        ScoringParseError: neither attempt produced a JSON object.
    """
    parsed = _loads_object(text)
    if parsed is not None:
        return parsed

    first_brace = text.find("{")
    last_brace = text.rfind("}")
    if first_brace >= 0 and last_brace > first_brace:
        parsed = _loads_object(text[first_brace:last_brace + 1])
        if parsed is not None:
            logger.info("Recovered JSON object from surrounding text")
            return parsed

    logger.warning(f"Model output is not a JSON object (length: {len(text)} chars)")
    raise ScoringParseError("Could not parse JSON from model output.")


def parse_feedback_sections(feedback_text: str) -> FeedbackSections:
    """
    Splits Feedback Engine prose into highlights / growth / challenge.

    Expected layout (any order, ":" / "-" / "—" after the header, any bullet style):

        Highlights:
        - ...
        Growth Focus:
        - ...
        Next Rep Challenge:
        ...

    Lines before the first recognized header are dropped. Several challenge
    lines are joined with a single space. Unrecognized text yields empty sections.
    """
    lines = [line.strip() for line in (feedback_text or "").split("\n")]

    section = None
    highlights: List[str] = []
    growth: List[str] = []
    challenge = ""

    for line in lines:
        if not line:
            continue

        if HIGHLIGHTS_HEADER.match(line):
            section = "highlights"
            continue
        if GROWTH_HEADER.match(line):
            section = "growth"
            continue
        if CHALLENGE_HEADER.match(line):
            section = "challenge"
            continue

        cleaned = BULLET.sub("", line, count=1)

        if section == "highlights":
            highlights.append(cleaned)
        elif section == "growth":
            growth.append(cleaned)
        elif section == "challenge":
            challenge = f"{challenge} {cleaned}" if challenge else cleaned

    return FeedbackSections(highlights=highlights, growth=growth, challenge=challenge)
