import json
from typing import Any, Dict

from .models import SessionPayload


def build_scoring_input(payload: SessionPayload) -> str:
    """
    Model input of the Scoring Engine:
    {"transcript": ..., "timing": {...}, "metrics": {...}, "scenario": {...}}
    """
    return json.dumps(payload.model_dump(), ensure_ascii=False)


def build_feedback_input(payload: SessionPayload, scoring: Dict[str, Any]) -> str:
    """
    Model input of the Feedback Engine: the original session plus the scoring result.
    """
    feedback_payload = {
        "session": payload.model_dump(),
        "scoring": scoring,
    }
    return json.dumps(feedback_payload, ensure_ascii=False)
