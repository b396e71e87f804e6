"""
Two-stage evaluation of a call session: Scoring Engine, then Feedback Engine.
"""

import logging
from typing import Any, Dict, Optional

from .errors import InvalidRequestError
from .models import EvaluationResult, SessionPayload
from .narrator import build_narrator_vars
from .parser import extract_output_text, parse_feedback_sections, parse_json_object
from .prompt_builder import build_feedback_input, build_scoring_input
from .utils import is_falsy

logger = logging.getLogger(__name__)

MISSING_TRANSCRIPT_ERROR = (
    "Missing transcript. Send JSON like: { transcript: 'USER: ...\\nAGENT: ...', "
    "timing:{...}, metrics:{...}, scenario:{...} }"
)


def _default_if_missing(value: Any, default: Dict[str, Any]) -> Any:
    return default if is_falsy(value) else value


class SessionEvaluator:
    """
    Runs one evaluation request.

    The feedback call consumes the parsed scoring result, so the two engine
    calls are strictly sequential. Any failure propagates; there is no
    partial result.
    """

    def __init__(self, settings, backend):
        self.settings = settings
        self.backend = backend

    def build_payload(self, body: Optional[Dict[str, Any]]) -> SessionPayload:
        """
        Validates the request body and fills absent timing/metrics/scenario.

        Absent or falsy (null, false, 0, "") fields get the defaults; present
        objects are used as-is, never merged with the defaults.

        Raises:
            InvalidRequestError: transcript is missing, empty or not a string
        """
        body = body if isinstance(body, dict) else {}

        transcript = body.get("transcript")
        if not transcript or not isinstance(transcript, str):
            raise InvalidRequestError(MISSING_TRANSCRIPT_ERROR)

        defaults = self.settings.session_defaults
        return SessionPayload(
            transcript=transcript,
            timing=_default_if_missing(body.get("timing"), defaults.timing.model_dump()),
            metrics=_default_if_missing(body.get("metrics"), defaults.metrics.model_dump()),
            scenario=_default_if_missing(body.get("scenario"), defaults.scenario.model_dump()),
        )

    async def evaluate(self, payload: SessionPayload) -> EvaluationResult:
        model = self.settings.openai_model

        # 1) Scoring Engine: JSON only
        logger.info(f"Scoring Engine: evaluating transcript ({len(payload.transcript)} chars)")
        scoring_response = await self.backend.create_response(
            instructions=self.settings.scoring_prompt,
            input_text=build_scoring_input(payload),
            model=model,
        )
        scoring = parse_json_object(extract_output_text(scoring_response))
        logger.info(
            f"Scoring Engine: displayedScore={scoring.get('displayedScore')}, "
            f"band={scoring.get('band')}"
        )

        # 2) Feedback Engine: plain text
        feedback_response = await self.backend.create_response(
            instructions=self.settings.feedback_prompt,
            input_text=build_feedback_input(payload, scoring),
            model=model,
        )
        feedback_text = extract_output_text(feedback_response)

        # 3) Narrator-ready fields
        sections = parse_feedback_sections(feedback_text)
        logger.info(
            f"Feedback Engine: {len(feedback_text)} chars, "
            f"highlights={len(sections.highlights)}, growth={len(sections.growth)}, "
            f"challenge={'yes' if sections.challenge else 'no'}"
        )

        return EvaluationResult(
            scoring=scoring,
            feedback_text=feedback_text,
            sections=sections,
            narrator_vars=build_narrator_vars(scoring, sections),
        )
