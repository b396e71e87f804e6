import json
import logging
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

MOCK_SCORING = {
    "displayedScore": 82,
    "band": "Strong",
    "personalBest": False,
    "badgesAwarded": [],
}

MOCK_FEEDBACK = (
    "Highlights:\n"
    "- Clear, friendly opening.\n"
    "- Asked about the buyer's timeline early.\n"
    "Growth Focus:\n"
    "- Confirm budget comfort before discussing financing.\n"
    "Next Rep Challenge:\n"
    "Close with a concrete buyer consult time."
)


def _envelope(text: str) -> Dict[str, Any]:
    return {
        "object": "response",
        "status": "completed",
        "output": [
            {
                "type": "message",
                "role": "assistant",
                "content": [{"type": "output_text", "text": text, "annotations": []}],
            }
        ],
    }


class MockBackend:
    """
    Offline backend for debugging: returns deterministic Responses API envelopes.
    Feedback input (a JSON object with a "scoring" key) gets feedback prose,
    anything else gets the scoring JSON.
    """

    def __init__(self, model_name: str = "mock"):
        self.model_name = model_name
        logger.info("MockBackend initialized")

    async def create_response(
        self,
        instructions: str,
        input_text: str,
        model: Optional[str] = None,
    ) -> Dict[str, Any]:
        _ = instructions, model
        try:
            parsed = json.loads(input_text)
        except (json.JSONDecodeError, TypeError):
            parsed = None

        if isinstance(parsed, dict) and "scoring" in parsed:
            return _envelope(MOCK_FEEDBACK)
        return _envelope(json.dumps(MOCK_SCORING))
