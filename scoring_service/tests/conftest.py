import json

import pytest
from fastapi.testclient import TestClient

from scoring_service.config import Settings
from scoring_service.main import create_app


def make_envelope(*texts):
    """Responses API envelope with one assistant message per text"""
    return {
        "object": "response",
        "output": [
            {
                "type": "message",
                "role": "assistant",
                "content": [{"type": "output_text", "text": text, "annotations": []}],
            }
            for text in texts
        ],
    }


class FakeBackend:
    """Records every call and replays scripted envelopes (or raises scripted errors)"""

    def __init__(self, responses=None):
        self.responses = list(responses or [])
        self.calls = []

    async def create_response(self, instructions, input_text, model=None):
        self.calls.append({"instructions": instructions, "input": input_text, "model": model})
        result = self.responses.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


SAMPLE_FEEDBACK = """Highlights:
- Great pacing
- Strong opening
- Clear recap
Growth Focus:
- Ask more questions
Next Rep Challenge:
Ask for the budget directly."""

SAMPLE_SCORING = {
    "displayedScore": 88,
    "band": "Strong",
    "personalBest": True,
    "badgesAwarded": [{"name": "Closer"}],
}


@pytest.fixture
def settings():
    return Settings(
        openai_api_key="test-key",
        openai_model="test-model",
        scoring_prompt="SCORING PROMPT",
        feedback_prompt="FEEDBACK PROMPT",
    )


@pytest.fixture
def envelope():
    return make_envelope


@pytest.fixture
def fake_backend():
    return FakeBackend(
        [
            make_envelope("Here is the result:\n" + json.dumps(SAMPLE_SCORING)),
            make_envelope(SAMPLE_FEEDBACK),
        ]
    )


@pytest.fixture
def client(settings, fake_backend):
    return TestClient(create_app(settings=settings, backend=fake_backend))
