"""
Service configuration.

Settings are read from the environment exactly once (Settings.from_env) and then
passed by parameter to the evaluator and the LLM backend.
"""
import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from .models import SessionDefaults

BASE_DIR = Path(__file__).resolve().parent

# scoring_service/prompts/*.md and scoring_service/spec/session_defaults.json
SCORING_PROMPT_PATH = BASE_DIR / "prompts" / "scoring_engine_system_prompt.md"
FEEDBACK_PROMPT_PATH = BASE_DIR / "prompts" / "feedback_engine_system_prompt.md"
SESSION_DEFAULTS_PATH = BASE_DIR / "spec" / "session_defaults.json"

DEFAULT_OPENAI_URL = "https://api.openai.com/v1/responses"
DEFAULT_OPENAI_MODEL = "gpt-4o-mini"
DEFAULT_TIMEOUT_SEC = 120.0

logger = logging.getLogger(__name__)


def load_prompt(path: Path) -> str:
    """Reads a system prompt verbatim. Prompts are opaque: no templating."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except FileNotFoundError:
        logger.error(f"Prompt file not found: {path}")
        raise


def load_session_defaults(path: Path) -> SessionDefaults:
    """Loads default timing/metrics/scenario objects from a JSON file"""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data: Dict[str, Any] = json.load(f)
    except FileNotFoundError:
        logger.error(f"Session defaults file not found: {path}")
        raise
    return SessionDefaults(**data)


@dataclass(frozen=True)
class Settings:
    """
    Runtime configuration of the scoring service:

    - openai_api_key: bearer credential; may be missing at startup, every LLM call
      then fails with ConfigurationError before touching the network
    - openai_model / openai_url: model identifier and Responses API endpoint
    - timeout_sec: httpx timeout for one engine call
    - llm_backend: "openai" or "mock"
    - scoring_prompt / feedback_prompt: system instructions of the two engines
    - session_defaults: objects used when timing/metrics/scenario are absent
    """
    openai_api_key: Optional[str] = None
    openai_model: str = DEFAULT_OPENAI_MODEL
    openai_url: str = DEFAULT_OPENAI_URL
    timeout_sec: float = DEFAULT_TIMEOUT_SEC
    llm_backend: str = "openai"
    scoring_prompt: str = ""
    feedback_prompt: str = ""
    session_defaults: SessionDefaults = field(default_factory=SessionDefaults)

    @classmethod
    def from_env(cls) -> "Settings":
        scoring_prompt_path = Path(os.getenv("SCORING_PROMPT_PATH") or SCORING_PROMPT_PATH)
        feedback_prompt_path = Path(os.getenv("FEEDBACK_PROMPT_PATH") or FEEDBACK_PROMPT_PATH)
        defaults_path = Path(os.getenv("SESSION_DEFAULTS_PATH") or SESSION_DEFAULTS_PATH)

        return cls(
            openai_api_key=(os.getenv("OPENAI_API_KEY") or "").strip() or None,
            openai_model=(os.getenv("OPENAI_MODEL") or "").strip() or DEFAULT_OPENAI_MODEL,
            openai_url=(os.getenv("OPENAI_RESPONSES_URL") or "").strip() or DEFAULT_OPENAI_URL,
            timeout_sec=float(os.getenv("LLM_TIMEOUT_SEC") or DEFAULT_TIMEOUT_SEC),
            llm_backend=(os.getenv("LLM_BACKEND", "openai") or "openai").lower().strip(),
            scoring_prompt=load_prompt(scoring_prompt_path),
            feedback_prompt=load_prompt(feedback_prompt_path),
            session_defaults=load_session_defaults(defaults_path),
        )
