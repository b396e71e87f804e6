import logging

from .mock_backend import MockBackend
from .openai_backend import OpenAIResponsesBackend

logger = logging.getLogger(__name__)


def create_backend(settings):
    """Pick the LLM backend named by settings.llm_backend ("openai" | "mock")."""
    if settings.llm_backend == "mock":
        logger.info("Using MockBackend (offline, deterministic)")
        return MockBackend(model_name=settings.openai_model)
    if settings.llm_backend != "openai":
        raise ValueError(f"Unknown LLM backend '{settings.llm_backend}'. Use 'openai' or 'mock'")
    return OpenAIResponsesBackend(settings)


__all__ = ["MockBackend", "OpenAIResponsesBackend", "create_backend"]
