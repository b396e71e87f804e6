"""
FastAPI application for the scoring service.
POST a call transcript, get scoring JSON, coaching feedback and narrator fields.
"""

import logging
import os
from typing import Any, Optional

from dotenv import find_dotenv, load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__
from .backends import create_backend
from .config import Settings
from .errors import InvalidRequestError
from .models import ErrorResponse, ScoreSessionResponse
from .pipeline import SessionEvaluator

load_dotenv(find_dotenv(usecwd=True))

# Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

SCORE_ROUTE = "/api/elevenlabs"
USAGE_MESSAGE = "POST JSON to this endpoint: { transcript, timing, metrics, scenario }"
METHOD_NOT_ALLOWED_MESSAGE = "Method Not Allowed. Use POST."


def error_response(status_code: int, message: str, headers: Optional[dict] = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
        headers=headers,
    )


async def read_json_body(request: Request) -> Any:
    """Request body as JSON; an empty or malformed body counts as {}"""
    try:
        return await request.json()
    except ValueError:
        return {}


def create_app(settings: Optional[Settings] = None, backend=None) -> FastAPI:
    """
    Builds the application.

    settings defaults to Settings.from_env(); backend defaults to the one named
    by settings.llm_backend. Both are injectable for tests.
    """
    settings = settings or Settings.from_env()
    if backend is None:
        backend = create_backend(settings)
    evaluator = SessionEvaluator(settings, backend)

    app = FastAPI(
        title="Scoring Service",
        description="Scores call transcripts and prepares narrator fields for the voice agent",
        version=__version__
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.settings = settings
    app.state.evaluator = evaluator

    logger.info(f"Scoring service: LLM backend={settings.llm_backend}, model={settings.openai_model}")
    if not settings.openai_api_key and settings.llm_backend == "openai":
        logger.warning("Scoring service: OPENAI_API_KEY not set. Scoring requests will fail.")

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        message = METHOD_NOT_ALLOWED_MESSAGE if exc.status_code == 405 else str(exc.detail)
        return error_response(exc.status_code, message, headers=getattr(exc, "headers", None))

    @app.get("/health")
    async def health():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "llm_backend": settings.llm_backend,
            "model": settings.openai_model,
            "api_key_configured": bool(settings.openai_api_key),
        }

    @app.get(SCORE_ROUTE)
    async def describe():
        """Capability descriptor for a browser check; touches no engine"""
        return {"ok": True, "message": USAGE_MESSAGE}

    @app.post(SCORE_ROUTE, response_model=ScoreSessionResponse)
    async def score_session(request: Request):
        """
        Score a session.

        Validates the body, runs the Scoring Engine and the Feedback Engine
        in sequence and returns narrator-ready fields.
        """
        body = await read_json_body(request)

        try:
            payload = evaluator.build_payload(body)
        except InvalidRequestError as e:
            logger.warning(f"Rejected scoring request: {e}")
            return error_response(e.status_code, str(e))

        try:
            result = await evaluator.evaluate(payload)
        except Exception as e:
            logger.error(f"Scoring request failed: {e}", exc_info=True)
            return error_response(getattr(e, "status_code", 500), str(e) or e.__class__.__name__)

        return ScoreSessionResponse(
            scoring=result.scoring,
            feedbackText=result.feedback_text,
            narratorVars=result.narrator_vars,
        )

    return app


app = create_app()


def run():
    """Console entry point: serves the app with uvicorn (HOST / PORT env)."""
    import uvicorn

    uvicorn.run(
        "scoring_service.main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
    )


if __name__ == "__main__":
    run()
