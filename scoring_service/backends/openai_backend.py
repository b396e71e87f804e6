import json
import logging
from typing import Any, Dict, Optional

import httpx

from ..errors import ConfigurationError, ProviderError

logger = logging.getLogger(__name__)


class OpenAIResponsesBackend:
    """
    One call to the OpenAI Responses API per request.

    Sampling is pinned to temperature 0 so identical input scores the same way.
    No retries: a failed call propagates to the caller.
    """

    def __init__(self, settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings
        self.model_name = settings.openai_model
        self.url = settings.openai_url
        self.timeout_sec = settings.timeout_sec
        # injectable for tests (httpx.MockTransport)
        self.transport = transport

    async def create_response(
        self,
        instructions: str,
        input_text: str,
        model: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Sends instructions + input to the provider.

        Args:
            instructions: system-level prompt of the engine
            input_text: user-level input (serialized JSON payload)
            model: model identifier, defaults to settings.openai_model

        Returns:
            The parsed response envelope, unmodified

        Raises:
            ConfigurationError: OPENAI_API_KEY is not configured
            ProviderError: non-2xx status, transport failure or non-JSON body
        """
        api_key = self.settings.openai_api_key
        # Fail before any network I/O instead of sending an empty key and getting 401
        if not api_key:
            raise ConfigurationError("Missing OPENAI_API_KEY environment variable.")

        headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }
        payload = {
            "model": model or self.model_name,
            "instructions": instructions,
            "input": input_text,
            "temperature": 0,
        }

        logger.info(f"OpenAI: sending request (model={payload['model']}, input: {len(input_text)} chars)")

        try:
            async with httpx.AsyncClient(timeout=self.timeout_sec, transport=self.transport) as client:
                response = await client.post(self.url, headers=headers, json=payload)
        except httpx.HTTPError as e:
            logger.warning(f"OpenAI: request failed: {e}")
            raise ProviderError(f"OpenAI request failed: {e}") from e

        try:
            data = response.json()
        except ValueError:
            data = None

        if not response.is_success:
            message = self._error_message(data, response.text)
            logger.warning(f"OpenAI: error response {response.status_code}: {message}")
            raise ProviderError(
                f"OpenAI error ({response.status_code}): {message}",
                provider_status=response.status_code,
            )

        if data is None:
            raise ProviderError(
                f"OpenAI returned a non-JSON response ({response.status_code})",
                provider_status=response.status_code,
            )

        return data

    @staticmethod
    def _error_message(data: Any, raw_text: str) -> str:
        """Provider's error.message if present, otherwise the raw body"""
        if isinstance(data, dict):
            error = data.get("error")
            if isinstance(error, dict) and error.get("message"):
                return str(error["message"])
            return json.dumps(data, ensure_ascii=False)
        return raw_text
