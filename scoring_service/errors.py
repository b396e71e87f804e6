"""
Error taxonomy of the scoring service.
Every error carries the HTTP status it is rendered with at the route boundary.
"""
from typing import Optional


class ScoringServiceError(Exception):
    """Base class for all errors raised by the scoring pipeline"""
    status_code = 500


class InvalidRequestError(ScoringServiceError):
    """Malformed or missing request fields; never reaches the engines"""
    status_code = 400


class ConfigurationError(ScoringServiceError):
    """Missing credential or unusable configuration"""


class ProviderError(ScoringServiceError):
    """The LLM provider rejected the call or could not be reached"""

    def __init__(self, message: str, provider_status: Optional[int] = None):
        super().__init__(message)
        self.provider_status = provider_status


class ScoringParseError(ScoringServiceError):
    """Scoring Engine output could not be parsed as a JSON object"""
