# scoring_service/models.py

from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional, Union

Number = Union[int, float]


class Timing(BaseModel):
    maxSeconds: Optional[Number] = None
    actualSeconds: Optional[Number] = None


class Metrics(BaseModel):
    wpm: Optional[Number] = None
    fillerRatePct: Optional[Number] = None
    questionCount: Optional[Number] = None
    interruptions: Optional[Number] = None


class Scenario(BaseModel):
    name: str = ""
    tags: List[str] = Field(default_factory=list)
    requiredInfo: List[str] = Field(default_factory=list)
    forbiddenPhrases: List[str] = Field(default_factory=list)
    idealCTA: str = ""


class SessionDefaults(BaseModel):
    """Objects substituted for timing/metrics/scenario when the request omits them"""
    timing: Timing = Field(default_factory=lambda: Timing(maxSeconds=420))
    metrics: Metrics = Field(default_factory=Metrics)
    scenario: Scenario = Field(
        default_factory=lambda: Scenario(
            name="Mark — Initial Buyer Contact",
            tags=["buyer", "first-time", "financing", "education"],
            requiredInfo=["timeline", "budget comfort", "motivation"],
            forbiddenPhrases=["guaranteed", "promise", "certainly will"],
            idealCTA="Schedule a buyer consult and lender pre-approval intro.",
        )
    )


class SessionPayload(BaseModel):
    """
    Validated, default-filled scoring input.
    timing/metrics/scenario supplied by the caller are kept as-is (no deep merge).
    """
    transcript: str
    timing: Any
    metrics: Any
    scenario: Any


class FeedbackSections(BaseModel):
    highlights: List[str] = Field(default_factory=list)
    growth: List[str] = Field(default_factory=list)
    challenge: str = ""


class NarratorVars(BaseModel):
    """Flat field set spoken by the downstream voice agent"""
    DISPLAYED_SCORE: Any = None
    BAND: Any = None
    OPTIONAL_PERSONAL_BEST_LINE: str = ""
    OPTIONAL_BADGE_LINE: str = ""
    EVALUATION_SUMMARY: str = ""
    EVALUATION_STRENGTHS: str = ""
    EVALUATION_IMPROVEMENTS: str = ""
    EVALUATION_NEXT_STEP: str = ""


class EvaluationResult(BaseModel):
    scoring: Dict[str, Any]
    feedback_text: str
    sections: FeedbackSections
    narrator_vars: NarratorVars


class ScoreSessionResponse(BaseModel):
    ok: bool = True
    scoring: Dict[str, Any]
    feedbackText: str
    narratorVars: NarratorVars


class ErrorResponse(BaseModel):
    ok: bool = False
    error: str
