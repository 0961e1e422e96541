from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ContractModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class Sentiment(ContractModel):
    overall: Literal["positive", "neutral", "negative"]
    score: float
    confidence: float


class Metric(ContractModel):
    metric: str
    value: str
    improvement: str


class KeyInsights(ContractModel):
    pain_points: List[str]
    solutions: List[str]
    outcomes: List[str]
    metrics: List[Metric]


class Participants(ContractModel):
    customer: str
    representative: str


class AnalysisPayload(ContractModel):
    """Shape the structured generation call must return."""

    sentiment: Sentiment
    key_insights: KeyInsights
    participants: Participants
    summary: str
    case_study_potential: Literal["high", "medium", "low"]


class Analysis(AnalysisPayload):
    """A validated payload plus the text it was derived from.

    Built in one step from a single generation call and never mutated;
    regenerating produces a new instance.
    """

    transcript_text: str = Field(default="")
