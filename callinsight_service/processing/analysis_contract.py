"""Prompt, schema and validation for the structured call analysis."""

from __future__ import annotations

import json
import re
from typing import Any

from pydantic import ValidationError

from ..domain.entities.analysis import Analysis, AnalysisPayload
from ..domain.errors import AnalysisSchemaFailure

_STRING_LIST = {"type": "array", "items": {"type": "string"}}

ANALYSIS_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "sentiment": {
            "type": "object",
            "properties": {
                "overall": {"type": "string", "enum": ["positive", "neutral", "negative"]},
                "score": {"type": "number"},
                "confidence": {"type": "number"},
            },
            "required": ["overall", "score", "confidence"],
        },
        "keyInsights": {
            "type": "object",
            "properties": {
                "painPoints": _STRING_LIST,
                "solutions": _STRING_LIST,
                "outcomes": _STRING_LIST,
                "metrics": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {
                            "metric": {"type": "string"},
                            "value": {"type": "string"},
                            "improvement": {"type": "string"},
                        },
                        "required": ["metric", "value", "improvement"],
                    },
                },
            },
            "required": ["painPoints", "solutions", "outcomes", "metrics"],
        },
        "participants": {
            "type": "object",
            "properties": {
                "customer": {"type": "string"},
                "representative": {"type": "string"},
            },
            "required": ["customer", "representative"],
        },
        "summary": {"type": "string"},
        "caseStudyPotential": {"type": "string", "enum": ["high", "medium", "low"]},
    },
    "required": ["sentiment", "keyInsights", "participants", "summary", "caseStudyPotential"],
}

_EXAMPLE = {
    "sentiment": {"overall": "positive|neutral|negative", "score": 0.85, "confidence": 0.92},
    "keyInsights": {
        "painPoints": ["specific customer challenges mentioned"],
        "solutions": ["solutions provided or discussed"],
        "outcomes": ["results, benefits, or improvements mentioned"],
        "metrics": [{"metric": "Time saved", "value": "40%", "improvement": "positive"}],
    },
    "participants": {
        "customer": "customer name or company if mentioned",
        "representative": "sales/support rep name if mentioned",
    },
    "summary": "Brief 2-3 sentence summary of the call",
    "caseStudyPotential": "high|medium|low",
}

_FENCE = re.compile(r"^```[a-zA-Z]*\s*|\s*```$")


def build_analysis_prompt(transcript: str) -> str:
    return (
        "Analyze this customer call transcript and extract key information for a case study:\n\n"
        f"TRANSCRIPT:\n{transcript}\n\n"
        "Please provide a JSON response with the following structure:\n"
        f"{json.dumps(_EXAMPLE, indent=2)}\n\n"
        "Focus on extracting concrete business value, specific metrics, and success indicators."
    )


def loads_json_object(text: str) -> dict:
    """Parse a model reply that should hold one JSON object, tolerating markdown fences."""
    cleaned = _FENCE.sub("", (text or "").strip())
    if not cleaned:
        raise AnalysisSchemaFailure("empty response from model")
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise AnalysisSchemaFailure(f"response is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise AnalysisSchemaFailure(f"expected a JSON object, got {type(data).__name__}")
    return data


def parse_analysis(payload: Any, transcript_text: str) -> Analysis:
    if not isinstance(payload, dict):
        raise AnalysisSchemaFailure(f"expected an object, got {type(payload).__name__}")
    try:
        validated = AnalysisPayload.model_validate(payload)
    except ValidationError as exc:
        raise AnalysisSchemaFailure(f"analysis does not match schema: {exc.error_count()} error(s)") from exc
    return Analysis.model_validate({**validated.model_dump(), "transcript_text": transcript_text})
