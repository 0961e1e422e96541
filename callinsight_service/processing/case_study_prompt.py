from __future__ import annotations

import re

from ..domain.entities.analysis import Analysis

_WS = re.compile(r"\s+")
_UNSAFE = re.compile(r"[<>:\"/\\|?*\x00-\x1f]")
_SLUG_MAX = 100


def _bullets(items: list[str]) -> str:
    return "\n".join(f"• {item}" for item in items)


def build_case_study_prompt(analysis: Analysis) -> str:
    insights = analysis.key_insights
    metrics = "\n".join(f"• {m.metric}: {m.value} ({m.improvement})" for m in insights.metrics)
    return (
        "Generate a professional case study based on this customer call analysis:\n\n"
        f"CUSTOMER: {analysis.participants.customer}\n"
        f"REPRESENTATIVE: {analysis.participants.representative}\n"
        f"SUMMARY: {analysis.summary}\n\n"
        f"PAIN POINTS:\n{_bullets(insights.pain_points)}\n\n"
        f"SOLUTIONS:\n{_bullets(insights.solutions)}\n\n"
        f"OUTCOMES:\n{_bullets(insights.outcomes)}\n\n"
        f"METRICS:\n{metrics}\n\n"
        "Create a compelling case study with the following sections:\n"
        "1. Executive Summary\n"
        "2. Challenge\n"
        "3. Solution\n"
        "4. Results\n"
        "5. Customer Quote (if available from transcript)\n\n"
        "Make it professional, specific, and focused on business value."
    )


def customer_slug(customer: str) -> str:
    slug = _WS.sub("-", (customer or "").strip()).lower()
    # Non-ASCII names survive; only characters unusable in a file name go.
    slug = _UNSAFE.sub("", slug)[:_SLUG_MAX].strip("-. ")
    return slug or "unknown"


def case_study_filename(analysis: Analysis, extension: str) -> str:
    return f"case-study-{customer_slug(analysis.participants.customer)}.{extension}"
