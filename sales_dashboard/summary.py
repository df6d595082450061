"""
AI performance summary via the Gemini text-generation REST API.

Failures are never raised to the caller: they are logged and replaced by
SUMMARY_FALLBACK_TEXT.
"""

import logging
from typing import Any

import requests

from .config import (
    GEMINI_API_KEY,
    GEMINI_ENDPOINT,
    GEMINI_MODEL,
    SUMMARY_FALLBACK_TEXT,
    SUMMARY_TIMEOUT_SECONDS,
)
from .errors import ExternalServiceError

logger = logging.getLogger(__name__)


def build_summary_prompt(name: str, metrics: dict[str, Any]) -> str:
    """Prompt with the salesperson's name and seven headline metrics."""
    return f"""
Analyze the following sales data for a salesperson named {name} and provide a concise performance summary in Portuguese.
The summary should be easy to read, using markdown for formatting (bolding, lists).
Highlight their strengths, potential weaknesses, and suggest one key area for improvement.

Key Metrics:
- Total New Leads: {metrics["total_leads"]}
- Sales Qualified Leads (SQL): {metrics["total_qualified_leads"]}
- Total Contracts Closed: {metrics["total_contracts_closed"]}
- Total Contract Value: R$ {metrics["total_contracts_value"]:.2f}
- Total Paid Value: R$ {metrics["total_paid"]:.2f}
- Conversion Rate (SQL to Closed): {metrics["conversion_rate"] * 100:.2f}%
- CPA (Cost per Acquisition - Paid / Signed Contracts): R$ {metrics["cost_per_acquisition"]:.2f}

Daily data is available but focus on the overall summary. Be encouraging but direct.
""".strip()


def _generate_text(
    prompt: str,
    api_key: str,
    model: str,
    session: requests.Session | None = None,
) -> str:
    """POST the prompt and return the first candidate's text."""
    if not api_key:
        raise ExternalServiceError("GEMINI_API_KEY is not configured")

    http = session if session is not None else requests
    try:
        response = http.post(
            GEMINI_ENDPOINT.format(model=model),
            params={"key": api_key},
            headers={"content-type": "application/json"},
            json={"contents": [{"parts": [{"text": prompt}]}]},
            timeout=SUMMARY_TIMEOUT_SECONDS,
        )
    except requests.RequestException as exc:
        raise ExternalServiceError(f"request failed: {exc}") from exc

    if response.status_code != 200:
        raise ExternalServiceError(f"API error: {response.status_code}")

    try:
        result = response.json()
        text = result["candidates"][0]["content"]["parts"][0]["text"]
    except (ValueError, KeyError, IndexError, TypeError) as exc:
        raise ExternalServiceError("unexpected response payload") from exc

    if not text or not text.strip():
        raise ExternalServiceError("empty response text")
    return text


def request_performance_summary(
    name: str,
    metrics: dict[str, Any],
    api_key: str | None = None,
    model: str | None = None,
    session: requests.Session | None = None,
) -> str:
    """Ask the text-generation service for a Portuguese performance summary.

    Returns the generated markdown, or SUMMARY_FALLBACK_TEXT on any failure.
    """
    prompt = build_summary_prompt(name, metrics)
    try:
        return _generate_text(
            prompt,
            api_key=api_key if api_key is not None else GEMINI_API_KEY,
            model=model or GEMINI_MODEL,
            session=session,
        )
    except ExternalServiceError as exc:
        logger.error("Summary generation failed for '%s': %s", name, exc)
        return SUMMARY_FALLBACK_TEXT
