# Overview: Advisory text generation client; optional, never fatal.

"""
Advisory Text Service

WHY: Styling tips and report commentary are generated by an external
text-generation API. The call is advisory only: any failure (no key
configured, network error, timeout, quota/HTTP error, malformed response)
is logged and replaced by a static fallback string. Callers never see an
exception from this module.
"""

from __future__ import annotations

import httpx
from flask import current_app


STYLIST_INSTRUCTION = (
    "You are a master tailor at a high-end bespoke boutique. "
    "Provide stylistic advice based on body measurements."
)
ANALYST_INSTRUCTION = (
    "You are a business advisor for a small tailoring shop. "
    "Give one short, practical recommendation (max 40 words)."
)

STYLING_FALLBACK = "Suggestion: Classic tailored fit with standard detailing."
DEFAULT_FALLBACK = "Advisory service is currently unavailable."


class AdvisoryUnavailable(Exception):
    """Internal signal that the collaborator produced no usable text."""
    pass


def _endpoint() -> str:
    base = current_app.config.get("ADVISORY_API_URL", "").rstrip("/")
    model = current_app.config.get("ADVISORY_MODEL", "")
    return f"{base}/{model}:generateContent"


def _build_client() -> httpx.Client:
    timeout = float(current_app.config.get("ADVISORY_TIMEOUT_SECONDS", 10))
    transport = current_app.config.get("ADVISORY_TRANSPORT")
    return httpx.Client(timeout=timeout, transport=transport)


def _request_body(prompt: str, system_instruction: str | None) -> dict:
    body = {"contents": [{"role": "user", "parts": [{"text": prompt}]}]}
    if system_instruction:
        body["systemInstruction"] = {"parts": [{"text": system_instruction}]}
    return body


def _extract_text(payload) -> str:
    try:
        parts = payload["candidates"][0]["content"]["parts"]
        text = "".join(part.get("text", "") for part in parts).strip()
    except (KeyError, IndexError, TypeError, AttributeError) as exc:
        raise AdvisoryUnavailable(f"Malformed advisory response: {exc}")
    if not text:
        raise AdvisoryUnavailable("Empty advisory response")
    return text


def request_advice(prompt: str, system_instruction: str | None = None) -> str:
    """
    Call the text-generation API and return its text.

    Raises:
        AdvisoryUnavailable: On any failure; see generate_advice for the
            non-raising variant.
    """
    api_key = current_app.config.get("ADVISORY_API_KEY")
    if not api_key:
        raise AdvisoryUnavailable("No advisory API key configured")

    try:
        with _build_client() as client:
            response = client.post(
                _endpoint(),
                headers={"x-goog-api-key": api_key},
                json=_request_body(prompt, system_instruction),
            )
            response.raise_for_status()
            payload = response.json()
    except httpx.HTTPError as exc:
        raise AdvisoryUnavailable(f"Advisory request failed: {exc}")
    except ValueError as exc:
        raise AdvisoryUnavailable(f"Advisory response was not JSON: {exc}")

    return _extract_text(payload)


def generate_advice(
    prompt: str,
    *,
    system_instruction: str | None = None,
    fallback: str = DEFAULT_FALLBACK,
) -> str:
    """Advisory text for a context string, or the fallback on any failure."""
    try:
        return request_advice(prompt, system_instruction)
    except AdvisoryUnavailable as exc:
        current_app.logger.warning("Advisory fallback used: %s", exc)
        return fallback
