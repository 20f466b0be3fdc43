"""Groq Responses API client (OpenAI-compatible endpoint).

No route calls this yet; it is the model entry point for the chat assistant.
"""

from typing import Any, Dict, List, Optional

import httpx
import structlog
from openai import APIStatusError, OpenAI

from config import get_settings

logger = structlog.get_logger(__name__)

GROQ_BASE_URL = "https://api.groq.com/openai/v1"
COMPOUND_MINI_MODEL = "groq/compound-mini"
COMPOUND_MODEL = "groq/compound"


class GroqError(Exception):
    """Missing credentials or a failed Groq request."""


def get_groq_client() -> OpenAI:
    """OpenAI SDK client pointed at Groq. Failed calls are not retried."""
    api_key = get_settings().groq_api_key
    if not api_key:
        raise GroqError("GROQ_API_KEY is not set")

    return OpenAI(api_key=api_key, base_url=GROQ_BASE_URL, max_retries=0)


def groq_responses(body: Dict[str, Any], client: Optional[OpenAI] = None) -> Dict[str, Any]:
    """POST body to the Responses endpoint and return the decoded JSON."""
    client = client or get_groq_client()

    try:
        response = client.post("/responses", cast_to=httpx.Response, body=body)
    except APIStatusError as e:
        error_text = e.response.text or e.response.reason_phrase
        logger.warning("groq_request_failed", status_code=e.status_code)
        raise GroqError(f"Groq request failed ({e.status_code}): {error_text}") from e

    return response.json()


def _compound_request(
    model: str,
    input: Any,
    tools: Optional[List[Any]] = None,
    client: Optional[OpenAI] = None,
) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "model": model,
        "input": input,
    }

    if tools:
        payload["tools"] = tools

    return groq_responses(payload, client=client)


def compound_mini(input: Any, tools: Optional[List[Any]] = None, client: Optional[OpenAI] = None) -> Dict[str, Any]:
    return _compound_request(COMPOUND_MINI_MODEL, input, tools, client)


def compound(input: Any, tools: Optional[List[Any]] = None, client: Optional[OpenAI] = None) -> Dict[str, Any]:
    return _compound_request(COMPOUND_MODEL, input, tools, client)
