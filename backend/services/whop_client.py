"""HTTP clients for the Whop platform API.

Writes go through the WhopRestClient returned by get_rest_client(). Reads go
through the WhopReadClient returned by get_whop_client(). Both are built
lazily, once per process.
"""

import json
from typing import Any, Dict, Optional

import requests
import structlog

from config import DEFAULT_WHOP_API_BASE, get_settings

logger = structlog.get_logger(__name__)


class WhopConfigError(Exception):
    """A required Whop credential is missing."""


class WhopAPIError(Exception):
    """The Whop API answered with a non-2xx status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _error_message(payload: Any, text: str, reason: str) -> str:
    if isinstance(payload, dict) and isinstance(payload.get("message"), str):
        return payload["message"]
    return text or reason


class WhopRestClient:
    """Minimal bearer-authenticated JSON client for the Whop REST API."""

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = DEFAULT_WHOP_API_BASE,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ):
        if not api_key:
            raise WhopConfigError("WHOP_API_KEY is not set")

        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        })

    def request(
        self,
        method: str,
        path: str,
        body: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Send one request and return the decoded body (None when empty).

        Raises WhopAPIError for non-2xx responses; network failures propagate
        as requests.RequestException.
        """
        url = f"{self.base_url}{path}"
        logger.debug("whop_request", method=method, path=path)

        response = self.session.request(
            method,
            url,
            json=body,
            params=params,
            timeout=self.timeout,
        )

        text = response.text
        payload = None
        if text:
            try:
                payload = json.loads(text)
            except ValueError:
                if response.ok:
                    raise WhopAPIError(
                        f"Invalid JSON from Whop API: {text[:200]}",
                        response.status_code,
                    )

        if not response.ok:
            message = _error_message(payload, text, response.reason)
            logger.warning(
                "whop_request_failed",
                method=method,
                path=path,
                status_code=response.status_code,
                error=message,
            )
            raise WhopAPIError(message, response.status_code)

        return payload

    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, body: Dict[str, Any]) -> Any:
        return self.request("POST", path, body=body)

    def patch(self, path: str, body: Dict[str, Any]) -> Any:
        return self.request("PATCH", path, body=body)

    def delete(self, path: str) -> Any:
        return self.request("DELETE", path)


class WhopReadClient:
    """Read accessors for a company's products (access passes) and plans."""

    def __init__(self, app_id: Optional[str], api_key: Optional[str], rest: Optional[WhopRestClient] = None):
        if not app_id:
            raise WhopConfigError("WHOP_APP_ID is not set")
        if not api_key:
            raise WhopConfigError("WHOP_API_KEY is not set")

        self.app_id = app_id
        if rest is None:
            settings = get_settings()
            rest = WhopRestClient(
                api_key,
                base_url=settings.whop_api_base,
                timeout=settings.whop_api_timeout,
            )
        self.rest = rest

    def list_access_passes(self, company_id: str) -> Any:
        """Raw collection of the company's products."""
        return self.rest.get("/products", params={"company_id": company_id})

    def list_plans(self, company_id: str) -> Any:
        """Raw collection of the company's plans."""
        return self.rest.get("/plans", params={"company_id": company_id})


# Process-wide clients. Their sessions are shared by threadpool workers; the
# headers are fixed at construction and only session.request() runs afterwards.
_rest_client: Optional[WhopRestClient] = None
_whop_client: Optional[WhopReadClient] = None


def get_whop_client() -> WhopReadClient:
    """Process-wide read client, built from the environment on first use."""
    global _whop_client
    if _whop_client is None:
        settings = get_settings()
        _whop_client = WhopReadClient(settings.whop_app_id, settings.whop_api_key)
    return _whop_client


def get_rest_client() -> WhopRestClient:
    """Process-wide REST client for writes, built from the environment on first use."""
    global _rest_client
    if _rest_client is None:
        settings = get_settings()
        _rest_client = WhopRestClient(
            settings.whop_api_key,
            base_url=settings.whop_api_base,
            timeout=settings.whop_api_timeout,
        )
    return _rest_client
