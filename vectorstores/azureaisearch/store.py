"""
Azure AI Search Store
=====================
Thin helpers over the Azure AI Search REST API.

Each helper composes a URL from the configured endpoint, attaches the api-key
header when a key is configured, and hands the request to _send(), which does
the round trip and decodes the JSON object body. There are no retries and no
internal timeout: the caller's timeout (seconds, None = wait) is passed
through to requests.
"""
import logging
import os
from typing import Any
from urllib.parse import quote

import requests

from ..errors import RequestError
from .options import API_VERSION, AzureAISearchOptions, Getenv, Option, apply_client_options

logger = logging.getLogger(__name__)


class Store:
    """Azure AI Search client; raises InvalidOptionsError on construction when options are incomplete."""

    def __init__(self, *options: Option, getenv: Getenv = os.getenv):
        self.options: AzureAISearchOptions = apply_client_options(*options, getenv=getenv)
        self._session = self.options.session or requests.Session()
        self._endpoint = self.options.endpoint.rstrip("/")

    @property
    def embedder(self):
        return self.options.embedder

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.options.api_key:
            headers["api-key"] = self.options.api_key
        return headers

    def _send(
        self,
        method: str,
        path: str,
        operation: str,
        *,
        payload: dict[str, Any] | None = None,
        timeout: float | None = None,
    ) -> dict[str, Any]:
        url = f"{self._endpoint}{path}"
        logger.debug("[azureaisearch] %s %s", method, url)

        try:
            response = self._session.request(
                method,
                url,
                params={"api-version": API_VERSION},
                headers=self._headers(),
                json=payload,
                timeout=timeout,
            )
            response.raise_for_status()
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            raise RequestError(operation, str(exc), status_code=status) from exc
        except requests.RequestException as exc:
            raise RequestError(operation, str(exc)) from exc

        try:
            body = response.json()
        except ValueError as exc:
            raise RequestError(operation, "response body is not valid JSON") from exc

        if not isinstance(body, dict):
            raise RequestError(operation, f"expected a JSON object, got {type(body).__name__}")
        return body

    def list_indexes(self, timeout: float | None = None) -> dict[str, Any]:
        """GET /indexes — every index definition on the service."""
        return self._send("GET", "/indexes", "list indexes on azure ai search", timeout=timeout)

    def retrieve_index(self, index_name: str, timeout: float | None = None) -> dict[str, Any]:
        """GET /indexes/{name} — one index definition."""
        if not index_name:
            raise ValueError("index_name must not be empty")
        return self._send(
            "GET",
            f"/indexes/{quote(index_name, safe='')}",
            f"retrieve index {index_name!r} on azure ai search",
            timeout=timeout,
        )
