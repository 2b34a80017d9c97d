"""
Azure AI Search Store Options
=============================
Resolution order:
  1. Baseline — API key from AZURE_AI_SEARCH_API_KEY (may stay empty)
  2. Options  — applied in call order, last write wins per field
  3. Endpoint — AZURE_AI_SEARCH_ENDPOINT when no option set one; missing → InvalidOptionsError
  4. Embedder — required → InvalidOptionsError
"""
import os
from dataclasses import dataclass, replace
from functools import reduce
from typing import Callable

import requests
from langchain_core.embeddings import Embeddings

from ..errors import InvalidOptionsError

ENDPOINT_ENV_VAR_NAME = "AZURE_AI_SEARCH_ENDPOINT"
API_KEY_ENV_VAR_NAME = "AZURE_AI_SEARCH_API_KEY"  # nosec B105
API_VERSION = "2023-11-01"


@dataclass(frozen=True)
class AzureAISearchOptions:
    endpoint: str = ""
    api_key: str = ""
    embedder: Embeddings | None = None
    session: requests.Session | None = None


Option = Callable[[AzureAISearchOptions], AzureAISearchOptions]
Getenv = Callable[[str], str | None]


def with_endpoint(endpoint: str) -> Option:
    """Search service endpoint, e.g. https://<service>.search.windows.net."""
    return lambda o: replace(o, endpoint=endpoint)


def with_api_key(api_key: str) -> Option:
    """Admin or query key sent as the api-key header."""
    return lambda o: replace(o, api_key=api_key)


def with_embedder(embedder: Embeddings) -> Option:
    return lambda o: replace(o, embedder=embedder)


def with_http_session(session: requests.Session) -> Option:
    """HTTP session used for every request; a fresh requests.Session otherwise."""
    return lambda o: replace(o, session=session)


def default_options(getenv: Getenv = os.getenv) -> AzureAISearchOptions:
    return AzureAISearchOptions(api_key=getenv(API_KEY_ENV_VAR_NAME) or "")


def apply_client_options(*options: Option, getenv: Getenv = os.getenv) -> AzureAISearchOptions:
    """
    Resolve options into a validated AzureAISearchOptions.

    Raises:
        InvalidOptionsError: no endpoint after the environment fallback, or no embedder.
    """
    resolved = reduce(lambda o, option: option(o), options, default_options(getenv))

    if not resolved.endpoint:
        endpoint = getenv(ENDPOINT_ENV_VAR_NAME) or ""
        if not endpoint:
            raise InvalidOptionsError(
                "missing azure ai search endpoint. Pass it as an option or set the "
                f"{ENDPOINT_ENV_VAR_NAME} environment variable"
            )
        resolved = replace(resolved, endpoint=endpoint)

    if resolved.embedder is None:
        raise InvalidOptionsError("missing embedder")

    return resolved
