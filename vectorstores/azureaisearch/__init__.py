"""Azure AI Search vector store: option resolution and REST helpers."""
from .options import (
    API_KEY_ENV_VAR_NAME,
    API_VERSION,
    ENDPOINT_ENV_VAR_NAME,
    AzureAISearchOptions,
    Option,
    apply_client_options,
    with_api_key,
    with_embedder,
    with_endpoint,
    with_http_session,
)
from .store import Store

__all__ = [
    "API_KEY_ENV_VAR_NAME",
    "API_VERSION",
    "ENDPOINT_ENV_VAR_NAME",
    "AzureAISearchOptions",
    "Option",
    "Store",
    "apply_client_options",
    "with_api_key",
    "with_embedder",
    "with_endpoint",
    "with_http_session",
]
