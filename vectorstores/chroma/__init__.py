"""Chroma vector store: option resolution and store wrapper."""
from .options import (
    CHROMA_URL_ENV_VAR_NAME,
    DEFAULT_DISTANCE_FUNCTION,
    DEFAULT_NAMESPACE,
    DEFAULT_NAMESPACE_KEY,
    OPENAI_API_KEY_ENV_VAR_NAME,
    ChromaOptions,
    DistanceFunction,
    Option,
    QueryInclude,
    apply_client_options,
    with_chroma_url,
    with_distance_function,
    with_embedder,
    with_includes,
    with_namespace,
    with_openai_api_key,
)
from .store import Store

__all__ = [
    "CHROMA_URL_ENV_VAR_NAME",
    "DEFAULT_DISTANCE_FUNCTION",
    "DEFAULT_NAMESPACE",
    "DEFAULT_NAMESPACE_KEY",
    "OPENAI_API_KEY_ENV_VAR_NAME",
    "ChromaOptions",
    "DistanceFunction",
    "Option",
    "QueryInclude",
    "Store",
    "apply_client_options",
    "with_chroma_url",
    "with_distance_function",
    "with_embedder",
    "with_includes",
    "with_namespace",
    "with_openai_api_key",
]
