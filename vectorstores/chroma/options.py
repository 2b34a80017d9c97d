"""
Chroma Store Options
====================
Resolves and validates the configuration a Chroma store is built from.

Resolution order:
  1. Baseline — namespace defaults, L2 distance, OpenAI key from OPENAI_API_KEY
  2. Options  — applied in call order, last write wins per field
  3. URL      — CHROMA_URL when no option set one; missing → InvalidOptionsError
  4. Vectors  — an embedder or an OpenAI key is required → InvalidOptionsError

The environment is read through the getenv argument so callers and tests can
substitute their own lookup.
"""
import logging
import os
from dataclasses import dataclass, replace
from enum import Enum
from functools import reduce
from typing import Callable, Sequence

from langchain_core.embeddings import Embeddings

from ..errors import InvalidOptionsError

logger = logging.getLogger(__name__)

OPENAI_API_KEY_ENV_VAR_NAME = "OPENAI_API_KEY"  # nosec B105
CHROMA_URL_ENV_VAR_NAME = "CHROMA_URL"
DEFAULT_NAMESPACE = "langchain"
DEFAULT_NAMESPACE_KEY = "nameSpace"


class DistanceFunction(str, Enum):
    L2 = "l2"
    IP = "ip"
    COSINE = "cosine"


class QueryInclude(str, Enum):
    DOCUMENTS = "documents"
    EMBEDDINGS = "embeddings"
    METADATAS = "metadatas"
    DISTANCES = "distances"


DEFAULT_DISTANCE_FUNCTION = DistanceFunction.L2


@dataclass(frozen=True)
class ChromaOptions:
    chroma_url: str = ""
    openai_api_key: str = ""
    namespace: str = DEFAULT_NAMESPACE
    namespace_key: str = DEFAULT_NAMESPACE_KEY
    distance_function: DistanceFunction = DEFAULT_DISTANCE_FUNCTION
    includes: tuple[QueryInclude, ...] = ()
    embedder: Embeddings | None = None


Option = Callable[[ChromaOptions], ChromaOptions]
Getenv = Callable[[str], str | None]


def with_namespace(namespace: str) -> Option:
    """Namespace used to upsert and query the vectors."""
    return lambda o: replace(o, namespace=namespace)


def with_chroma_url(chroma_url: str) -> Option:
    """Chroma server URL. Required unless CHROMA_URL is set."""
    return lambda o: replace(o, chroma_url=chroma_url)


def with_embedder(embedder: Embeddings) -> Option:
    return lambda o: replace(o, embedder=embedder)


def with_distance_function(distance_function: DistanceFunction | str) -> Option:
    """Distance function of the collection's HNSW index: l2, ip or cosine."""
    distance_function = DistanceFunction(distance_function)
    return lambda o: replace(o, distance_function=distance_function)


def with_includes(includes: Sequence[QueryInclude | str]) -> Option:
    """Fields returned with query results."""
    includes = tuple(QueryInclude(i) for i in includes)
    return lambda o: replace(o, includes=includes)


def with_openai_api_key(openai_api_key: str) -> Option:
    """
    OpenAI key used to embed when no embedder is given. Without this option the
    key is read from OPENAI_API_KEY.
    """
    return lambda o: replace(o, openai_api_key=openai_api_key)


def default_options(getenv: Getenv = os.getenv) -> ChromaOptions:
    return ChromaOptions(openai_api_key=getenv(OPENAI_API_KEY_ENV_VAR_NAME) or "")


def apply_client_options(*options: Option, getenv: Getenv = os.getenv) -> ChromaOptions:
    """
    Resolve options into a validated ChromaOptions.

    Raises:
        InvalidOptionsError: no URL after the environment fallback, or neither
                             an embedder nor an OpenAI key.
    """
    resolved = reduce(lambda o, option: option(o), options, default_options(getenv))

    if not resolved.chroma_url:
        chroma_url = getenv(CHROMA_URL_ENV_VAR_NAME) or ""
        if not chroma_url:
            raise InvalidOptionsError(
                "missing chroma URL. Pass it as an option or set the "
                f"{CHROMA_URL_ENV_VAR_NAME} environment variable"
            )
        logger.debug("[chroma] URL taken from %s", CHROMA_URL_ENV_VAR_NAME)
        resolved = replace(resolved, chroma_url=chroma_url)

    if not resolved.openai_api_key and resolved.embedder is None:
        raise InvalidOptionsError("missing embedder or openai api key")

    return resolved
