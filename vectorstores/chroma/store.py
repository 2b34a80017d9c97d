"""Chroma store wrapper built from validated ChromaOptions."""
import logging
import os
from typing import Any

from langchain_core.embeddings import Embeddings

from .options import ChromaOptions, Getenv, Option, apply_client_options

logger = logging.getLogger(__name__)


class Store:
    """
    Holds a resolved Chroma configuration and derives what a Chroma client
    needs from it: the embedder, collection metadata, namespace filters and
    query payloads.

    Raises InvalidOptionsError on construction when the options are incomplete.
    """

    def __init__(self, *options: Option, getenv: Getenv = os.getenv):
        self.options: ChromaOptions = apply_client_options(*options, getenv=getenv)
        self._embedder: Embeddings | None = self.options.embedder
        logger.info(
            "[chroma] Store ready: url=%s namespace=%s distance=%s",
            self.options.chroma_url, self.options.namespace,
            self.options.distance_function.value,
        )

    @property
    def embedder(self) -> Embeddings:
        """The configured embedder, else OpenAI embeddings built from the API key."""
        if self._embedder is None:
            from langchain_openai import OpenAIEmbeddings
            self._embedder = OpenAIEmbeddings(api_key=self.options.openai_api_key)
        return self._embedder

    def collection_metadata(self) -> dict[str, Any]:
        return {"hnsw:space": self.options.distance_function.value}

    def namespace_filter(self, namespace: str | None = None) -> dict[str, str]:
        """Where-clause selecting one namespace; defaults to the configured one."""
        return {self.options.namespace_key: namespace or self.options.namespace}

    def build_query(self, query: str, k: int = 4, namespace: str | None = None) -> dict[str, Any]:
        """Body of a collection query for the k nearest neighbours of query."""
        if not query:
            raise ValueError("query must not be empty")
        if k <= 0:
            raise ValueError("k must be a positive integer")

        payload: dict[str, Any] = {
            "query_embeddings": [self.embedder.embed_query(query)],
            "n_results": k,
            "where": self.namespace_filter(namespace),
        }
        if self.options.includes:
            payload["include"] = [include.value for include in self.options.includes]
        return payload
