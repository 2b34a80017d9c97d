"""
Tests for vectorstores/chroma
==============================
The environment is injected through make_getenv, so nothing here reads or
writes os.environ.

Covers:
  - apply_client_options: defaults, URL fallback, missing URL, embedder-or-key rule
  - option constructors: overrides, enum coercion, last write wins
  - Store: collection metadata, namespace filter, query payload, embedder fallback
"""
from unittest.mock import patch

import pytest

from vectorstores.chroma import (
    DEFAULT_NAMESPACE,
    DEFAULT_NAMESPACE_KEY,
    DistanceFunction,
    QueryInclude,
    Store,
    apply_client_options,
    with_chroma_url,
    with_distance_function,
    with_embedder,
    with_includes,
    with_namespace,
    with_openai_api_key,
)
from vectorstores.errors import InvalidOptionsError, VectorStoreError


# ---------------------------------------------------------------------------
# apply_client_options
# ---------------------------------------------------------------------------

class TestApplyClientOptions:
    def test_defaults_with_env(self, make_getenv):
        opts = apply_client_options(getenv=make_getenv(CHROMA_URL="http://h:8000", OPENAI_API_KEY="k"))

        assert opts.chroma_url == "http://h:8000"
        assert opts.openai_api_key == "k"
        assert opts.namespace == DEFAULT_NAMESPACE == "langchain"
        assert opts.namespace_key == DEFAULT_NAMESPACE_KEY == "nameSpace"
        assert opts.distance_function is DistanceFunction.L2
        assert opts.includes == ()
        assert opts.embedder is None

    def test_missing_url_everywhere_fails(self, make_getenv):
        with pytest.raises(InvalidOptionsError, match="missing chroma URL"):
            apply_client_options(with_openai_api_key("k"), getenv=make_getenv())

    def test_empty_env_url_counts_as_missing(self, make_getenv):
        with pytest.raises(InvalidOptionsError):
            apply_client_options(getenv=make_getenv(CHROMA_URL="", OPENAI_API_KEY="k"))

    def test_option_url_beats_env(self, make_getenv):
        opts = apply_client_options(
            with_chroma_url("http://option"),
            getenv=make_getenv(CHROMA_URL="http://env", OPENAI_API_KEY="k"),
        )
        assert opts.chroma_url == "http://option"

    def test_no_embedder_and_no_key_fails(self, make_getenv):
        with pytest.raises(InvalidOptionsError, match="missing embedder or openai api key"):
            apply_client_options(with_chroma_url("http://h"), getenv=make_getenv())

    def test_embedder_alone_is_enough(self, make_getenv, embedder):
        opts = apply_client_options(with_chroma_url("http://h"), with_embedder(embedder), getenv=make_getenv())
        assert opts.embedder is embedder
        assert opts.openai_api_key == ""

    def test_env_key_with_url_option_succeeds(self, make_getenv):
        opts = apply_client_options(
            with_chroma_url("http://h"), getenv=make_getenv(OPENAI_API_KEY="from-env"),
        )
        assert opts.openai_api_key == "from-env"
        assert opts.embedder is None

    def test_key_option_alone_is_enough(self, make_getenv):
        opts = apply_client_options(
            with_chroma_url("http://h"), with_openai_api_key("k"), getenv=make_getenv(),
        )
        assert opts.openai_api_key == "k"

    def test_key_option_overrides_env_key(self, make_getenv):
        opts = apply_client_options(
            with_chroma_url("http://h"), with_openai_api_key("mine"),
            getenv=make_getenv(OPENAI_API_KEY="env"),
        )
        assert opts.openai_api_key == "mine"

    def test_invalid_options_error_is_a_value_error(self, make_getenv):
        with pytest.raises(ValueError) as exc_info:
            apply_client_options(getenv=make_getenv())
        assert isinstance(exc_info.value, VectorStoreError)
        assert str(exc_info.value).startswith("invalid options")


# ---------------------------------------------------------------------------
# Option constructors
# ---------------------------------------------------------------------------

class TestOptionConstructors:
    def _resolve(self, make_getenv, *options):
        return apply_client_options(
            with_chroma_url("http://h"), with_openai_api_key("k"), *options, getenv=make_getenv(),
        )

    def test_namespace_override(self, make_getenv):
        assert self._resolve(make_getenv, with_namespace("docs")).namespace == "docs"

    def test_last_namespace_wins(self, make_getenv):
        opts = self._resolve(make_getenv, with_namespace("a"), with_namespace("b"))
        assert opts.namespace == "b"

    def test_distance_function_accepts_strings(self, make_getenv):
        opts = self._resolve(make_getenv, with_distance_function("cosine"))
        assert opts.distance_function is DistanceFunction.COSINE

    def test_unknown_distance_function_is_rejected(self):
        with pytest.raises(ValueError):
            with_distance_function("manhattan")

    def test_includes_are_coerced_to_enum(self, make_getenv):
        opts = self._resolve(make_getenv, with_includes(["documents", QueryInclude.DISTANCES]))
        assert opts.includes == (QueryInclude.DOCUMENTS, QueryInclude.DISTANCES)

    def test_unknown_include_is_rejected(self):
        with pytest.raises(ValueError):
            with_includes(["uris_and_more"])


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------

class TestStore:
    def _store(self, make_getenv, embedder, *options):
        return Store(
            with_chroma_url("http://h"), with_embedder(embedder), *options,
            getenv=make_getenv(),
        )

    def test_construction_validates(self, make_getenv):
        with pytest.raises(InvalidOptionsError):
            Store(getenv=make_getenv())

    def test_collection_metadata_carries_distance(self, make_getenv, embedder):
        store = self._store(make_getenv, embedder, with_distance_function(DistanceFunction.IP))
        assert store.collection_metadata() == {"hnsw:space": "ip"}

    def test_namespace_filter(self, make_getenv, embedder):
        store = self._store(make_getenv, embedder, with_namespace("docs"))
        assert store.namespace_filter() == {"nameSpace": "docs"}
        assert store.namespace_filter("other") == {"nameSpace": "other"}

    def test_build_query(self, make_getenv, embedder):
        store = self._store(make_getenv, embedder, with_includes(["documents", "distances"]))

        payload = store.build_query("what is chroma?", k=2)

        assert len(payload["query_embeddings"]) == 1
        assert len(payload["query_embeddings"][0]) == 4
        assert payload["query_embeddings"] == [embedder.embed_query("what is chroma?")]
        assert payload["n_results"] == 2
        assert payload["where"] == {"nameSpace": "langchain"}
        assert payload["include"] == ["documents", "distances"]

    def test_build_query_without_includes_omits_field(self, make_getenv, embedder):
        assert "include" not in self._store(make_getenv, embedder).build_query("q")

    @pytest.mark.parametrize("query, k", [("", 4), ("q", 0), ("q", -2)])
    def test_build_query_rejects_bad_arguments(self, make_getenv, embedder, query, k):
        with pytest.raises(ValueError):
            self._store(make_getenv, embedder).build_query(query, k=k)

    def test_embedder_falls_back_to_openai(self, make_getenv):
        store = Store(getenv=make_getenv(CHROMA_URL="http://h", OPENAI_API_KEY="sk"))

        with patch("langchain_openai.OpenAIEmbeddings") as openai_embeddings:
            embedder = store.embedder
            assert store.embedder is embedder

        openai_embeddings.assert_called_once_with(api_key="sk")
        assert embedder is openai_embeddings.return_value
