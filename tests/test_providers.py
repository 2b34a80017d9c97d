"""
Tests for agent/providers.py
=============================
Covers:
  - detect_provider: forced provider, key-based detection, fallback
  - load_provider_settings: model / key / azure endpoint resolution
  - build_llm: the right LangChain chat model class is constructed
"""
from unittest.mock import patch

import pytest

from agent.providers import (
    DEFAULT_AZURE_API_VERSION,
    ProviderSettings,
    build_llm,
    detect_provider,
    load_provider_settings,
)


# ---------------------------------------------------------------------------
# detect_provider
# ---------------------------------------------------------------------------

class TestDetectProvider:
    def test_forced_provider_wins_over_keys(self, make_getenv):
        getenv = make_getenv(LLM_PROVIDER="OpenAI", GROQ_API_KEY="gsk")
        assert detect_provider(getenv) == "openai"

    def test_unknown_forced_provider_is_ignored(self, make_getenv):
        assert detect_provider(make_getenv(LLM_PROVIDER="bedrock", GROQ_API_KEY="gsk")) == "groq"

    def test_groq_key_takes_priority_over_azure(self, make_getenv):
        getenv = make_getenv(GROQ_API_KEY="gsk", AZURE_OPENAI_API_KEY="az")
        assert detect_provider(getenv) == "groq"

    def test_azure_key_detected(self, make_getenv):
        assert detect_provider(make_getenv(AZURE_OPENAI_API_KEY="az")) == "azure"

    def test_falls_back_to_openai(self, make_getenv):
        assert detect_provider(make_getenv()) == "openai"


# ---------------------------------------------------------------------------
# load_provider_settings
# ---------------------------------------------------------------------------

class TestLoadProviderSettings:
    def test_openai_defaults(self, make_getenv):
        settings = load_provider_settings(make_getenv(OPENAI_API_KEY="sk"))
        assert settings == ProviderSettings(provider="openai", model="gpt-4o-mini", api_key="sk")

    def test_model_override(self, make_getenv):
        settings = load_provider_settings(make_getenv(GROQ_API_KEY="gsk", GROQ_MODEL="llama-3.1-8b-instant"))
        assert (settings.provider, settings.model) == ("groq", "llama-3.1-8b-instant")

    def test_azure_reads_endpoint_and_version(self, make_getenv):
        settings = load_provider_settings(make_getenv(
            AZURE_OPENAI_API_KEY="az",
            AZURE_OPENAI_ENDPOINT="https://example.openai.azure.com",
            AZURE_OPENAI_DEPLOYMENT="my-deployment",
        ))

        assert settings.endpoint == "https://example.openai.azure.com"
        assert settings.model == "my-deployment"
        assert settings.api_version == DEFAULT_AZURE_API_VERSION

    def test_non_azure_has_no_endpoint(self, make_getenv):
        settings = load_provider_settings(make_getenv(GROQ_API_KEY="gsk", AZURE_OPENAI_ENDPOINT="x"))
        assert settings.endpoint is None


# ---------------------------------------------------------------------------
# build_llm
# ---------------------------------------------------------------------------

class TestBuildLlm:
    def test_openai(self):
        with patch("langchain_openai.ChatOpenAI") as chat_openai:
            llm = build_llm(ProviderSettings(provider="openai", model="gpt-4o-mini", api_key="sk"))

        chat_openai.assert_called_once_with(model="gpt-4o-mini", api_key="sk", temperature=0)
        assert llm is chat_openai.return_value

    def test_groq(self):
        with patch("langchain_groq.ChatGroq") as chat_groq:
            build_llm(ProviderSettings(provider="groq", model="llama", api_key="gsk"))

        chat_groq.assert_called_once_with(model="llama", api_key="gsk", temperature=0)

    def test_azure_omits_temperature(self):
        settings = ProviderSettings(
            provider="azure", model="dep", api_key="az",
            endpoint="https://e", api_version="2024-12-01-preview",
        )
        with patch("langchain_openai.AzureChatOpenAI") as azure:
            build_llm(settings)

        kwargs = azure.call_args.kwargs
        assert kwargs["azure_deployment"] == "dep"
        assert kwargs["azure_endpoint"] == "https://e"
        assert "temperature" not in kwargs

    def test_settings_are_frozen(self):
        settings = ProviderSettings(provider="openai", model="m")
        with pytest.raises(AttributeError):
            settings.model = "other"
