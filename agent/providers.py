"""
LLM Providers
=============
Picks and builds the chat model the demo drives agents with.

Provider auto-detection priority: Groq → Azure OpenAI → OpenAI
Override with LLM_PROVIDER=groq|azure|openai to force a specific provider.

Settings are read through an injected getenv, like the store resolvers, so
tests never touch the real process environment. Agents themselves accept any
LangChain language model; nothing outside the demo needs this module.
"""
import logging
import os
from dataclasses import dataclass, replace
from typing import Callable

logger = logging.getLogger(__name__)

Getenv = Callable[[str], str | None]

PROVIDERS = ("groq", "azure", "openai")

_DEFAULT_MODELS = {
    "groq":   "llama-3.3-70b-versatile",
    "azure":  "gpt-4o",
    "openai": "gpt-4o-mini",
}
_MODEL_ENV = {
    "groq":   "GROQ_MODEL",
    "azure":  "AZURE_OPENAI_DEPLOYMENT",
    "openai": "OPENAI_MODEL",
}
_KEY_ENV = {
    "groq":   "GROQ_API_KEY",
    "azure":  "AZURE_OPENAI_API_KEY",
    "openai": "OPENAI_API_KEY",
}
DEFAULT_AZURE_API_VERSION = "2024-12-01-preview"


@dataclass(frozen=True)
class ProviderSettings:
    provider: str
    model: str
    api_key: str | None = None
    # azure only
    endpoint: str | None = None
    api_version: str | None = None


def detect_provider(getenv: Getenv = os.getenv) -> str:
    """
    Return which LLM provider to use.

    LLM_PROVIDER wins when it names a known provider; otherwise the first
    provider whose API key is set, falling back to openai.
    """
    forced = (getenv("LLM_PROVIDER") or "").lower()
    if forced in PROVIDERS:
        return forced
    if getenv("GROQ_API_KEY"):
        return "groq"
    if getenv("AZURE_OPENAI_API_KEY"):
        return "azure"
    return "openai"


def load_provider_settings(getenv: Getenv = os.getenv) -> ProviderSettings:
    provider = detect_provider(getenv)
    settings = ProviderSettings(
        provider=provider,
        model=getenv(_MODEL_ENV[provider]) or _DEFAULT_MODELS[provider],
        api_key=getenv(_KEY_ENV[provider]),
    )
    if provider == "azure":
        settings = replace(
            settings,
            endpoint=getenv("AZURE_OPENAI_ENDPOINT"),
            api_version=getenv("AZURE_OPENAI_API_VERSION") or DEFAULT_AZURE_API_VERSION,
        )
    return settings


def build_llm(settings: ProviderSettings | None = None):
    """
    Return a LangChain chat model for the given (or detected) provider.

    Groq   → ChatGroq
    Azure  → AzureChatOpenAI (temperature omitted — o-series rejects it)
    OpenAI → ChatOpenAI
    """
    settings = settings or load_provider_settings()
    logger.info("[LLM] Provider: %s model: %s", settings.provider, settings.model)

    if settings.provider == "groq":
        from langchain_groq import ChatGroq
        return ChatGroq(model=settings.model, api_key=settings.api_key, temperature=0)

    if settings.provider == "azure":
        from langchain_openai import AzureChatOpenAI
        return AzureChatOpenAI(
            azure_endpoint=settings.endpoint,
            azure_deployment=settings.model,
            api_version=settings.api_version,
            api_key=settings.api_key,
        )

    from langchain_openai import ChatOpenAI
    return ChatOpenAI(model=settings.model, api_key=settings.api_key, temperature=0)
