"""LLM provider factory - supports OpenAI, Anthropic, Groq, Ollama."""

from __future__ import annotations

import logging

from crew_coach.config import CrewCoachConfig

logger = logging.getLogger(__name__)


def _is_ollama_available(base_url: str = "http://localhost:11434") -> bool:
    try:
        import urllib.request
        urllib.request.urlopen(f"{base_url}/api/tags", timeout=2)
        return True
    except Exception:
        return False


def create_llm(config: CrewCoachConfig):
    """Create a chat model for the configured provider.

    Clients are built with ``max_retries=0``: a failed agent call is absorbed
    by the crew's fallback path, never retried.
    """
    provider = config.llm.provider.lower()
    model = config.llm.model
    temperature = config.llm.temperature
    max_tokens = config.llm.max_tokens
    timeout = config.llm.timeout_seconds

    if provider == "openai":
        from langchain_openai import ChatOpenAI
        if not config.llm.is_configured:
            raise ValueError("OPENAI_API_KEY not set")
        logger.info(f"Using OpenAI: {model}")
        return ChatOpenAI(
            model=model,
            api_key=config.llm.api_key,
            base_url=config.llm.base_url,
            temperature=temperature,
            max_tokens=max_tokens,
            presence_penalty=0.1,
            frequency_penalty=0.1,
            timeout=timeout,
            max_retries=0,
        )

    elif provider == "anthropic":
        from langchain_anthropic import ChatAnthropic
        if not config.llm.is_configured:
            raise ValueError("ANTHROPIC_API_KEY not set")
        logger.info(f"Using Anthropic: {model}")
        return ChatAnthropic(
            model=model,
            api_key=config.llm.api_key,
            temperature=temperature,
            max_tokens=max_tokens,
            timeout=timeout,
            max_retries=0,
        )

    elif provider == "groq":
        from langchain_groq import ChatGroq
        if not config.llm.is_configured:
            raise ValueError("GROQ_API_KEY not set")
        logger.info(f"Using Groq: {model}")
        return ChatGroq(
            model=model,
            api_key=config.llm.api_key,
            temperature=temperature,
            max_tokens=max_tokens,
            timeout=timeout,
            max_retries=0,
        )

    elif provider == "ollama":
        from langchain_ollama import ChatOllama
        base_url = config.llm.base_url or "http://localhost:11434"
        if not _is_ollama_available(base_url):
            raise ConnectionError(f"Ollama not available at {base_url}")
        logger.info(f"Using Ollama: {model}")
        return ChatOllama(
            model=model,
            base_url=base_url,
            temperature=temperature,
            num_predict=max_tokens,
            client_kwargs={"timeout": timeout},
        )

    else:
        raise ValueError(f"Unknown LLM provider: {provider}")
