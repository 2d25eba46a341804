"""
LLM Service Module

This module provides a unified interface for building OpenAI and Groq chat
models. Supports switching between providers via LLM_PROVIDER.
"""

import logging
from typing import Optional

from langchain_core.language_models import BaseChatModel
from langchain_groq import ChatGroq
from langchain_openai import ChatOpenAI

from table_explorer.config.settings import DEFAULT_MODELS, settings

logger = logging.getLogger("table_explorer")


class LLMService:
    """
    Service class for Large Language Model interactions.
    Supports both OpenAI and Groq providers.
    """

    def __init__(self, provider: Optional[str] = None):
        """Initialize the LLM service."""
        self.provider = (provider or settings.llm_provider).upper()
        logger.info(f"LLM Provider: {self.provider}")

    def get_provider(self) -> str:
        """
        Get the active LLM provider.

        Returns:
            str: 'OPENAI' or 'GROQ' (default: 'OPENAI')
        """
        return self.provider

    def get_llm_model(
        self,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        model: Optional[str] = None
    ) -> BaseChatModel:
        """
        Get LLM instance based on the provider.

        Args:
            temperature (float): Sampling temperature. Default: LLM_TEMPERATURE
            max_tokens (int): Maximum output tokens. Default: LLM_MAX_TOKENS
            model (str): Model name. If None, uses LLM_MODEL or the provider default.

        Returns:
            BaseChatModel: Configured LLM instance (OpenAI or Groq)

        Raises:
            ValueError: If the provider is not 'OPENAI' or 'GROQ' or its key is missing
        """
        provider = self.get_provider()
        temperature = settings.LLM_TEMPERATURE if temperature is None else temperature
        max_tokens = settings.LLM_MAX_TOKENS if max_tokens is None else max_tokens

        if provider == 'OPENAI':
            return self.openai_llm_model(
                temperature=temperature,
                max_tokens=max_tokens,
                model=model or self._configured_model(provider)
            )
        elif provider == 'GROQ':
            return self.groq_llm_model(
                temperature=temperature,
                max_tokens=max_tokens,
                model=model or self._configured_model(provider)
            )
        else:
            raise ValueError(
                f"Invalid LLM_PROVIDER: {provider}. "
                "Must be 'OPENAI' or 'GROQ'"
            )

    def _configured_model(self, provider: str) -> str:
        # LLM_MODEL was resolved against the settings provider, which may differ
        if provider == settings.llm_provider and settings.LLM_MODEL:
            return settings.LLM_MODEL
        return DEFAULT_MODELS[provider]

    def openai_llm_model(self, temperature=0.7, max_tokens=500, model="gpt-3.5-turbo"):
        """
        Create an OpenAI chat model.

        Returns:
            ChatOpenAI: Configured OpenAI LLM instance
        """
        api_key = settings.openai_api_key
        if not api_key:
            raise ValueError(
                "OpenAI API key not found. "
                "Set API_KEY or OPENAI_API_KEY environment variable."
            )

        return ChatOpenAI(
            api_key=api_key,
            model=model,
            temperature=temperature,
            max_tokens=max_tokens,
            max_retries=0,
        )

    def groq_llm_model(self, temperature=0.7, max_tokens=500, model="llama-3.3-70b-versatile"):
        """
        Create a Groq chat model.

        Returns:
            ChatGroq: Configured Groq LLM instance
        """
        api_key = settings.groq_api_key
        if not api_key:
            raise ValueError(
                "Groq API key not found. "
                "Set GROQ_API_KEY environment variable."
            )

        return ChatGroq(
            api_key=api_key,
            model=model,
            temperature=temperature,
            max_tokens=max_tokens,
            max_retries=0,
        )
