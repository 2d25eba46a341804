"""
Tests for LLM provider selection and settings validation.
"""
import pytest
from langchain_groq import ChatGroq
from langchain_openai import ChatOpenAI

from table_explorer.config.settings import Settings, settings
from table_explorer.services.llm_service import LLMService


class TestLLMService:
    def test_openai_model(self):
        llm = LLMService("OPENAI").get_llm_model()
        assert isinstance(llm, ChatOpenAI)
        assert llm.model_name == settings.LLM_MODEL
        assert llm.temperature == settings.LLM_TEMPERATURE
        assert llm.max_tokens == settings.LLM_MAX_TOKENS

    def test_groq_model(self, monkeypatch):
        monkeypatch.setattr(settings, "GROQ_API_KEY", "gsk-test")
        llm = LLMService("groq").get_llm_model()
        assert isinstance(llm, ChatGroq)
        assert llm.model_name == "llama-3.3-70b-versatile"

    def test_groq_without_key(self, monkeypatch):
        monkeypatch.setattr(settings, "GROQ_API_KEY", None)
        with pytest.raises(ValueError, match="Groq API key"):
            LLMService("GROQ").get_llm_model()

    def test_unknown_provider(self):
        with pytest.raises(ValueError, match="Invalid LLM_PROVIDER"):
            LLMService("OTHER").get_llm_model()


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in ("LLM_MODEL", "PROMPT_MIN_INTERVAL_MS", "LLM_TEMPERATURE", "LLM_MAX_TOKENS"):
            monkeypatch.delenv(name, raising=False)
        s = Settings(_env_file=None)
        assert s.PROMPT_MIN_INTERVAL_MS == 1000
        assert s.prompt_min_interval_seconds == 1.0
        assert s.LLM_TEMPERATURE == 0.7
        assert s.LLM_MAX_TOKENS == 500
        assert s.LLM_MODEL == "gpt-3.5-turbo"

    def test_openai_key_fallback(self, monkeypatch):
        monkeypatch.delenv("API_KEY", raising=False)
        monkeypatch.setenv("OPENAI_API_KEY", "sk-fallback")
        assert Settings(_env_file=None).API_KEY == "sk-fallback"

    def test_provider_normalized_and_validated(self, monkeypatch):
        monkeypatch.setenv("LLM_PROVIDER", "groq")
        monkeypatch.delenv("GROQ_API_KEY", raising=False)
        monkeypatch.delenv("LLM_MODEL", raising=False)
        s = Settings(_env_file=None)
        assert s.LLM_PROVIDER == "GROQ"
        assert s.LLM_MODEL == "llama-3.3-70b-versatile"
        with pytest.raises(ValueError):
            s.validate_llm_config()

    def test_explorer_api_url_strips_slash(self, monkeypatch):
        monkeypatch.setenv("EXPLORER_API_URL", "http://api:4000/")
        assert Settings(_env_file=None).get_explorer_api_url() == "http://api:4000"
