"""
Application Settings and Configuration

Centralizes all environment variable loading and configuration.
Uses Pydantic Settings for validation.
"""

from pathlib import Path
from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv


def load_env_file():
    """Load .env file from the project root or the current directory."""
    base_path = Path(__file__).parent.parent.parent
    env_paths = [
        base_path / ".env",
        base_path.parent / ".env",
    ]

    env_path = None
    for path in env_paths:
        if path.exists():
            env_path = path
            print(f"📄 Config: Loaded .env from {env_path}")
            break

    if env_path:
        load_dotenv(dotenv_path=env_path, override=False)
    else:
        load_dotenv(override=False)


# Load environment variables first
load_env_file()


DEFAULT_MODELS = {
    "OPENAI": "gpt-3.5-turbo",
    "GROQ": "llama-3.3-70b-versatile",
}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Table store (DynamoDB) Configuration
    AWS_REGION: str = "us-west-2"
    AWS_PROFILE: Optional[str] = None
    AWS_ACCESS_KEY_ID: Optional[str] = None
    AWS_SECRET_ACCESS_KEY: Optional[str] = None
    AWS_SESSION_TOKEN: Optional[str] = None
    # Point at DynamoDB Local or LocalStack during development
    DYNAMODB_ENDPOINT_URL: Optional[str] = None

    # LLM Configuration
    LLM_PROVIDER: str = "OPENAI"
    API_KEY: Optional[str] = None
    GROQ_API_KEY: Optional[str] = None
    LLM_MODEL: Optional[str] = None
    LLM_TEMPERATURE: float = 0.7
    LLM_MAX_TOKENS: int = 500

    # Prompt augmentation
    PROMPT_MIN_INTERVAL_MS: int = 1000
    PROMPT_CONTEXT_MAX_CHARS: int = 50_000

    # HTTP server
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 4000
    CORS_ORIGINS: List[str] = [
        "http://localhost:8501",
        "http://127.0.0.1:8501",
    ]

    # Streamlit UI -> API base URL
    EXPLORER_API_URL: str = "http://localhost:4000"

    # Logging Configuration
    LOG_LEVEL: str = "INFO"  # DEBUG, INFO, WARNING, ERROR
    LOG_DIR: str = "logs"
    LOG_RETENTION_DAYS: int = 30
    LOG_TO_CONSOLE: bool = True
    LOG_TO_FILE: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore"  # Ignore extra fields from environment
    )

    def model_post_init(self, __context):
        """Post-initialization to handle fallbacks and normalization."""
        import os

        # Handle API_KEY vs OPENAI_API_KEY fallback
        if not self.API_KEY:
            self.API_KEY = os.environ.get("OPENAI_API_KEY")

        # Normalize LLM provider
        if self.LLM_PROVIDER:
            self.LLM_PROVIDER = self.LLM_PROVIDER.upper()

        if not self.LLM_MODEL:
            self.LLM_MODEL = DEFAULT_MODELS.get(self.LLM_PROVIDER)

    @property
    def llm_provider(self) -> str:
        return self.LLM_PROVIDER

    @property
    def openai_api_key(self) -> Optional[str]:
        return self.API_KEY

    @property
    def groq_api_key(self) -> Optional[str]:
        return self.GROQ_API_KEY

    @property
    def prompt_min_interval_seconds(self) -> float:
        return max(self.PROMPT_MIN_INTERVAL_MS, 0) / 1000.0

    def get_explorer_api_url(self) -> str:
        """Base URL the UI uses to reach the API. No trailing slash."""
        return (self.EXPLORER_API_URL or "http://localhost:4000").rstrip("/")

    def validate_llm_config(self):
        """Validate that LLM configuration is correct."""
        if self.LLM_PROVIDER == "OPENAI" and not self.API_KEY:
            raise ValueError(
                "OpenAI API key not found. "
                "Set API_KEY or OPENAI_API_KEY environment variable."
            )
        elif self.LLM_PROVIDER == "GROQ" and not self.GROQ_API_KEY:
            raise ValueError(
                "Groq API key not found. "
                "Set GROQ_API_KEY environment variable."
            )
        elif self.LLM_PROVIDER not in ["OPENAI", "GROQ"]:
            raise ValueError(
                f"Invalid LLM_PROVIDER: {self.LLM_PROVIDER}. "
                "Must be 'OPENAI' or 'GROQ'"
            )


# Global settings instance
settings = Settings()
