"""
Process settings for the MCP tool validator.

Handles environment variables, API keys and defaults that are not part of
a validation config file (log level, LLM credentials, default model).
"""

import os
from dataclasses import dataclass
from typing import Any

from dotenv import load_dotenv


@dataclass
class Settings:
    """Process-wide settings."""

    # OpenRouter settings
    openrouter_api_key: str = ""
    openrouter_base_url: str = "https://openrouter.ai/api/v1"

    # OpenAI settings
    openai_api_key: str = ""
    openai_base_url: str = "https://api.openai.com/v1"

    # Ollama serves an OpenAI-compatible API locally
    ollama_base_url: str = "http://localhost:11434/v1"

    # Model settings
    default_model: str = "meta-llama/llama-3.1-8b-instruct"
    max_tokens: int = 1000
    temperature: float = 0.1

    # Server discovery
    server_timeout_seconds: float = 30.0

    # Logging
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "Settings":
        """Create settings from environment variables (and a .env file)."""
        load_dotenv()

        return cls(
            openrouter_api_key=os.getenv("OPENROUTER_API_KEY", ""),
            openai_api_key=os.getenv("OPENAI_API_KEY", ""),
            ollama_base_url=os.getenv("OLLAMA_BASE_URL", "http://localhost:11434/v1"),
            default_model=os.getenv("MCP_VALIDATE_MODEL", "meta-llama/llama-3.1-8b-instruct"),
            server_timeout_seconds=float(os.getenv("MCP_VALIDATE_SERVER_TIMEOUT", "30")),
            log_level=os.getenv("LOG_LEVEL", "WARNING"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert settings to dictionary (hiding sensitive values)."""
        return {
            "openrouter_base_url": self.openrouter_base_url,
            "openai_base_url": self.openai_base_url,
            "ollama_base_url": self.ollama_base_url,
            "default_model": self.default_model,
            "max_tokens": self.max_tokens,
            "server_timeout_seconds": self.server_timeout_seconds,
            "log_level": self.log_level,
            "has_openrouter_key": bool(self.openrouter_api_key),
            "has_openai_key": bool(self.openai_api_key),
        }


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def set_settings(settings: Settings | None) -> None:
    """Set the global settings instance (None resets to environment defaults)."""
    global _settings
    _settings = settings
