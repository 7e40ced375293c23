"""
Pydantic models for validator configuration.

Configuration values are immutable once resolved; the resolver in
mcp_validator.core.config builds new instances instead of mutating.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .validation import IssueSeverity


# Raw per-rule setting as written in config files: true, false or a severity
RuleConfigValue = bool | IssueSeverity


class OutputFormat(str, Enum):
    """Supported report formats."""
    HUMAN = "human"
    JSON = "json"
    SARIF = "sarif"
    MARKDOWN = "markdown"


class LLMProvider(str, Enum):
    """OpenAI-compatible endpoints the analyzer can talk to."""
    OPENROUTER = "openrouter"
    OPENAI = "openai"
    OLLAMA = "ollama"


class _FrozenModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="forbid",
    )


class OutputConfig(_FrozenModel):
    """Report rendering options."""
    format: OutputFormat = OutputFormat.HUMAN
    verbose: bool = False
    color: bool = True


class LLMConfig(_FrozenModel):
    """Optional LLM-assisted analysis settings."""
    enabled: bool = False
    provider: LLMProvider = LLMProvider.OPENROUTER
    model: str | None = None
    api_key: str | None = None
    base_url: str | None = None
    timeout: int = 30000  # milliseconds


class ValidatorConfig(_FrozenModel):
    """
    Fully resolved validator configuration.

    `rules` maps rule ids to True, False or a severity override. A rule id
    that is absent behaves as True. `llm` is None unless the user supplied it.
    """
    rules: dict[str, RuleConfigValue] = Field(default_factory=dict)
    output: OutputConfig = Field(default_factory=OutputConfig)
    llm: LLMConfig | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize with public camelCase keys, hiding the API key."""
        data = self.model_dump(mode="json", by_alias=True, exclude_none=True)
        if data.get("llm", {}).get("apiKey"):
            data["llm"]["apiKey"] = "***"
        return data
