"""
LLM-assisted analysis of tool definitions.

Sends each tool to an OpenAI-compatible chat model and reads back clarity
and completeness scores plus lists of ambiguities, conflicts and
suggestions. Off by default; the validator only calls it when the
resolved config has llm.enabled.
"""

import logging
from typing import Iterable

from langchain_core.messages import HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI

from mcp_validator.errors import LLMAnalysisError
from mcp_validator.schema import LLMAnalysisResult, LLMConfig, LLMProvider, ToolDefinition
from mcp_validator.utils.config import Settings, get_settings
from .prompts import SYSTEM_PROMPT, get_analysis_prompt, parse_analysis_response


logger = logging.getLogger(__name__)


class ToolAnalyzer:
    """
    Scores tool definitions with an LLM.

    Tools are analyzed one at a time to stay under provider rate limits.
    """

    def __init__(self, config: LLMConfig, settings: Settings | None = None):
        self.config = config
        self.settings = settings or get_settings()
        self.model_name = config.model or self.settings.default_model
        self.llm = self._create_llm()

    def _base_url(self) -> str:
        if self.config.base_url:
            return self.config.base_url
        return {
            LLMProvider.OPENROUTER: self.settings.openrouter_base_url,
            LLMProvider.OPENAI: self.settings.openai_base_url,
            LLMProvider.OLLAMA: self.settings.ollama_base_url,
        }[self.config.provider]

    def _api_key(self) -> str:
        if self.config.api_key:
            return self.config.api_key
        if self.config.provider == LLMProvider.OPENROUTER:
            key = self.settings.openrouter_api_key
        elif self.config.provider == LLMProvider.OPENAI:
            key = self.settings.openai_api_key
        else:
            # Ollama ignores the key but the client requires one
            return "ollama"
        if not key:
            raise LLMAnalysisError(f"No API key configured for LLM provider {self.config.provider.value}")
        return key

    def _create_llm(self) -> ChatOpenAI:
        """Create the LLM client."""
        return ChatOpenAI(
            model=self.model_name,
            openai_api_key=self._api_key(),
            openai_api_base=self._base_url(),
            max_tokens=self.settings.max_tokens,
            temperature=self.settings.temperature,
            timeout=self.config.timeout / 1000,
        )

    def analyze_tool(self, tool: ToolDefinition) -> LLMAnalysisResult:
        """Analyze a single tool definition."""
        messages = [
            SystemMessage(content=SYSTEM_PROMPT),
            HumanMessage(content=get_analysis_prompt(tool)),
        ]
        try:
            response = self.llm.invoke(messages)
        except Exception as e:
            raise LLMAnalysisError(f"LLM call failed for tool {tool.display_name}: {e}") from e

        content = response.content if isinstance(response.content, str) else str(response.content)
        return parse_analysis_response(content)

    def analyze_tools(self, tools: Iterable[ToolDefinition]) -> dict[str, LLMAnalysisResult]:
        """Analyze tools sequentially, keyed by tool name."""
        results = {}
        for tool in tools:
            logger.debug("Running LLM analysis for %s", tool.display_name)
            results[tool.display_name] = self.analyze_tool(tool)
        return results


def analyze_tools(tools: Iterable[ToolDefinition], config: LLMConfig) -> dict[str, LLMAnalysisResult]:
    """
    Convenience function to run LLM analysis over a tool set.

    Raises:
        LLMAnalysisError: if the client cannot be created, a call fails or a
            response cannot be parsed.
    """
    return ToolAnalyzer(config).analyze_tools(tools)
