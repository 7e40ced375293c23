"""
Prompts for LLM-assisted tool analysis.

Contains the evaluation prompt and helpers to format a tool into it and to
read the model's JSON answer back.
"""

import json
import re
from typing import Any

from mcp_validator.errors import LLMAnalysisError
from mcp_validator.schema import LLMAnalysisResult, ToolDefinition


SYSTEM_PROMPT = """You are an expert reviewer of MCP tool definitions.
You judge whether an AI agent reading a tool's name, description and parameters
would know when to call it and how to call it correctly.
Always answer with a single JSON object and nothing else."""

ANALYSIS_PROMPT = """You are evaluating MCP tool definitions for LLM compatibility.

Tool Definition:
- Name: {name}
- Description: {description}
- Parameters:
{parameters}

Evaluate this tool definition and respond with JSON only (no markdown):
{{
  "clarity_score": <1-10>,
  "completeness_score": <1-10>,
  "ambiguities": ["list of vague phrases"],
  "conflicts": ["list of description/schema mismatches"],
  "suggestions": ["list of specific improvements"]
}}

Consider:
- Would an AI understand when to call this tool?
- Are there edge cases not addressed?
- Could the description lead to incorrect usage?"""

DEFAULT_SCORE = 5

_JSON_OBJECT = re.compile(r"\{.*\}", re.DOTALL)


def format_parameters(input_schema: Any) -> str:
    """Render inputSchema properties as one bullet per parameter."""
    if not isinstance(input_schema, dict):
        return "No parameters"

    properties = input_schema.get("properties")
    if not isinstance(properties, dict) or not properties:
        return "No parameters"

    required = input_schema.get("required")
    required = set(required) if isinstance(required, list) else set()

    lines = []
    for name, schema in properties.items():
        schema = schema if isinstance(schema, dict) else {}
        marker = " (required)" if name in required else ""
        lines.append(
            f"- {name}{marker}: {schema.get('type') or 'any'} - {schema.get('description') or 'no description'}"
        )
    return "\n".join(lines)


def get_analysis_prompt(tool: ToolDefinition) -> str:
    """Build the evaluation prompt for a tool."""
    return ANALYSIS_PROMPT.format(
        name=tool.name,
        description=tool.description or "",
        parameters=format_parameters(tool.input_schema),
    )


def _clamp_score(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not value:
        return DEFAULT_SCORE
    return min(10, max(1, round(value)))


def _string_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(item) for item in value]


def parse_analysis_response(text: str) -> LLMAnalysisResult:
    """
    Extract and normalize the JSON answer from a model response.

    The answer may be wrapped in prose or a markdown code fence. Scores are
    clamped to 1-10; missing lists become empty.

    Raises:
        LLMAnalysisError: if no JSON object can be read from the response.
    """
    match = _JSON_OBJECT.search(text)
    if not match:
        raise LLMAnalysisError("Failed to parse LLM response: no JSON found in response")

    try:
        data = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        raise LLMAnalysisError(f"Failed to parse LLM response: {e}") from e

    if not isinstance(data, dict):
        raise LLMAnalysisError("Failed to parse LLM response: expected a JSON object")

    return LLMAnalysisResult(
        clarity_score=_clamp_score(data.get("clarity_score")),
        completeness_score=_clamp_score(data.get("completeness_score")),
        ambiguities=_string_list(data.get("ambiguities")),
        conflicts=_string_list(data.get("conflicts")),
        suggestions=_string_list(data.get("suggestions")),
    )
