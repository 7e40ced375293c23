"""
Validation orchestrator.

Coordinates config resolution, rule selection, rule execution, result
aggregation and the optional LLM analysis pass.
"""

import logging
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable, Mapping

from mcp_validator.schema import (
    IssueSeverity,
    LLMAnalysisResult,
    RuleConfigValue,
    SourceType,
    ToolDefinition,
    ToolSource,
    ValidationMetadata,
    ValidationResult,
    ValidatorConfig,
)
from .config import default_config, load_config, resolve_config
from .engine import aggregate, execute_rules, flatten_issues
from .registry import RuleRegistry, get_registry


logger = logging.getLogger(__name__)

VALIDATOR_VERSION = "0.1.0"
MCP_SPEC_VERSION = "2025-11-25"

ToolInput = ToolDefinition | Mapping[str, Any]


def coerce_tool(tool: ToolInput) -> ToolDefinition:
    """Accept a ToolDefinition or a raw tool mapping."""
    if isinstance(tool, ToolDefinition):
        return tool
    data = dict(tool)
    data.setdefault("source", ToolSource(type=SourceType.INLINE, raw=dict(tool)))
    return ToolDefinition.model_validate(data)


def build_config(
    config: ValidatorConfig | Mapping[str, Any] | None = None,
    config_path: str | Path | None = None,
    overrides: Mapping[str, RuleConfigValue] | None = None,
) -> ValidatorConfig:
    """
    Resolve the config for one validation run.

    Layers, lowest first: defaults or the file at config_path, then
    `config`, then per-rule `overrides`.
    """
    if config_path is not None:
        resolved = load_config(config_path).config
    else:
        resolved = default_config()

    if isinstance(config, ValidatorConfig):
        resolved = resolve_config(resolved, config.model_dump(exclude_unset=True))
    elif config:
        resolved = resolve_config(resolved, config)

    if overrides:
        resolved = resolve_config(resolved, {"rules": dict(overrides)})

    return resolved


def _run_llm_analysis(tools: list[ToolDefinition], config: ValidatorConfig) -> dict[str, LLMAnalysisResult] | None:
    if config.llm is None or not config.llm.enabled:
        return None

    from mcp_validator.analysis import analyze_tools

    try:
        return analyze_tools(tools, config.llm)
    except Exception as e:
        logger.warning("LLM analysis failed, continuing without it: %s", e)
        return None


def validate(
    tools: Iterable[ToolInput],
    config: ValidatorConfig | Mapping[str, Any] | None = None,
    *,
    config_path: str | Path | None = None,
    overrides: Mapping[str, RuleConfigValue] | None = None,
    registry: RuleRegistry | None = None,
) -> ValidationResult:
    """
    Validate tool definitions.

    Args:
        tools: Tool definitions, as models or raw mappings
        config: Config values layered over the defaults
        config_path: Config file to start from instead of the defaults
        overrides: Per-rule settings applied last
        registry: Rule registry to use (defaults to the process-wide one)

    Returns:
        ValidationResult with issues, per-tool results, summary and metadata
    """
    started = time.perf_counter()

    resolved = build_config(config, config_path, overrides)
    registry = registry or get_registry()
    tool_list = [coerce_tool(tool) for tool in tools]

    rules = registry.rules_for(resolved.rules)
    logger.debug("Running %d rules against %d tools", len(rules), len(tool_list))

    raw_results = execute_rules(tool_list, rules, resolved.rules)
    tool_results, summary = aggregate(raw_results)

    llm_analysis = _run_llm_analysis(tool_list, resolved)

    metadata = ValidationMetadata(
        validator_version=VALIDATOR_VERSION,
        mcp_spec_version=MCP_SPEC_VERSION,
        timestamp=datetime.now(timezone.utc),
        duration=(time.perf_counter() - started) * 1000,
        config_used=str(config_path) if config_path is not None else "",
        llm_analysis_used=llm_analysis is not None,
    )

    return ValidationResult(
        valid=summary.issues_by_severity[IssueSeverity.ERROR] == 0,
        summary=summary,
        issues=flatten_issues(raw_results),
        tools=tool_results,
        metadata=metadata,
        llm_analysis=llm_analysis,
    )


def validate_file(path: str | Path, **kwargs: Any) -> ValidationResult:
    """Parse a JSON or YAML tool file and validate its tools."""
    from mcp_validator.ingestion import parse_file

    return validate(parse_file(path), **kwargs)


def validate_server(server: str, timeout: float | None = None, **kwargs: Any) -> ValidationResult:
    """Fetch tools from a live MCP server and validate them."""
    from mcp_validator.ingestion import fetch_tools_from_server
    from mcp_validator.utils.config import get_settings

    timeout = timeout if timeout is not None else get_settings().server_timeout_seconds
    return validate(fetch_tools_from_server(server, timeout), **kwargs)
