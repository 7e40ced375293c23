"""
Validator configuration: defaults, resolution, CLI overrides, file discovery.

Resolution never reads global state: the default table is passed in
explicitly and a new immutable ValidatorConfig is returned.
"""

import json
import logging
import tomllib
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterable, Mapping

import yaml
from pydantic import ValidationError

from mcp_validator.errors import ConfigError
from mcp_validator.schema import IssueSeverity, RuleConfigValue, ValidatorConfig


logger = logging.getLogger(__name__)

DEFAULT_RULE_IDS = (
    "SCH-001", "SCH-002", "SCH-003", "SCH-004", "SCH-005", "SCH-006", "SCH-007", "SCH-008",
    "NAM-001", "NAM-002", "NAM-003", "NAM-004", "NAM-005", "NAM-006",
    "SEC-001", "SEC-002", "SEC-003", "SEC-004", "SEC-005",
    "SEC-006", "SEC-007", "SEC-008", "SEC-009", "SEC-010",
    "LLM-001", "LLM-002", "LLM-003", "LLM-004", "LLM-005", "LLM-006", "LLM-007",
    "LLM-008", "LLM-009", "LLM-010", "LLM-011", "LLM-012", "LLM-013",
    "BP-001", "BP-002", "BP-003", "BP-004", "BP-005", "BP-006", "BP-007", "BP-008", "BP-009",
)

DEFAULT_RULES: Mapping[str, RuleConfigValue] = MappingProxyType({rule_id: True for rule_id in DEFAULT_RULE_IDS})

DEFAULT_OUTPUT: Mapping[str, Any] = MappingProxyType({"format": "human", "verbose": False, "color": True})

CONFIG_SEARCH_PLACES = (
    "mcp-validate.config.yaml",
    "mcp-validate.config.yml",
    "mcp-validate.config.json",
    ".mcp-validaterc",
    ".mcp-validaterc.yaml",
    ".mcp-validaterc.yml",
    ".mcp-validaterc.json",
    "pyproject.toml",
)

PYPROJECT_SECTION = "mcp-validate"

_KNOWN_SECTIONS = frozenset({"rules", "output", "llm"})

_OVERRIDE_VALUES: Mapping[str, RuleConfigValue] = MappingProxyType({
    "off": False,
    "false": False,
    "on": True,
    "true": True,
    "error": IssueSeverity.ERROR,
    "warning": IssueSeverity.WARNING,
    "suggestion": IssueSeverity.SUGGESTION,
})


@dataclass(frozen=True)
class LoadedConfig:
    """A resolved config and the file it came from (None for defaults)."""
    config: ValidatorConfig
    filepath: str | None = None


def default_config() -> ValidatorConfig:
    """Build a fresh config from the default rule and output tables."""
    return ValidatorConfig.model_validate({"rules": dict(DEFAULT_RULES), "output": dict(DEFAULT_OUTPUT)})


def resolve_config(
    defaults: ValidatorConfig,
    overrides: Mapping[str, Any] | None = None,
) -> ValidatorConfig:
    """
    Merge user overrides onto defaults.

    rules and output are shallow-merged key by key; llm is taken from the
    overrides only and never defaulted in.

    Raises:
        ConfigError: if the merged values are invalid.
    """
    if not overrides:
        return defaults

    unknown = set(overrides) - _KNOWN_SECTIONS
    if unknown:
        logger.warning("Ignoring unknown config section(s): %s", ", ".join(sorted(unknown)))

    rules = dict(defaults.rules)
    rules.update(_section(overrides, "rules"))

    output = defaults.output.model_dump()
    output.update(_section(overrides, "output"))

    merged: dict[str, Any] = {"rules": rules, "output": output}
    if overrides.get("llm") is not None:
        merged["llm"] = _section(overrides, "llm")

    try:
        return ValidatorConfig.model_validate(merged)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e


def _section(overrides: Mapping[str, Any], key: str) -> dict[str, Any]:
    value = overrides.get(key)
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigError(f'Config section "{key}" must be a mapping')
    return dict(value)


def parse_rule_overrides(tokens: Iterable[str]) -> dict[str, RuleConfigValue]:
    """
    Parse CLI rule tokens of the form RULE-ID=value.

    Values are case-insensitive: off/false disable, on/true enable, and
    error/warning/suggestion override severity. Anything else, including
    tokens without "=" or with an empty id or value, is dropped.
    """
    overrides: dict[str, RuleConfigValue] = {}
    for token in tokens:
        rule_id, separator, value = token.partition("=")
        rule_id = rule_id.strip()
        value = value.strip().lower()
        if not separator or not rule_id or value not in _OVERRIDE_VALUES:
            continue
        overrides[rule_id] = _OVERRIDE_VALUES[value]
    return overrides


def _read_config_file(path: Path) -> dict[str, Any] | None:
    """
    Parse a config file into a mapping.

    Returns None when a pyproject.toml has no [tool.mcp-validate] table.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read config file: {e}", path) from e

    try:
        if path.suffix == ".json":
            data = json.loads(text)
        elif path.suffix == ".toml":
            document = tomllib.loads(text)
            if path.name == "pyproject.toml":
                tool_table = document.get("tool", {})
                if not isinstance(tool_table, dict):
                    raise ConfigError(f"Config file {path} has a non-table [tool] entry", path)
                data = tool_table.get(PYPROJECT_SECTION)
                if data is None:
                    return None
            else:
                data = document
        else:
            # YAML is a superset of JSON, so extensionless rc files accept both
            data = yaml.safe_load(text)
    except (json.JSONDecodeError, tomllib.TOMLDecodeError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot parse config file {path}: {e}", path) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping", path)
    return data


def load_config(
    config_path: str | Path | None = None,
    search_dir: str | Path | None = None,
) -> LoadedConfig:
    """
    Load configuration from an explicit path or by searching a directory.

    An explicit path must exist and parse, otherwise ConfigError is raised.
    Implicit search falls back to defaults when nothing is found or the
    file found cannot be used.
    """
    defaults = default_config()

    if config_path is not None:
        path = Path(config_path)
        if not path.is_file():
            raise ConfigError(f"Config file not found: {path}", path)
        data = _read_config_file(path) or {}
        logger.debug("Loaded config from %s", path)
        return LoadedConfig(resolve_config(defaults, data), str(path))

    directory = Path(search_dir) if search_dir is not None else Path.cwd()
    for name in CONFIG_SEARCH_PLACES:
        candidate = directory / name
        if not candidate.is_file():
            continue
        try:
            data = _read_config_file(candidate)
            if data is None:
                continue
            config = resolve_config(defaults, data)
        except ConfigError as e:
            logger.debug("Ignoring unusable config %s: %s", candidate, e)
            return LoadedConfig(defaults)
        logger.debug("Discovered config at %s", candidate)
        return LoadedConfig(config, str(candidate))

    logger.debug("No config file found in %s; using defaults", directory)
    return LoadedConfig(defaults)
