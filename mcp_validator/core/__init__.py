"""
Validation core: rule registry, config resolution, execution and aggregation.

Rule category modules are loaded lazily by the registry, so importing this
package does not import any rules.
"""

from .config import (
    DEFAULT_RULES,
    LoadedConfig,
    default_config,
    load_config,
    parse_rule_overrides,
    resolve_config,
)
from .engine import (
    ToolRuleResults,
    aggregate,
    build_summary,
    calculate_maturity,
    execute_rules,
    flatten_issues,
    maturity_level,
)
from .registry import RuleRegistry, get_registry
from .validator import (
    MCP_SPEC_VERSION,
    VALIDATOR_VERSION,
    validate,
    validate_file,
    validate_server,
)

__all__ = [
    "DEFAULT_RULES",
    "LoadedConfig",
    "default_config",
    "load_config",
    "parse_rule_overrides",
    "resolve_config",
    "ToolRuleResults",
    "aggregate",
    "build_summary",
    "calculate_maturity",
    "execute_rules",
    "flatten_issues",
    "maturity_level",
    "RuleRegistry",
    "get_registry",
    "MCP_SPEC_VERSION",
    "VALIDATOR_VERSION",
    "validate",
    "validate_file",
    "validate_server",
]
