"""
MCP Tool Validator.

Static analysis for MCP tool definitions: schema correctness, naming,
security-sensitive parameters, LLM compatibility and best practices.

    from mcp_validator import validate

    result = validate([{"name": "search-users", "description": "...", "inputSchema": {...}}])
    print(result.valid, result.summary.maturity_score)
"""

from mcp_validator.core import (
    MCP_SPEC_VERSION,
    VALIDATOR_VERSION,
    default_config,
    load_config,
    validate,
    validate_file,
    validate_server,
)
from mcp_validator.errors import (
    ConfigError,
    LLMAnalysisError,
    ServerDiscoveryError,
    ToolParseError,
    ValidatorError,
)
from mcp_validator.schema import (
    ToolDefinition,
    ValidationIssue,
    ValidationResult,
    ValidatorConfig,
)

__version__ = VALIDATOR_VERSION

__all__ = [
    "MCP_SPEC_VERSION",
    "VALIDATOR_VERSION",
    "default_config",
    "load_config",
    "validate",
    "validate_file",
    "validate_server",
    "ConfigError",
    "LLMAnalysisError",
    "ServerDiscoveryError",
    "ToolParseError",
    "ValidatorError",
    "ToolDefinition",
    "ValidationIssue",
    "ValidationResult",
    "ValidatorConfig",
]
