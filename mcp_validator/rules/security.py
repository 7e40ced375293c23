"""
Security rules (SEC-xxx): input-bounding and sensitive-data posture.

All checks look at top-level parameters only.
"""

from mcp_validator.schema import IssueCategory, IssueSeverity

from .base import Finding, RuleSet
from .matching import matches_any
from .vocabulary import (
    CODE_NAME_PATTERNS,
    COMMAND_NAME_PATTERNS,
    CONTENT_FIELD_PATTERNS,
    DANGER_WORDS_PATTERN,
    PATH_NAME_PATTERNS,
    SENSITIVE_NAME_PATTERNS,
    URL_NAME_PATTERNS,
)


security_rules = RuleSet(IssueCategory.SECURITY)


def _param_path(name: str) -> str:
    return f"inputSchema.properties.{name}"


def is_sensitive_parameter(name: str) -> bool:
    return matches_any(name, SENSITIVE_NAME_PATTERNS)


@security_rules.rule(
    "SEC-001",
    IssueSeverity.ERROR,
    "String parameters must have maxLength constraint (except content fields)",
)
def check_string_max_length(tool, ctx):
    for name, schema in tool.get_parameters():
        if schema.get("type") != "string" or "maxLength" in schema:
            continue
        if matches_any(name, CONTENT_FIELD_PATTERNS):
            continue
        yield Finding(
            f"String parameter '{name}' is missing maxLength constraint",
            path=_param_path(name),
            suggestion='Add "maxLength": 100 or an appropriate limit',
        )


@security_rules.rule("SEC-002", IssueSeverity.ERROR, "Array parameters must have maxItems constraint")
def check_array_max_items(tool, ctx):
    for name, schema in tool.get_parameters():
        if schema.get("type") == "array" and "maxItems" not in schema:
            yield Finding(
                f"Array parameter '{name}' is missing maxItems constraint",
                path=_param_path(name),
                suggestion='Add "maxItems": 100 or an appropriate limit',
            )


@security_rules.rule(
    "SEC-003",
    IssueSeverity.WARNING,
    "Number parameters should have minimum/maximum constraints",
)
def check_number_bounds(tool, ctx):
    for name, schema in tool.get_parameters():
        if schema.get("type") not in ("number", "integer"):
            continue
        if "minimum" not in schema and "maximum" not in schema:
            yield Finding(
                f"Number parameter '{name}' is missing minimum/maximum constraints",
                path=_param_path(name),
                suggestion='Add "minimum" and/or "maximum" constraints to bound the value',
            )


@security_rules.rule(
    "SEC-004",
    IssueSeverity.ERROR,
    "File path parameters must use pattern for path validation",
)
def check_path_pattern(tool, ctx):
    for name, schema in tool.get_parameters():
        if (
            schema.get("type") == "string"
            and matches_any(name, PATH_NAME_PATTERNS)
            and "pattern" not in schema
        ):
            yield Finding(
                f"File path parameter '{name}' is missing pattern constraint for path validation",
                path=_param_path(name),
                suggestion=(
                    'Add a "pattern" constraint to validate path format and prevent path '
                    'traversal attacks (e.g., "^[a-zA-Z0-9_\\-./]+$")'
                ),
            )


@security_rules.rule("SEC-005", IssueSeverity.ERROR, 'URL parameters must use format: "uri"')
def check_url_format(tool, ctx):
    for name, schema in tool.get_parameters():
        if (
            schema.get("type") == "string"
            and matches_any(name, URL_NAME_PATTERNS)
            and schema.get("format") != "uri"
        ):
            yield Finding(
                f"URL parameter '{name}' should use format: \"uri\" for proper URL validation",
                path=_param_path(name),
                suggestion='Add "format": "uri" to validate URL structure',
            )


@security_rules.rule(
    "SEC-006",
    IssueSeverity.WARNING,
    "Command/query parameters should use enum when values are known",
)
def check_command_enum(tool, ctx):
    for name, schema in tool.get_parameters():
        if (
            schema.get("type") == "string"
            and matches_any(name, COMMAND_NAME_PATTERNS)
            and "enum" not in schema
        ):
            yield Finding(
                f"Parameter '{name}' appears to be a command/action but is missing an enum constraint",
                path=_param_path(name),
                suggestion='If the valid values are known, add an "enum" array to restrict input to allowed values',
            )


@security_rules.rule(
    "SEC-007",
    IssueSeverity.WARNING,
    "Sensitive parameter names (password, token, key, secret) should be flagged",
)
def check_sensitive_names(tool, ctx):
    for name in tool.get_properties():
        if is_sensitive_parameter(name):
            yield Finding(
                f"Parameter '{name}' appears to contain sensitive data",
                path=_param_path(name),
                suggestion=(
                    "Ensure this parameter is handled securely: avoid logging, use secure "
                    "transmission, and consider if it should be passed at runtime instead of stored"
                ),
            )


@security_rules.rule(
    "SEC-008",
    IssueSeverity.ERROR,
    "No default values for security-sensitive parameters",
)
def check_sensitive_defaults(tool, ctx):
    for name, schema in tool.get_parameters():
        if is_sensitive_parameter(name) and "default" in schema:
            yield Finding(
                f"Security-sensitive parameter '{name}' has a default value",
                path=_param_path(name),
                suggestion=(
                    "Remove the default value from this sensitive parameter. "
                    "Credentials should always be explicitly provided"
                ),
            )


@security_rules.rule(
    "SEC-009",
    IssueSeverity.WARNING,
    "Object parameters with additionalProperties: true need justification",
)
def check_additional_properties(tool, ctx):
    for name, schema in tool.get_parameters():
        if schema.get("type") != "object":
            continue
        if schema.get("additionalProperties", True) is True:
            yield Finding(
                f"Object parameter '{name}' allows additional properties",
                path=_param_path(name),
                suggestion=(
                    'Consider adding "additionalProperties": false to prevent unexpected properties, '
                    "or document why additional properties are needed"
                ),
            )


@security_rules.rule(
    "SEC-010",
    IssueSeverity.WARNING,
    "Parameters accepting code/scripts should be documented as dangerous",
)
def check_code_documented(tool, ctx):
    for name, schema in tool.get_parameters():
        if not matches_any(name, CODE_NAME_PATTERNS):
            continue
        description = schema.get("description")
        if not isinstance(description, str) or not matches_any(description, (DANGER_WORDS_PATTERN,)):
            yield Finding(
                f"Parameter '{name}' appears to accept code/scripts but lacks security documentation",
                path=_param_path(name),
                suggestion=(
                    "Add a description that clearly documents the security implications "
                    "of accepting code/script input"
                ),
            )
