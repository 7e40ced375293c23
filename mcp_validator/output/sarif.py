"""
SARIF 2.1.0 export.

One driver rule per rule id that produced an issue; each issue becomes a
result with a logical location of kind "tool" named tool.path.
"""

from typing import Any

from mcp_validator.core.registry import RuleRegistry, get_registry
from mcp_validator.schema import IssueSeverity, ValidationIssue, ValidationResult


SARIF_SCHEMA = "https://raw.githubusercontent.com/oasis-tcs/sarif-spec/master/Schemata/sarif-schema-2.1.0.json"
SARIF_VERSION = "2.1.0"
DRIVER_NAME = "mcp-tool-validator"

SARIF_LEVELS = {
    IssueSeverity.ERROR: "error",
    IssueSeverity.WARNING: "warning",
    IssueSeverity.SUGGESTION: "note",
}


def _driver_rule(issue: ValidationIssue, registry: RuleRegistry) -> dict[str, Any]:
    rule = registry.load(issue.id)
    entry: dict[str, Any] = {
        "id": issue.id,
        "name": issue.id,
        "shortDescription": {"text": rule.description if rule else issue.message},
        "defaultConfiguration": {"level": SARIF_LEVELS[issue.severity]},
        "properties": {"category": issue.category.value},
    }
    if issue.documentation:
        entry["helpUri"] = issue.documentation
    return entry


def _result(issue: ValidationIssue) -> dict[str, Any]:
    qualified_name = f"{issue.tool}.{issue.path}" if issue.path else issue.tool
    entry: dict[str, Any] = {
        "ruleId": issue.id,
        "level": SARIF_LEVELS[issue.severity],
        "message": {"text": issue.message},
        "locations": [{
            "logicalLocations": [{
                "name": issue.tool,
                "kind": "tool",
                "fullyQualifiedName": qualified_name,
            }],
        }],
    }
    if issue.suggestion:
        entry["properties"] = {"suggestion": issue.suggestion}
    return entry


def to_sarif(result: ValidationResult, registry: RuleRegistry | None = None) -> dict[str, Any]:
    """Build a SARIF log for a validation result."""
    registry = registry or get_registry()

    rules: dict[str, dict[str, Any]] = {}
    for issue in result.issues:
        if issue.id not in rules:
            rules[issue.id] = _driver_rule(issue, registry)

    return {
        "$schema": SARIF_SCHEMA,
        "version": SARIF_VERSION,
        "runs": [{
            "tool": {
                "driver": {
                    "name": DRIVER_NAME,
                    "version": result.metadata.validator_version,
                    "rules": list(rules.values()),
                },
            },
            "results": [_result(issue) for issue in result.issues],
        }],
    }
