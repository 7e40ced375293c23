"""Best-practice rules (BP-xxx): annotations, schema size and reuse, output schemas."""

from typing import Any

from mcp_validator.core.schema_tree import find_duplicate_schemas, measure_depth
from mcp_validator.schema import IssueCategory, IssueSeverity

from .base import MCP_TOOLS_DOC, Finding, RuleSet
from .matching import matches_any
from .vocabulary import MODIFYING_NAME_PATTERNS


best_practice_rules = RuleSet(IssueCategory.BEST_PRACTICE)

MAX_PARAMETERS = 10
MAX_SCHEMA_DEPTH = 4
MAX_LISTED_LOCATIONS = 3


def _annotation(tool, field: str) -> Any:
    return getattr(tool.annotations, field) if tool.annotations is not None else None


@best_practice_rules.rule(
    "BP-001", IssueSeverity.SUGGESTION, "Consider adding title annotation for display purposes"
)
def check_title_annotation(tool, ctx):
    if not _annotation(tool, "title"):
        yield Finding(
            "Tool is missing title annotation for display purposes",
            suggestion="Add annotations.title with a human-friendly name",
        )


@best_practice_rules.rule("BP-002", IssueSeverity.SUGGESTION, "Consider adding readOnlyHint annotation")
def check_read_only_hint(tool, ctx):
    if _annotation(tool, "read_only_hint") is None:
        yield Finding(
            "Tool is missing readOnlyHint annotation",
            suggestion="Add annotations.readOnlyHint to indicate whether the tool only reads data",
        )


@best_practice_rules.rule(
    "BP-003", IssueSeverity.SUGGESTION, "Consider adding destructiveHint for data-modifying tools"
)
def check_destructive_hint(tool, ctx):
    if matches_any(tool.name, MODIFYING_NAME_PATTERNS) and _annotation(tool, "destructive_hint") is None:
        yield Finding(
            f'Tool name "{tool.name}" suggests data modification but is missing destructiveHint annotation',
            suggestion="Add annotations.destructiveHint to indicate whether the operation is destructive",
        )


@best_practice_rules.rule("BP-004", IssueSeverity.SUGGESTION, "Consider adding idempotentHint annotation")
def check_idempotent_hint(tool, ctx):
    if _annotation(tool, "idempotent_hint") is None:
        yield Finding(
            "Tool is missing idempotentHint annotation",
            suggestion="Add annotations.idempotentHint to indicate whether the tool is safe to call multiple times",
        )


@best_practice_rules.rule(
    "BP-005", IssueSeverity.WARNING, f"Tools with many parameters (>{MAX_PARAMETERS}) should be split"
)
def check_parameter_count(tool, ctx):
    count = len(tool.get_properties())
    if count > MAX_PARAMETERS:
        yield Finding(
            f"Tool has {count} parameters which exceeds the recommended limit of {MAX_PARAMETERS}",
            path="inputSchema.properties",
            suggestion="Consider splitting this tool into multiple smaller, more focused tools",
        )


@best_practice_rules.rule("BP-006", IssueSeverity.SUGGESTION, "Use $ref for repeated schema patterns")
def check_repeated_schemas(tool, ctx):
    for group in find_duplicate_schemas(tool, ctx.all_tools):
        locations = [
            other.path if other.tool is tool else other.tool.display_name
            for other in group.others
        ]
        listed = ", ".join(locations[:MAX_LISTED_LOCATIONS])
        if len(locations) > MAX_LISTED_LOCATIONS:
            listed += f" and {len(locations) - MAX_LISTED_LOCATIONS} more"
        yield Finding(
            f"Schema pattern at {group.occurrence.path} is repeated in: {listed}",
            path=group.occurrence.path,
            suggestion="Consider using $ref to define this schema once and reference it",
        )


@best_practice_rules.rule(
    "BP-007", IssueSeverity.WARNING, f"Deeply nested schemas (>{MAX_SCHEMA_DEPTH} levels) hurt usability"
)
def check_schema_depth(tool, ctx):
    info = measure_depth(tool.input_schema)
    if info.depth > MAX_SCHEMA_DEPTH:
        yield Finding(
            f"Schema has {info.depth} levels of nesting which exceeds the recommended limit of {MAX_SCHEMA_DEPTH}",
            path=info.path,
            suggestion="Consider flattening the schema or breaking it into separate tools",
        )


def _is_complex_parameter(schema: dict) -> bool:
    if schema.get("type") in ("object", "array"):
        return True
    if any(key in schema for key in ("oneOf", "anyOf", "allOf")):
        return True
    enum = schema.get("enum")
    return isinstance(enum, list) and len(enum) > 3


@best_practice_rules.rule(
    "BP-008", IssueSeverity.SUGGESTION, "Provide examples in inputSchema for complex parameters"
)
def check_complex_examples(tool, ctx):
    for name, schema in tool.get_parameters():
        if not _is_complex_parameter(schema):
            continue
        if any(key in schema for key in ("examples", "example", "default")):
            continue
        yield Finding(
            f'Complex parameter "{name}" is missing examples',
            path=f"inputSchema.properties.{name}",
            suggestion="Add an 'examples' array to help LLMs understand expected values",
        )


def _has_description(schema: Any) -> bool:
    description = schema.get("description") if isinstance(schema, dict) else None
    return isinstance(description, str) and bool(description.strip())


@best_practice_rules.rule(
    "BP-009",
    IssueSeverity.SUGGESTION,
    "Consider providing outputSchema for better output validation and parsing",
    MCP_TOOLS_DOC,
)
def check_output_schema(tool, ctx):
    raw = tool.source.raw
    if not isinstance(raw, dict) or "outputSchema" not in raw:
        yield Finding(
            "Tool is missing outputSchema for output validation and parsing",
            path="outputSchema",
            suggestion="Add outputSchema with type, properties, and descriptions to define expected output structure",
        )
        return

    output_schema = raw["outputSchema"]
    if not isinstance(output_schema, dict):
        yield Finding(
            "outputSchema must be a valid JSON Schema object",
            path="outputSchema",
            suggestion="Provide a valid JSON Schema object with type and properties",
        )
        return

    if not isinstance(output_schema.get("type"), (str, list)):
        yield Finding(
            'outputSchema is missing "type" property',
            path="outputSchema.type",
            suggestion='Add "type": "object" or appropriate type to outputSchema',
        )

    if not _has_description(output_schema):
        yield Finding(
            "outputSchema is missing a description",
            path="outputSchema.description",
            suggestion="Add a description to outputSchema explaining the output structure",
        )

    properties = output_schema.get("properties")
    if output_schema.get("type") == "object" and isinstance(properties, dict) and properties:
        documented = sum(1 for prop in properties.values() if _has_description(prop))
        if documented == 0:
            yield Finding(
                "outputSchema properties are missing descriptions",
                path="outputSchema.properties",
                suggestion="Add descriptions to outputSchema properties for better LLM understanding",
            )
        elif documented < len(properties):
            yield Finding(
                f"{len(properties) - documented} of {len(properties)} outputSchema properties are missing descriptions",
                path="outputSchema.properties",
                suggestion="Add descriptions to all outputSchema properties for better LLM understanding",
            )
