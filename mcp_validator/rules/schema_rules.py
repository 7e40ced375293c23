"""
Schema rules (SCH-xxx): structural correctness of a tool definition.

SCH-001/002/003 check that the required fields are present at all; empty
values are left to the naming and LLM-compatibility rules.
"""

import re
from typing import Any, Iterator

from mcp_validator.schema import IssueCategory, IssueSeverity

from .base import MCP_TOOLS_DOC, Finding, RuleSet


schema_rules = RuleSet(IssueCategory.SCHEMA)

JSON_SCHEMA_DOC = "https://json-schema.org/draft/2020-12/json-schema-core"
OBJECT_PROPERTIES_DOC = "https://json-schema.org/understanding-json-schema/reference/object#properties"
OBJECT_REQUIRED_DOC = "https://json-schema.org/understanding-json-schema/reference/object#required"

JSON_TYPES = frozenset({"string", "number", "integer", "boolean", "object", "array", "null"})
NUMERIC_KEYWORDS = ("minimum", "maximum", "exclusiveMinimum", "exclusiveMaximum", "multipleOf")
COUNT_KEYWORDS = ("minLength", "maxLength", "minItems", "maxItems", "minProperties", "maxProperties")


@schema_rules.rule("SCH-001", IssueSeverity.ERROR, "Tool must have a name field", MCP_TOOLS_DOC)
def check_name_present(tool, ctx):
    if not tool.name.strip():
        yield Finding(
            'Tool is missing required "name" field',
            path="name",
            suggestion='Add a descriptive name for the tool using kebab-case (e.g., "get-user-profile")',
        )


@schema_rules.rule("SCH-002", IssueSeverity.ERROR, "Tool must have a description field", MCP_TOOLS_DOC)
def check_description_present(tool, ctx):
    if tool.description is None:
        yield Finding(
            'Tool is missing required "description" field',
            path="description",
            suggestion="Add a clear description explaining what the tool does and when to use it",
        )


@schema_rules.rule("SCH-003", IssueSeverity.ERROR, "Tool must have an inputSchema field", MCP_TOOLS_DOC)
def check_input_schema_present(tool, ctx):
    if not tool.has_schema():
        yield Finding(
            'Tool is missing required "inputSchema" field',
            path="inputSchema",
            suggestion="Add an inputSchema object defining the tool's input parameters using JSON Schema",
        )


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _schema_problems(node: Any, path: str, hops: int = 0) -> Iterator[tuple[str, str]]:
    """Yield (path, problem) pairs for keywords whose values are malformed."""
    if isinstance(node, bool):
        return
    if not isinstance(node, dict):
        yield path, "schema must be an object or boolean"
        return
    if hops > 64:
        return

    if "type" in node:
        declared = node["type"]
        names = declared if isinstance(declared, list) else [declared]
        if not names:
            yield f"{path}.type", "type must not be an empty array"
        for name in names:
            if not isinstance(name, str) or name not in JSON_TYPES:
                yield f"{path}.type", f"unknown type {name!r}"

    properties = node.get("properties")
    if "properties" in node:
        if not isinstance(properties, dict):
            yield f"{path}.properties", "properties must be an object"
        else:
            for name, child in properties.items():
                yield from _schema_problems(child, f"{path}.properties.{name}", hops + 1)

    if "items" in node:
        items = node["items"]
        if isinstance(items, list):
            for index, child in enumerate(items):
                yield from _schema_problems(child, f"{path}.items[{index}]", hops + 1)
        else:
            yield from _schema_problems(items, f"{path}.items", hops + 1)

    if "additionalProperties" in node:
        yield from _schema_problems(node["additionalProperties"], f"{path}.additionalProperties", hops + 1)

    for key in ("oneOf", "anyOf", "allOf"):
        if key not in node:
            continue
        branches = node[key]
        if not isinstance(branches, list) or not branches:
            yield f"{path}.{key}", f"{key} must be a non-empty array"
            continue
        for index, branch in enumerate(branches):
            yield from _schema_problems(branch, f"{path}.{key}[{index}]", hops + 1)

    if "enum" in node and (not isinstance(node["enum"], list) or not node["enum"]):
        yield f"{path}.enum", "enum must be a non-empty array"

    for key in NUMERIC_KEYWORDS:
        if key in node and not _is_number(node[key]):
            yield f"{path}.{key}", f"{key} must be a number"
    if _is_number(node.get("multipleOf")) and node["multipleOf"] <= 0:
        yield f"{path}.multipleOf", "multipleOf must be greater than 0"

    for key in COUNT_KEYWORDS:
        if key in node:
            value = node[key]
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                yield f"{path}.{key}", f"{key} must be a non-negative integer"

    if "pattern" in node:
        pattern = node["pattern"]
        if not isinstance(pattern, str):
            yield f"{path}.pattern", "pattern must be a string"
        else:
            try:
                re.compile(pattern)
            except re.error as e:
                yield f"{path}.pattern", f"pattern is not a valid regular expression ({e})"

    if "format" in node and not isinstance(node["format"], str):
        yield f"{path}.format", "format must be a string"


@schema_rules.rule("SCH-004", IssueSeverity.ERROR, "inputSchema must be valid JSON Schema", JSON_SCHEMA_DOC)
def check_input_schema_valid(tool, ctx):
    if not tool.has_schema():
        return
    for path, problem in _schema_problems(tool.input_schema, "inputSchema"):
        yield Finding(
            f"inputSchema is not valid JSON Schema: {problem}",
            path=path,
            suggestion="Review the JSON Schema specification and fix the schema syntax errors",
        )


@schema_rules.rule("SCH-005", IssueSeverity.ERROR, 'inputSchema.type must be "object"', MCP_TOOLS_DOC)
def check_input_schema_object(tool, ctx):
    if not tool.has_schema():
        return
    schema_type = tool.input_schema.get("type")
    if schema_type != "object":
        yield Finding(
            f'inputSchema.type is "{schema_type}" but must be "object"'
            if schema_type
            else 'inputSchema is missing required "type" field (must be "object")',
            path="inputSchema.type",
            suggestion='Set inputSchema.type to "object" - MCP tool inputs must be objects with named parameters',
        )


@schema_rules.rule(
    "SCH-006",
    IssueSeverity.WARNING,
    "inputSchema.properties should be defined (not empty object)",
    OBJECT_PROPERTIES_DOC,
)
def check_properties_defined(tool, ctx):
    if not tool.has_schema():
        return
    properties = tool.input_schema.get("properties")
    if not properties and not isinstance(properties, dict):
        yield Finding(
            'inputSchema is missing "properties" field',
            path="inputSchema.properties",
            suggestion=(
                "Define the tool's input parameters in inputSchema.properties, "
                "or explicitly document that this tool takes no parameters"
            ),
        )
    elif isinstance(properties, dict) and not properties:
        yield Finding(
            "inputSchema.properties is empty - tool takes no parameters",
            path="inputSchema.properties",
            suggestion=(
                "If this tool intentionally takes no parameters, consider documenting this clearly. "
                "Otherwise, define the expected input parameters."
            ),
        )


@schema_rules.rule(
    "SCH-007",
    IssueSeverity.WARNING,
    "Required parameters should be listed in inputSchema.required",
    OBJECT_REQUIRED_DOC,
)
def check_required_listed(tool, ctx):
    if not tool.get_properties():
        return
    required = tool.input_schema.get("required")
    if required is None:
        yield Finding(
            'inputSchema has properties but no "required" array - all parameters will be optional',
            path="inputSchema.required",
            suggestion=(
                'Add a "required" array listing parameters that must be provided, '
                "or leave empty array [] if all are truly optional"
            ),
        )
    elif not isinstance(required, list):
        yield Finding(
            "inputSchema.required is not an array",
            path="inputSchema.required",
            suggestion='Change "required" to an array of property names (e.g., ["userId", "action"])',
        )


@schema_rules.rule(
    "SCH-008",
    IssueSeverity.ERROR,
    "Parameters in required must exist in properties",
    OBJECT_REQUIRED_DOC,
)
def check_required_exist(tool, ctx):
    if not tool.has_schema():
        return
    required = tool.input_schema.get("required")
    if not isinstance(required, list):
        return

    defined = tool.get_properties().keys()
    for name in required:
        if not isinstance(name, str):
            yield Finding(
                f"inputSchema.required contains non-string value: {name!r}",
                path="inputSchema.required",
                suggestion="Ensure all values in the required array are strings representing property names",
            )
        elif name not in defined:
            yield Finding(
                f'Required parameter "{name}" is not defined in properties',
                path="inputSchema.required",
                suggestion=f'Either add "{name}" to inputSchema.properties or remove it from required',
            )
