"""
Traversal utilities over JSON-Schema-like trees.

Two algorithms live here:
- nesting depth measurement (with the path to the deepest node)
- structural-duplicate detection of property schemas within and across tools

Both walks are guarded: recursion stops after MAX_TRAVERSAL_HOPS steps and a
node already on the current path (a self-referential dict) is not re-entered.
"""

from dataclasses import dataclass
from typing import Any, Hashable, Iterator, Sequence

from mcp_validator.schema import ToolDefinition


MAX_TRAVERSAL_HOPS = 64

COMBINATOR_KEYS = ("oneOf", "anyOf", "allOf")

# Annotation keywords that do not change what a schema accepts
IGNORED_KEYWORDS = frozenset({"description", "examples", "default"})

# Keywords whose list value is compared as an unordered set
SET_KEYWORDS = frozenset({"enum", "required"})

# Keywords whose value is a mapping of name -> schema
SCHEMA_MAP_KEYWORDS = frozenset({"properties", "patternProperties", "$defs", "definitions"})

# Keywords whose value is a single schema
SCHEMA_KEYWORDS = frozenset({"additionalProperties", "not", "if", "then", "else", "contains"})


# --- Depth -----------------------------------------------------------------

@dataclass(frozen=True)
class DepthInfo:
    """Nesting depth of a schema and the path to its deepest node."""
    depth: int
    path: str


def _depth_children(node: dict, path: str) -> Iterator[tuple[str, Any]]:
    properties = node.get("properties")
    if isinstance(properties, dict):
        for name, child in properties.items():
            yield f"{path}.properties.{name}", child

    items = node.get("items")
    if isinstance(items, dict):
        yield f"{path}.items", items
    elif isinstance(items, list):
        for index, child in enumerate(items):
            yield f"{path}.items[{index}]", child

    additional = node.get("additionalProperties")
    if isinstance(additional, dict):
        yield f"{path}.additionalProperties", additional


def _measure(node: Any, path: str, hops: int, active: set[int]) -> DepthInfo:
    if not isinstance(node, dict) or hops > MAX_TRAVERSAL_HOPS or id(node) in active:
        return DepthInfo(0, path)

    active.add(id(node))
    try:
        deepest = DepthInfo(0, path)

        for child_path, child in _depth_children(node, path):
            measured = _measure(child, child_path, hops + 1, active)
            if measured.depth + 1 > deepest.depth:
                deepest = DepthInfo(measured.depth + 1, measured.path)

        # Combinator branches describe the same value, so they add no level
        for key in COMBINATOR_KEYS:
            branches = node.get(key)
            if not isinstance(branches, list):
                continue
            for index, branch in enumerate(branches):
                measured = _measure(branch, f"{path}.{key}[{index}]", hops + 1, active)
                if measured.depth > deepest.depth:
                    deepest = measured
    finally:
        active.discard(id(node))

    return deepest


def measure_depth(schema: Any, root_path: str = "inputSchema") -> DepthInfo:
    """
    Measure the nesting depth of a schema.

    depth(leaf) = 0; depth(node) = 1 + max(depth(child)) over properties,
    items and schema-valued additionalProperties. oneOf/anyOf/allOf
    branches are measured at the node's own level.
    """
    return _measure(schema, root_path, 0, set())


def schema_depth(schema: Any) -> int:
    return measure_depth(schema).depth


# --- Structural keys -------------------------------------------------------

_CYCLE = ("<cycle>",)
_TRUNCATED = ("<truncated>",)


def _value_key(value: Any, hops: int, active: set[int]) -> Hashable:
    """Freeze an arbitrary JSON value (const, enum members, ...)."""
    if hops > MAX_TRAVERSAL_HOPS:
        return _TRUNCATED
    if isinstance(value, dict):
        if id(value) in active:
            return _CYCLE
        active.add(id(value))
        try:
            return ("map", frozenset((k, _value_key(v, hops + 1, active)) for k, v in value.items()))
        finally:
            active.discard(id(value))
    if isinstance(value, list):
        if id(value) in active:
            return _CYCLE
        active.add(id(value))
        try:
            return ("list", tuple(_value_key(v, hops + 1, active) for v in value))
        finally:
            active.discard(id(value))
    # bool is kept distinct from int (True == 1 otherwise)
    return (type(value).__name__, value)


def _schema_key(node: Any, hops: int, active: set[int]) -> Hashable:
    if not isinstance(node, dict):
        return _value_key(node, hops, active)
    if hops > MAX_TRAVERSAL_HOPS:
        return _TRUNCATED
    if id(node) in active:
        return _CYCLE

    active.add(id(node))
    try:
        entries = []
        for keyword, value in node.items():
            if keyword in IGNORED_KEYWORDS:
                continue
            if keyword in SET_KEYWORDS and isinstance(value, list):
                frozen = frozenset(_value_key(v, hops + 1, active) for v in value)
            elif keyword == "type" and isinstance(value, list):
                frozen = frozenset(_value_key(v, hops + 1, active) for v in value)
            elif keyword in SCHEMA_MAP_KEYWORDS and isinstance(value, dict):
                frozen = frozenset(
                    (name, _schema_key(child, hops + 1, active)) for name, child in value.items()
                )
            elif keyword in SCHEMA_KEYWORDS or keyword == "items":
                if isinstance(value, list):
                    frozen = tuple(_schema_key(child, hops + 1, active) for child in value)
                else:
                    frozen = _schema_key(value, hops + 1, active)
            elif keyword in COMBINATOR_KEYS and isinstance(value, list):
                frozen = tuple(_schema_key(child, hops + 1, active) for child in value)
            else:
                frozen = _value_key(value, hops + 1, active)
            entries.append((keyword, frozen))
        return ("schema", frozenset(entries))
    finally:
        active.discard(id(node))


def structural_key(schema: Any) -> Hashable:
    """
    Hashable key under which structurally equal schemas collide.

    Mapping order is ignored, description/examples/default are dropped,
    enum/required (and list-valued type) compare as sets.
    """
    return _schema_key(schema, 0, set())


def structurally_equal(left: Any, right: Any) -> bool:
    return structural_key(left) == structural_key(right)


# --- Duplicate detection ---------------------------------------------------

def _is_object_schema(schema: Any) -> bool:
    return isinstance(schema, dict) and (
        schema.get("type") == "object" or isinstance(schema.get("properties"), dict)
    )


def is_duplicate_candidate(schema: Any) -> bool:
    """
    Check whether a schema is substantial enough to report as a duplicate.

    Eligible: at least two properties, an array whose items is an object
    schema, or an object with at least one nested object property.
    """
    if not isinstance(schema, dict):
        return False

    properties = schema.get("properties")
    if isinstance(properties, dict):
        if len(properties) >= 2:
            return True
        if any(_is_object_schema(child) for child in properties.values()):
            return True

    items = schema.get("items")
    if schema.get("type") == "array" and _is_object_schema(items):
        return True

    return False


@dataclass(frozen=True)
class SchemaOccurrence:
    """An eligible top-level property schema of a tool."""
    tool: ToolDefinition
    property_name: str
    position: int

    @property
    def path(self) -> str:
        return f"inputSchema.properties.{self.property_name}"


@dataclass(frozen=True)
class DuplicateGroup:
    """A property of the checked tool and the other places its schema appears."""
    occurrence: SchemaOccurrence
    others: tuple[SchemaOccurrence, ...]


def _eligible_properties(tool: ToolDefinition) -> Iterator[tuple[SchemaOccurrence, Hashable]]:
    for position, (name, schema) in enumerate(tool.get_properties().items()):
        if is_duplicate_candidate(schema):
            yield SchemaOccurrence(tool, name, position), structural_key(schema)


def find_duplicate_schemas(
    tool: ToolDefinition,
    all_tools: Sequence[ToolDefinition],
) -> list[DuplicateGroup]:
    """
    Find eligible property schemas of `tool` that repeat elsewhere.

    Sibling duplicates are reported forward-only: a property lists only
    earlier siblings, so each pair inside one tool is reported once.
    Cross-tool duplicates are listed from each tool's own perspective.
    Tools are compared by identity, so two distinct tools sharing a name
    still count as different tools.
    """
    own = list(_eligible_properties(tool))
    if not own:
        return []

    elsewhere: dict[Hashable, list[SchemaOccurrence]] = {}
    seen: set[int] = set()
    for other in all_tools:
        if other is tool or id(other) in seen:
            continue
        seen.add(id(other))
        for occurrence, key in _eligible_properties(other):
            elsewhere.setdefault(key, []).append(occurrence)

    groups = []
    for index, (occurrence, key) in enumerate(own):
        earlier_siblings = [sibling for sibling, sibling_key in own[:index] if sibling_key == key]
        others = tuple(earlier_siblings + elsewhere.get(key, []))
        if others:
            groups.append(DuplicateGroup(occurrence, others))
    return groups
