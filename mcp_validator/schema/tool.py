"""
Pydantic models for MCP tool definitions.

A ToolDefinition is the unit every rule inspects:
- name, description and a JSON-Schema-like inputSchema
- optional behavioral annotations (title, readOnlyHint, ...)
- the source it was loaded from, with the untouched raw payload
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SourceType(str, Enum):
    """Where a tool definition came from."""
    FILE = "file"
    SERVER = "server"
    INLINE = "inline"


class ToolAnnotations(BaseModel):
    """Behavioral hints a tool may declare."""
    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="allow")

    title: str | None = None
    read_only_hint: bool | None = Field(default=None, alias="readOnlyHint")
    destructive_hint: bool | None = Field(default=None, alias="destructiveHint")
    idempotent_hint: bool | None = Field(default=None, alias="idempotentHint")
    open_world_hint: bool | None = Field(default=None, alias="openWorldHint")


class ToolSource(BaseModel):
    """Origin of a tool definition and its raw payload."""
    model_config = ConfigDict(frozen=True)

    type: SourceType = SourceType.INLINE
    location: str = ""
    raw: Any = None


class ToolDefinition(BaseModel):
    """
    A single MCP tool definition.

    `description` is None when the field was absent and "" when it was
    present but empty; the schema and LLM-compatibility rules treat the two
    differently. `input_schema` is kept as a plain mapping since rules walk
    it as a JSON-Schema-like tree.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str = ""
    description: str | None = None
    input_schema: Any = Field(default=None, alias="inputSchema")
    annotations: ToolAnnotations | None = None
    source: ToolSource = Field(default_factory=ToolSource)

    @property
    def display_name(self) -> str:
        """Name used in issues and reports."""
        return self.name or "(unnamed)"

    def has_schema(self) -> bool:
        """Check if inputSchema is present and is a mapping."""
        return isinstance(self.input_schema, dict)

    def get_properties(self) -> dict[str, Any]:
        """Get inputSchema.properties, or an empty dict when unusable."""
        if not self.has_schema():
            return {}
        properties = self.input_schema.get("properties")
        return properties if isinstance(properties, dict) else {}

    def get_parameters(self) -> list[tuple[str, dict[str, Any]]]:
        """Get (name, schema) pairs for every parameter whose schema is a mapping."""
        return [
            (name, schema)
            for name, schema in self.get_properties().items()
            if isinstance(schema, dict)
        ]

    def get_raw_field(self, key: str, default: Any = None) -> Any:
        """Read a field from the raw source payload."""
        raw = self.source.raw
        if isinstance(raw, dict):
            return raw.get(key, default)
        return default
