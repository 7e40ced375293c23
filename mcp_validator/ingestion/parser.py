"""
Tool definition file parsing.

Reads a JSON or YAML file and normalizes whatever layout it uses into a
list of ToolDefinitions. Supported layouts:
- a bare array of tools
- an object with a "tools" array
- a server manifest (name and/or version plus a "tools" array)
- a single tool object
"""

import json
from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from mcp_validator.errors import ToolParseError
from mcp_validator.schema import SourceType, ToolDefinition, ToolSource


class FileFormat(str, Enum):
    """Serialization format of a tool definition file."""
    JSON = "json"
    YAML = "yaml"


class ToolLayout(str, Enum):
    """How tools are arranged inside a parsed document."""
    SINGLE = "single"
    ARRAY = "array"
    MANIFEST = "manifest"


def detect_format(path: str | Path) -> FileFormat:
    """Detect the file format from its extension."""
    suffix = Path(path).suffix.lower()
    if suffix == ".json":
        return FileFormat.JSON
    if suffix in (".yaml", ".yml"):
        return FileFormat.YAML
    raise ToolParseError("Unsupported file format, expected .json, .yaml or .yml", path)


def detect_layout(data: Any) -> ToolLayout:
    """Detect how tools are arranged in parsed data."""
    if isinstance(data, list):
        return ToolLayout.ARRAY
    if isinstance(data, dict) and isinstance(data.get("tools"), list):
        if "name" in data or "version" in data:
            return ToolLayout.MANIFEST
        return ToolLayout.ARRAY
    # Anything else is treated as a single tool and checked below
    return ToolLayout.SINGLE


def _is_tool_like(data: Any) -> bool:
    return (
        isinstance(data, dict)
        and isinstance(data.get("name"), str)
        and isinstance(data.get("description"), str)
        and isinstance(data.get("inputSchema"), dict)
    )


def _to_tool(raw: dict[str, Any], path: str, index: int | None) -> ToolDefinition:
    try:
        return ToolDefinition(
            name=raw["name"],
            description=raw["description"],
            input_schema=raw["inputSchema"],
            annotations=raw.get("annotations"),
            source=ToolSource(type=SourceType.FILE, location=path, raw=raw),
        )
    except ValidationError as e:
        raise ToolParseError(f"Invalid tool definition ({e.error_count()} errors)", path, index) from e


def normalize_tools(data: Any, path: str | Path) -> list[ToolDefinition]:
    """
    Convert parsed file content into tool definitions.

    Raises:
        ToolParseError: if a tool is missing a string name, a string
            description or an inputSchema object.
    """
    location = str(path)
    layout = detect_layout(data)

    if layout == ToolLayout.SINGLE:
        if not _is_tool_like(data):
            raise ToolParseError(
                "Invalid tool definition, expected an object with name, description and inputSchema",
                location,
            )
        return [_to_tool(data, location, None)]

    items = data if isinstance(data, list) else data["tools"]
    tools = []
    for index, item in enumerate(items):
        if not _is_tool_like(item):
            raise ToolParseError(
                "Invalid tool definition, expected an object with name, description and inputSchema",
                location,
                index,
            )
        tools.append(_to_tool(item, location, index))
    return tools


def parse_file(path: str | Path) -> list[ToolDefinition]:
    """
    Parse a tool definition file.

    Args:
        path: Path to a .json, .yaml or .yml file

    Returns:
        Tool definitions in file order
    """
    path = Path(path)
    file_format = detect_format(path)

    if not path.is_file():
        raise ToolParseError("Tool definition file not found", path)

    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ToolParseError(f"Cannot read file ({e.strerror})", path) from e
    except UnicodeDecodeError as e:
        raise ToolParseError(f"File is not valid UTF-8 ({e.reason} at byte {e.start})", path) from e

    try:
        if file_format == FileFormat.JSON:
            data = json.loads(content)
        else:
            data = yaml.safe_load(content)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ToolParseError(f"Failed to parse {file_format.value.upper()} ({e})", path) from e

    return normalize_tools(data, path)
