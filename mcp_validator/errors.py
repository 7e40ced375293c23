"""Exception hierarchy for the MCP tool validator."""

from pathlib import Path


class ValidatorError(Exception):
    """Base class for all validator errors."""


class ConfigError(ValidatorError):
    """An explicitly requested config file is missing, unreadable or invalid."""

    def __init__(self, message: str, path: str | Path | None = None) -> None:
        super().__init__(message)
        self.path = str(path) if path is not None else None


class ToolParseError(ValidatorError):
    """A tool definition file could not be parsed."""

    def __init__(self, message: str, path: str | Path, index: int | None = None) -> None:
        location = f"{path}" if index is None else f"{path} (tool index {index})"
        super().__init__(f"{message}: {location}")
        self.path = str(path)
        self.index = index


class ServerDiscoveryError(ValidatorError):
    """Tool definitions could not be retrieved from a live MCP server."""

    def __init__(self, message: str, server: str) -> None:
        super().__init__(f"{message} ({server})")
        self.server = server


class LLMAnalysisError(ValidatorError):
    """LLM-assisted analysis failed or returned an unusable response."""
