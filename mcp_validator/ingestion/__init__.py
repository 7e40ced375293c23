from .parser import parse_file, normalize_tools, detect_format, detect_layout
from .server import fetch_tools_from_server, list_server_tools

__all__ = [
    "parse_file",
    "normalize_tools",
    "detect_format",
    "detect_layout",
    "fetch_tools_from_server",
    "list_server_tools",
]
