from .analyzer import ToolAnalyzer, analyze_tools
from .prompts import ANALYSIS_PROMPT, format_parameters, parse_analysis_response

__all__ = [
    "ToolAnalyzer",
    "analyze_tools",
    "ANALYSIS_PROMPT",
    "format_parameters",
    "parse_analysis_response",
]
