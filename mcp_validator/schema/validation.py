"""
Pydantic models for validation output.

Python attributes are snake_case; serialized output uses the camelCase
keys consumers expect (issuesByCategory, maturityScore, ...).
"""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .tool import ToolDefinition


class IssueCategory(str, Enum):
    """Category a rule belongs to."""
    SCHEMA = "schema"
    SECURITY = "security"
    LLM_COMPATIBILITY = "llm-compatibility"
    NAMING = "naming"
    BEST_PRACTICE = "best-practice"


class IssueSeverity(str, Enum):
    """Severity of a reported issue."""
    ERROR = "error"
    WARNING = "warning"
    SUGGESTION = "suggestion"


class MaturityLevel(str, Enum):
    """Overall maturity bucket for a tool set."""
    EXEMPLARY = "exemplary"
    MATURE = "mature"
    MODERATE = "moderate"
    IMMATURE = "immature"

    @property
    def description(self) -> str:
        return _MATURITY_DESCRIPTIONS[self]


_MATURITY_DESCRIPTIONS = {
    MaturityLevel.EXEMPLARY: "Optimized for advanced multi-tool agents",
    MaturityLevel.MATURE: "Reliable for complex workflows",
    MaturityLevel.MODERATE: "Usable in simple agents; some guidance",
    MaturityLevel.IMMATURE: "High risk of misuse; basic functionality only",
}


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ValidationIssue(_CamelModel):
    """A single finding emitted by a rule against one tool."""
    id: str
    category: IssueCategory
    severity: IssueSeverity
    message: str
    tool: str
    path: str | None = None
    suggestion: str | None = None
    documentation: str | None = None


class ToolValidationResult(_CamelModel):
    """Per-tool outcome."""
    name: str
    valid: bool
    issues: list[ValidationIssue] = Field(default_factory=list)
    tool: ToolDefinition

    def count(self, severity: IssueSeverity) -> int:
        """Count issues of a given severity."""
        return sum(1 for issue in self.issues if issue.severity == severity)


def empty_category_counts() -> dict[IssueCategory, int]:
    """Category table with every key present at zero."""
    return {category: 0 for category in IssueCategory}


def empty_severity_counts() -> dict[IssueSeverity, int]:
    """Severity table with every key present at zero."""
    return {severity: 0 for severity in IssueSeverity}


class ValidationSummary(_CamelModel):
    """Aggregate statistics over a validation run."""
    total_tools: int = 0
    valid_tools: int = 0
    issues_by_category: dict[IssueCategory, int] = Field(default_factory=empty_category_counts)
    issues_by_severity: dict[IssueSeverity, int] = Field(default_factory=empty_severity_counts)
    maturity_score: int = 100
    maturity_level: MaturityLevel = MaturityLevel.EXEMPLARY


class ValidationMetadata(_CamelModel):
    """Run metadata."""
    validator_version: str
    mcp_spec_version: str
    timestamp: datetime
    duration: float  # milliseconds
    config_used: str = ""
    llm_analysis_used: bool = False


class LLMAnalysisResult(BaseModel):
    """LLM assessment of a single tool definition."""
    clarity_score: int = 5
    completeness_score: int = 5
    ambiguities: list[str] = Field(default_factory=list)
    conflicts: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)


class ValidationResult(_CamelModel):
    """
    Complete result of validating a set of tools.

    `issues` is the flattened, tool-major list; `tools` holds the same
    issues grouped per tool.
    """
    valid: bool
    summary: ValidationSummary
    issues: list[ValidationIssue] = Field(default_factory=list)
    tools: list[ToolValidationResult] = Field(default_factory=list)
    metadata: ValidationMetadata
    llm_analysis: dict[str, LLMAnalysisResult] | None = None

    def get_issues(
        self,
        rule_id: str | None = None,
        severity: IssueSeverity | None = None,
    ) -> list[ValidationIssue]:
        """Filter issues by rule id and/or severity."""
        return [
            issue
            for issue in self.issues
            if (rule_id is None or issue.id == rule_id)
            and (severity is None or issue.severity == severity)
        ]

    def get_tool(self, name: str) -> ToolValidationResult | None:
        """Get the per-tool result by tool name."""
        for tool_result in self.tools:
            if tool_result.name == name:
                return tool_result
        return None

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the public camelCase keys."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
