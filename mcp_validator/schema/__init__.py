from .tool import (
    ToolDefinition,
    ToolAnnotations,
    ToolSource,
    SourceType,
)
from .validation import (
    IssueCategory,
    IssueSeverity,
    MaturityLevel,
    ValidationIssue,
    ToolValidationResult,
    ValidationSummary,
    ValidationMetadata,
    ValidationResult,
    LLMAnalysisResult,
)
from .config import (
    ValidatorConfig,
    OutputConfig,
    OutputFormat,
    LLMConfig,
    LLMProvider,
    RuleConfigValue,
)

__all__ = [
    "ToolDefinition",
    "ToolAnnotations",
    "ToolSource",
    "SourceType",
    "IssueCategory",
    "IssueSeverity",
    "MaturityLevel",
    "ValidationIssue",
    "ToolValidationResult",
    "ValidationSummary",
    "ValidationMetadata",
    "ValidationResult",
    "LLMAnalysisResult",
    "ValidatorConfig",
    "OutputConfig",
    "OutputFormat",
    "LLMConfig",
    "LLMProvider",
    "RuleConfigValue",
]
