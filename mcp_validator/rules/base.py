"""
Rule abstraction.

A rule is a stateless check plus static metadata. Checks are plain
generator functions of (tool, context) that yield Findings; the Rule
wrapper turns each Finding into a ValidationIssue carrying the rule's id,
category and default severity.

Rules are declared through a RuleSet, one per category:

    schema_rules = RuleSet(IssueCategory.SCHEMA)

    @schema_rules.rule("SCH-001", IssueSeverity.ERROR, "Tool must have a name field")
    def check_name_present(tool, ctx):
        if not tool.name.strip():
            yield Finding('Tool is missing required "name" field', path="name")
"""

import re
from dataclasses import dataclass, field
from typing import Callable, Iterable, Iterator

from mcp_validator.schema import (
    IssueCategory,
    IssueSeverity,
    RuleConfigValue,
    ToolDefinition,
    ValidationIssue,
)


RULE_ID_PATTERN = re.compile(r"^[A-Z]+-\d{3}$")

MCP_TOOLS_DOC = "https://modelcontextprotocol.io/specification/2025-11-25#tools"


@dataclass(frozen=True)
class Finding:
    """Raw output of a check before it is stamped with rule metadata."""
    message: str
    path: str | None = None
    suggestion: str | None = None


@dataclass(frozen=True)
class RuleSetting:
    """
    Resolved form of a raw per-rule config value.

    Disabled, enabled with the rule's default severity, or enabled with an
    explicit severity override.
    """
    enabled: bool = True
    severity: IssueSeverity | None = None

    @classmethod
    def from_value(cls, value: RuleConfigValue | str | None) -> "RuleSetting":
        """Build a setting from True/False/severity; None means not configured."""
        if value is None or value is True:
            return cls()
        if value is False:
            return cls(enabled=False)
        return cls(severity=IssueSeverity(value))

    @property
    def raw(self) -> RuleConfigValue:
        """The setting in config-file form."""
        if not self.enabled:
            return False
        return self.severity if self.severity is not None else True

    def effective_severity(self, default: IssueSeverity) -> IssueSeverity:
        return self.severity or default


@dataclass(frozen=True)
class RuleContext:
    """What a check may see besides the tool under inspection."""
    all_tools: tuple[ToolDefinition, ...]
    rule_config: RuleConfigValue = True


CheckFunction = Callable[[ToolDefinition, RuleContext], Iterable[Finding]]


@dataclass(frozen=True)
class Rule:
    """A registered validation rule."""
    id: str
    category: IssueCategory
    default_severity: IssueSeverity
    description: str
    check_fn: CheckFunction = field(repr=False, compare=False)
    documentation: str | None = None

    def __post_init__(self):
        if not RULE_ID_PATTERN.match(self.id):
            raise ValueError(f"Invalid rule id: {self.id!r}")

    def check(self, tool: ToolDefinition, ctx: RuleContext) -> list[ValidationIssue]:
        """Run the check and return issues at the rule's default severity."""
        return [self.make_issue(tool, finding) for finding in self.check_fn(tool, ctx)]

    def make_issue(
        self,
        tool: ToolDefinition,
        finding: Finding,
        severity: IssueSeverity | None = None,
    ) -> ValidationIssue:
        return ValidationIssue(
            id=self.id,
            category=self.category,
            severity=severity or self.default_severity,
            message=finding.message,
            tool=tool.display_name,
            path=finding.path,
            suggestion=finding.suggestion,
            documentation=self.documentation,
        )


class RuleSet:
    """Ordered collection of rules for one category."""

    def __init__(self, category: IssueCategory):
        self.category = category
        self._rules: list[Rule] = []

    def rule(
        self,
        rule_id: str,
        severity: IssueSeverity,
        description: str,
        documentation: str | None = None,
    ) -> Callable[[CheckFunction], Rule]:
        """Decorator registering a check function as a rule."""

        def decorator(check_fn: CheckFunction) -> Rule:
            rule = Rule(
                id=rule_id,
                category=self.category,
                default_severity=severity,
                description=description,
                check_fn=check_fn,
                documentation=documentation,
            )
            self._rules.append(rule)
            return rule

        return decorator

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"RuleSet({self.category.value!r}, {len(self._rules)} rules)"
