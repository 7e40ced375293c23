"""
Execution engine and aggregator.

execute_rules runs every enabled rule against every tool and collects
raw issues in a deterministic order: tools in input order, rules in
registration order, findings in emission order. aggregate turns those
per-tool lists into the public result shapes and the maturity score.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Iterable, Mapping, Sequence

from mcp_validator.rules.base import Rule, RuleContext, RuleSetting
from mcp_validator.schema import (
    IssueSeverity,
    MaturityLevel,
    RuleConfigValue,
    ToolDefinition,
    ToolValidationResult,
    ValidationIssue,
    ValidationSummary,
)
from mcp_validator.schema.validation import empty_category_counts, empty_severity_counts


logger = logging.getLogger(__name__)

# Per-issue deductions from a tool's score of 100
SEVERITY_PENALTIES = {
    IssueSeverity.ERROR: 5,
    IssueSeverity.WARNING: 2,
    IssueSeverity.SUGGESTION: 1,
}

# Lower bounds, checked top-down
MATURITY_THRESHOLDS = (
    (91, MaturityLevel.EXEMPLARY),
    (71, MaturityLevel.MATURE),
    (41, MaturityLevel.MODERATE),
)


@dataclass
class ToolRuleResults:
    """Raw issues collected for one tool."""
    tool: ToolDefinition
    issues: list[ValidationIssue] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not any(issue.severity == IssueSeverity.ERROR for issue in self.issues)


def _failure_issue(rule: Rule, tool: ToolDefinition, error: Exception, setting: RuleSetting) -> ValidationIssue:
    return ValidationIssue(
        id=rule.id,
        category=rule.category,
        severity=setting.effective_severity(IssueSeverity.WARNING),
        message=f"Rule {rule.id} failed while checking this tool: {error}",
        tool=tool.display_name,
        documentation=rule.documentation,
    )


def _resolve_setting(rule: Rule, value) -> RuleSetting:
    try:
        return RuleSetting.from_value(value)
    except ValueError:
        logger.warning("Ignoring invalid setting %r for rule %s; using its default", value, rule.id)
        return RuleSetting()


def execute_rules(
    tools: Sequence[ToolDefinition],
    rules: Iterable[Rule],
    rule_config: Mapping[str, RuleConfigValue],
) -> list[ToolRuleResults]:
    """
    Run rules against tools.

    Every issue a rule produces gets the rule's effective severity: the
    configured override when there is one, else the rule's default. A rule
    that raises is recorded as a single issue for that tool and the run
    continues. An unrecognized config value leaves the rule at its default.
    """
    all_tools = tuple(tools)
    rules = list(rules)
    settings = {rule.id: _resolve_setting(rule, rule_config.get(rule.id)) for rule in rules}

    results = []
    for tool in all_tools:
        tool_results = ToolRuleResults(tool)
        for rule in rules:
            setting = settings[rule.id]
            if not setting.enabled:
                continue

            ctx = RuleContext(all_tools=all_tools, rule_config=setting.raw)
            try:
                issues = rule.check(tool, ctx)
            except Exception as e:
                logger.exception("Rule %s raised while checking tool %s", rule.id, tool.display_name)
                tool_results.issues.append(_failure_issue(rule, tool, e, setting))
                continue

            severity = setting.effective_severity(rule.default_severity)
            tool_results.issues.extend(
                issue if issue.severity == severity else issue.model_copy(update={"severity": severity})
                for issue in issues
            )
        results.append(tool_results)

    return results


def flatten_issues(results: Iterable[ToolRuleResults | ToolValidationResult]) -> list[ValidationIssue]:
    """Concatenate per-tool issue lists in tool order."""
    return [issue for result in results for issue in result.issues]


def tool_score(issues: Iterable[ValidationIssue]) -> int:
    """Score a single tool: 100 minus a penalty per issue, floored at 0."""
    penalty = sum(SEVERITY_PENALTIES[issue.severity] for issue in issues)
    return max(0, 100 - penalty)


def calculate_maturity(results: Sequence[ToolRuleResults | ToolValidationResult]) -> int:
    """Mean per-tool score rounded half-up; 100 when there are no tools."""
    if not results:
        return 100
    mean = sum(tool_score(result.issues) for result in results) / len(results)
    return int(math.floor(mean + 0.5))


def maturity_level(score: int) -> MaturityLevel:
    for threshold, level in MATURITY_THRESHOLDS:
        if score >= threshold:
            return level
    return MaturityLevel.IMMATURE


def build_summary(results: Sequence[ToolRuleResults]) -> ValidationSummary:
    """Count issues by category and severity and score the tool set."""
    by_category = empty_category_counts()
    by_severity = empty_severity_counts()
    for issue in flatten_issues(results):
        by_category[issue.category] += 1
        by_severity[issue.severity] += 1

    score = calculate_maturity(results)
    return ValidationSummary(
        total_tools=len(results),
        valid_tools=sum(1 for result in results if result.valid),
        issues_by_category=by_category,
        issues_by_severity=by_severity,
        maturity_score=score,
        maturity_level=maturity_level(score),
    )


def aggregate(results: Sequence[ToolRuleResults]) -> tuple[list[ToolValidationResult], ValidationSummary]:
    """Build per-tool results and the summary from raw engine output."""
    tool_results = [
        ToolValidationResult(
            name=result.tool.display_name,
            valid=result.valid,
            issues=list(result.issues),
            tool=result.tool,
        )
        for result in results
    ]
    return tool_results, build_summary(results)
