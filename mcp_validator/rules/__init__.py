from .base import (
    Finding,
    Rule,
    RuleContext,
    RuleSet,
    RuleSetting,
    RULE_ID_PATTERN,
)

__all__ = [
    "Finding",
    "Rule",
    "RuleContext",
    "RuleSet",
    "RuleSetting",
    "RULE_ID_PATTERN",
]
