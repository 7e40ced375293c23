"""
Rule registry.

The registry is a static table of rule id -> Rule, built on first use from
an explicit, ordered list of rule-set providers (one per category). Each
provider imports its category module; a provider that fails to load is
logged and its rules are treated as absent.
"""

import logging
from typing import Callable, Iterable, Mapping

from mcp_validator.rules.base import Rule, RuleSet, RuleSetting


logger = logging.getLogger(__name__)

RuleSetProvider = Callable[[], RuleSet]


def _schema_rules() -> RuleSet:
    from mcp_validator.rules.schema_rules import schema_rules
    return schema_rules


def _naming_rules() -> RuleSet:
    from mcp_validator.rules.naming import naming_rules
    return naming_rules


def _security_rules() -> RuleSet:
    from mcp_validator.rules.security import security_rules
    return security_rules


def _llm_rules() -> RuleSet:
    from mcp_validator.rules.llm_compatibility import llm_rules
    return llm_rules


def _best_practice_rules() -> RuleSet:
    from mcp_validator.rules.best_practice import best_practice_rules
    return best_practice_rules


# Registration order: categories in this order, rules in declaration order
DEFAULT_PROVIDERS: tuple[RuleSetProvider, ...] = (
    _schema_rules,
    _naming_rules,
    _security_rules,
    _llm_rules,
    _best_practice_rules,
)


class RuleRegistry:
    """Lookup table of registered rules in registration order."""

    def __init__(self, providers: Iterable[RuleSetProvider] = DEFAULT_PROVIDERS):
        self._providers = tuple(providers)
        self._rules: dict[str, Rule] | None = None

    def _load(self) -> dict[str, Rule]:
        if self._rules is not None:
            return self._rules

        rules: dict[str, Rule] = {}
        for provider in self._providers:
            try:
                rule_set = provider()
            except Exception as e:
                logger.warning("Failed to load rule set from %s: %s", getattr(provider, "__name__", provider), e)
                continue
            for rule in rule_set:
                if rule.id in rules:
                    logger.warning("Duplicate rule id %s ignored", rule.id)
                    continue
                rules[rule.id] = rule

        logger.debug("Loaded %d rules", len(rules))
        self._rules = rules
        return rules

    def is_registered(self, rule_id: str) -> bool:
        return rule_id in self._load()

    def load(self, rule_id: str) -> Rule | None:
        """Get a rule by id; unknown ids return None."""
        return self._load().get(rule_id)

    def all_ids(self) -> list[str]:
        return list(self._load())

    def all_rules(self) -> list[Rule]:
        return list(self._load().values())

    def rules_for(self, rule_config: Mapping[str, object]) -> list[Rule]:
        """
        Rules to run for a merged rule table, in registration order.

        A rule runs when its id is in the table and not set to False. Ids in
        the table that are not registered are ignored.
        """
        registered = self._load()
        for rule_id in rule_config:
            if rule_id not in registered:
                logger.debug("Ignoring unknown rule id in config: %s", rule_id)

        return [
            rule
            for rule_id, rule in registered.items()
            if rule_id in rule_config and RuleSetting.from_value(rule_config[rule_id]).enabled
        ]

    def __len__(self) -> int:
        return len(self._load())

    def __contains__(self, rule_id: str) -> bool:
        return self.is_registered(rule_id)


_registry: RuleRegistry | None = None


def get_registry() -> RuleRegistry:
    """Get the process-wide registry."""
    global _registry
    if _registry is None:
        _registry = RuleRegistry()
    return _registry
