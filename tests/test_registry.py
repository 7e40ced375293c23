"""Tests for the rule registry and rule abstraction."""

import pytest

from mcp_validator.core.config import DEFAULT_RULE_IDS
from mcp_validator.core.registry import DEFAULT_PROVIDERS, RuleRegistry, get_registry
from mcp_validator.rules import Finding, Rule, RuleContext, RuleSet, RuleSetting
from mcp_validator.schema import IssueCategory, IssueSeverity, ToolDefinition


def _rule_set(category=IssueCategory.SCHEMA, ids=("SCH-901", "SCH-902")) -> RuleSet:
    rule_set = RuleSet(category)
    for rule_id in ids:
        @rule_set.rule(rule_id, IssueSeverity.WARNING, f"Test rule {rule_id}")
        def check(tool, ctx):
            yield Finding("found", path="name")
    return rule_set


class TestRule:
    """Tests for Rule and RuleSet."""

    def test_rule_set_decorator_builds_rules(self):
        """Test that decorated checks become rules in declaration order."""
        rule_set = _rule_set()
        assert [rule.id for rule in rule_set] == ["SCH-901", "SCH-902"]
        assert len(rule_set) == 2
        assert all(rule.category == IssueCategory.SCHEMA for rule in rule_set)

    def test_invalid_rule_id_rejected(self):
        """Test that rule ids must match PREFIX-NNN."""
        rule_set = RuleSet(IssueCategory.NAMING)
        with pytest.raises(ValueError):
            @rule_set.rule("nam-1", IssueSeverity.ERROR, "bad id")
            def check(tool, ctx):
                yield from ()

    def test_check_stamps_rule_metadata(self):
        """Test that findings become issues with the rule's metadata."""
        rule = next(iter(_rule_set()))
        tool = ToolDefinition(name="get-user")
        issues = rule.check(tool, RuleContext(all_tools=(tool,)))
        assert len(issues) == 1
        assert issues[0].id == "SCH-901"
        assert issues[0].severity == IssueSeverity.WARNING
        assert issues[0].tool == "get-user"
        assert issues[0].path == "name"


class TestRuleSetting:
    """Tests for resolving raw rule config values."""

    def test_from_value(self):
        """Test each raw value form."""
        assert RuleSetting.from_value(None) == RuleSetting()
        assert RuleSetting.from_value(True).enabled
        assert not RuleSetting.from_value(False).enabled
        assert RuleSetting.from_value("error").severity == IssueSeverity.ERROR
        assert RuleSetting.from_value(IssueSeverity.SUGGESTION).severity == IssueSeverity.SUGGESTION

    def test_effective_severity(self):
        """Test that an override wins over the default."""
        assert RuleSetting().effective_severity(IssueSeverity.ERROR) == IssueSeverity.ERROR
        setting = RuleSetting.from_value("warning")
        assert setting.effective_severity(IssueSeverity.ERROR) == IssueSeverity.WARNING

    def test_raw_round_trip(self):
        """Test converting a setting back to config form."""
        assert RuleSetting.from_value(False).raw is False
        assert RuleSetting.from_value(True).raw is True
        assert RuleSetting.from_value("error").raw == IssueSeverity.ERROR


class TestRuleRegistry:
    """Tests for RuleRegistry."""

    def test_default_registry_has_every_rule(self):
        """Test that all categories load in registration order."""
        registry = RuleRegistry()
        assert registry.all_ids() == list(DEFAULT_RULE_IDS)
        assert len(registry) == 46

    def test_category_order(self):
        """Test that categories register schema, naming, security, llm, best-practice."""
        categories = []
        for rule in RuleRegistry().all_rules():
            if rule.category not in categories:
                categories.append(rule.category)
        assert categories == [
            IssueCategory.SCHEMA,
            IssueCategory.NAMING,
            IssueCategory.SECURITY,
            IssueCategory.LLM_COMPATIBILITY,
            IssueCategory.BEST_PRACTICE,
        ]

    def test_lookup(self):
        """Test is_registered and load."""
        registry = RuleRegistry()
        assert registry.is_registered("SEC-001")
        assert "BP-009" in registry
        assert registry.load("SEC-001").default_severity == IssueSeverity.ERROR
        assert registry.load("XYZ-001") is None

    def test_rules_for_skips_disabled_and_absent(self):
        """Test selecting rules from a merged rule table."""
        registry = RuleRegistry()
        selected = registry.rules_for({"SCH-001": True, "SCH-002": False, "NAM-001": "warning", "FOO-001": True})
        assert [rule.id for rule in selected] == ["SCH-001", "NAM-001"]

    def test_failing_provider_is_skipped(self, caplog):
        """Test that a rule set that fails to load does not stop the others."""
        def broken():
            raise ImportError("boom")

        registry = RuleRegistry([broken, lambda: _rule_set()])
        assert registry.all_ids() == ["SCH-901", "SCH-902"]
        assert "Failed to load rule set" in caplog.text

    def test_duplicate_ids_keep_first(self):
        """Test that a duplicate rule id does not replace the first one."""
        first = _rule_set(ids=("SCH-901",))
        second = _rule_set(IssueCategory.NAMING, ids=("SCH-901",))
        registry = RuleRegistry([lambda: first, lambda: second])
        assert registry.load("SCH-901").category == IssueCategory.SCHEMA

    def test_default_providers_are_static(self):
        """Test that the provider list is a fixed tuple."""
        assert isinstance(DEFAULT_PROVIDERS, tuple)
        assert len(DEFAULT_PROVIDERS) == 5

    def test_global_registry_is_shared(self):
        """Test the process-wide registry."""
        assert get_registry() is get_registry()

    def test_every_rule_is_well_formed(self):
        """Test that every registered rule has metadata."""
        for rule in RuleRegistry().all_rules():
            assert isinstance(rule, Rule)
            assert rule.description
            assert rule.id.split("-")[0] in ("SCH", "NAM", "SEC", "LLM", "BP")
