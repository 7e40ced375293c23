"""Tests for the schema module."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from mcp_validator.schema import (
    IssueCategory,
    IssueSeverity,
    LLMConfig,
    MaturityLevel,
    OutputFormat,
    SourceType,
    ToolAnnotations,
    ToolDefinition,
    ToolSource,
    ToolValidationResult,
    ValidationIssue,
    ValidationMetadata,
    ValidationResult,
    ValidationSummary,
    ValidatorConfig,
)


class TestToolDefinition:
    """Tests for ToolDefinition model."""

    def test_create_from_wire_keys(self):
        """Test building a tool from camelCase JSON keys."""
        tool = ToolDefinition.model_validate({
            "name": "get-user",
            "description": "Gets a user",
            "inputSchema": {"type": "object", "properties": {}},
            "annotations": {"readOnlyHint": True, "title": "Get user"},
        })
        assert tool.name == "get-user"
        assert tool.input_schema == {"type": "object", "properties": {}}
        assert tool.annotations.read_only_hint is True
        assert tool.annotations.title == "Get user"
        assert tool.source.type == SourceType.INLINE

    def test_absent_and_empty_description_differ(self):
        """Test that a missing description is None and an empty one is ''."""
        missing = ToolDefinition(name="a")
        empty = ToolDefinition(name="a", description="")
        assert missing.description is None
        assert empty.description == ""

    def test_display_name_fallback(self):
        """Test display name for unnamed tools."""
        assert ToolDefinition(name="").display_name == "(unnamed)"
        assert ToolDefinition(name="list-files").display_name == "list-files"

    def test_get_properties_handles_bad_schema(self):
        """Test property access on missing or malformed schemas."""
        assert ToolDefinition(name="a").get_properties() == {}
        assert ToolDefinition(name="a", input_schema="nope").get_properties() == {}
        assert ToolDefinition(name="a", input_schema={"properties": []}).get_properties() == {}

    def test_get_parameters_skips_non_mapping_schemas(self):
        """Test that only mapping parameter schemas are returned."""
        tool = ToolDefinition(
            name="a",
            input_schema={"type": "object", "properties": {"ok": {"type": "string"}, "bad": True}},
        )
        assert tool.get_parameters() == [("ok", {"type": "string"})]

    def test_tool_is_frozen(self):
        """Test that tool definitions cannot be mutated."""
        tool = ToolDefinition(name="a")
        with pytest.raises(ValidationError):
            tool.name = "b"

    def test_get_raw_field(self):
        """Test reading fields from the raw payload."""
        tool = ToolDefinition(
            name="a",
            source=ToolSource(type=SourceType.FILE, location="t.json", raw={"outputSchema": {"type": "object"}}),
        )
        assert tool.get_raw_field("outputSchema") == {"type": "object"}
        assert tool.get_raw_field("missing", "x") == "x"

    def test_annotations_keep_unknown_hints(self):
        """Test that unknown annotation keys are preserved."""
        annotations = ToolAnnotations.model_validate({"customHint": 1})
        assert annotations.model_extra == {"customHint": 1}


class TestValidationModels:
    """Tests for validation result models."""

    def _result(self) -> ValidationResult:
        tool = ToolDefinition(name="get-user", description="Gets a user", input_schema={"type": "object"})
        issue = ValidationIssue(
            id="SCH-006",
            category=IssueCategory.SCHEMA,
            severity=IssueSeverity.WARNING,
            message="inputSchema is missing \"properties\" field",
            tool="get-user",
            path="inputSchema.properties",
        )
        return ValidationResult(
            valid=True,
            summary=ValidationSummary(total_tools=1, valid_tools=1),
            issues=[issue],
            tools=[ToolValidationResult(name="get-user", valid=True, issues=[issue], tool=tool)],
            metadata=ValidationMetadata(
                validator_version="0.1.0",
                mcp_spec_version="2025-11-25",
                timestamp=datetime(2025, 1, 1, tzinfo=timezone.utc),
                duration=1.5,
            ),
        )

    def test_summary_tables_have_every_key(self):
        """Test that the count tables are pre-seeded."""
        summary = ValidationSummary()
        assert set(summary.issues_by_category) == set(IssueCategory)
        assert set(summary.issues_by_severity) == set(IssueSeverity)
        assert all(count == 0 for count in summary.issues_by_category.values())

    def test_to_dict_uses_camel_case(self):
        """Test the public JSON shape."""
        data = self._result().to_dict()
        assert data["summary"]["totalTools"] == 1
        assert data["summary"]["issuesByCategory"]["llm-compatibility"] == 0
        assert data["summary"]["issuesBySeverity"]["warning"] == 0
        assert data["metadata"]["mcpSpecVersion"] == "2025-11-25"
        assert data["metadata"]["llmAnalysisUsed"] is False
        assert data["tools"][0]["tool"]["inputSchema"] == {"type": "object"}
        assert "llmAnalysis" not in data

    def test_get_issues_filters(self):
        """Test filtering issues by rule id and severity."""
        result = self._result()
        assert len(result.get_issues(rule_id="SCH-006")) == 1
        assert result.get_issues(severity=IssueSeverity.ERROR) == []

    def test_get_tool(self):
        """Test per-tool lookup by name."""
        result = self._result()
        assert result.get_tool("get-user").valid
        assert result.get_tool("missing") is None

    def test_tool_result_count(self):
        """Test counting issues per severity."""
        tool_result = self._result().tools[0]
        assert tool_result.count(IssueSeverity.WARNING) == 1
        assert tool_result.count(IssueSeverity.ERROR) == 0

    def test_maturity_descriptions(self):
        """Test that every maturity level has a description."""
        assert MaturityLevel.EXEMPLARY.description == "Optimized for advanced multi-tool agents"
        assert all(level.description for level in MaturityLevel)


class TestValidatorConfig:
    """Tests for ValidatorConfig model."""

    def test_rule_values(self):
        """Test that rule values accept booleans and severities."""
        config = ValidatorConfig.model_validate({"rules": {"SCH-001": False, "NAM-005": "error"}})
        assert config.rules["SCH-001"] is False
        assert config.rules["NAM-005"] == IssueSeverity.ERROR

    def test_invalid_rule_value_rejected(self):
        """Test that unknown severities are rejected."""
        with pytest.raises(ValidationError):
            ValidatorConfig.model_validate({"rules": {"SCH-001": "fatal"}})

    def test_unknown_output_key_rejected(self):
        """Test that unknown output keys are rejected."""
        with pytest.raises(ValidationError):
            ValidatorConfig.model_validate({"output": {"colour": True}})

    def test_llm_accepts_camel_case(self):
        """Test LLM config keys from config files."""
        config = ValidatorConfig.model_validate({"llm": {"enabled": True, "apiKey": "sk-1", "baseUrl": "http://x"}})
        assert config.llm.api_key == "sk-1"
        assert config.llm.base_url == "http://x"

    def test_to_dict_masks_api_key(self):
        """Test that the API key is hidden when displayed."""
        config = ValidatorConfig(llm=LLMConfig(enabled=True, api_key="sk-secret"))
        data = config.to_dict()
        assert data["llm"]["apiKey"] == "***"
        assert data["output"]["format"] == OutputFormat.HUMAN.value

    def test_config_is_frozen(self):
        """Test that resolved configs are immutable."""
        config = ValidatorConfig()
        with pytest.raises(ValidationError):
            config.llm = LLMConfig()
