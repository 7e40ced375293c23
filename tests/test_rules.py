"""Tests for the built-in validation rules."""

from mcp_validator.rules.base import RuleContext
from mcp_validator.rules.best_practice import (
    check_complex_examples,
    check_destructive_hint,
    check_output_schema,
    check_parameter_count,
)
from mcp_validator.rules.llm_compatibility import (
    check_constraints_documented,
    check_description_examples,
    check_description_what,
    check_description_when,
    check_family_consistency,
    check_param_description,
    check_param_description_length,
    check_side_effects_mentioned,
    check_workflow_guidance,
    name_suggests_side_effects,
    tool_prefix,
)
from mcp_validator.rules.naming import (
    check_descriptive_verb,
    check_kebab_case,
    check_leading_digit,
    check_parameter_casing,
    detect_casing,
    to_camel_case,
    to_kebab_case,
)
from mcp_validator.rules.schema_rules import (
    check_description_present,
    check_input_schema_object,
    check_input_schema_valid,
    check_properties_defined,
    check_required_exist,
    check_required_listed,
)
from mcp_validator.rules.security import (
    check_additional_properties,
    check_array_max_items,
    check_code_documented,
    check_number_bounds,
    check_path_pattern,
    check_sensitive_defaults,
    check_sensitive_names,
    check_string_max_length,
    check_url_format,
)
from mcp_validator.schema import IssueSeverity, ToolAnnotations, ToolDefinition, ToolSource


def params(**properties) -> dict:
    return {"type": "object", "properties": properties}


def make_tool(name="get-weather", description="Gets the weather", schema=None, **kwargs) -> ToolDefinition:
    return ToolDefinition(
        name=name,
        description=description,
        input_schema=schema if schema is not None else params(),
        **kwargs,
    )


def run(rule, tool, *others):
    return rule.check(tool, RuleContext(all_tools=(tool, *others)))


class TestSchemaRules:
    """Tests for SCH rules."""

    def test_missing_description_only(self):
        """Test that SCH-002 fires for an absent description but not an empty one."""
        assert len(run(check_description_present, ToolDefinition(name="get-x", input_schema=params()))) == 1
        assert run(check_description_present, make_tool(description="")) == []

    def test_unknown_type(self):
        """Test that an unknown nested type is reported at its path."""
        issues = run(check_input_schema_valid, make_tool(schema=params(city={"type": "strng"})))
        assert len(issues) == 1
        assert issues[0].path == "inputSchema.properties.city.type"
        assert "unknown type 'strng'" in issues[0].message
        assert issues[0].message.startswith("inputSchema is not valid JSON Schema:")

    def test_malformed_keywords(self):
        """Test malformed count and pattern keywords."""
        schema = params(city={"type": "string", "maxLength": -1, "pattern": "("})
        issues = run(check_input_schema_valid, make_tool(schema=schema))
        assert {issue.path for issue in issues} == {
            "inputSchema.properties.city.maxLength",
            "inputSchema.properties.city.pattern",
        }

    def test_valid_schema(self):
        """Test that a well-formed schema has no problems."""
        schema = params(
            city={"type": "string", "maxLength": 10, "pattern": "^[A-Z]"},
            tags={"type": "array", "items": {"type": "string"}, "maxItems": 3},
            flag=True,
            choice={"oneOf": [{"type": "string"}, {"type": "null"}]},
        )
        assert run(check_input_schema_valid, make_tool(schema=schema)) == []

    def test_empty_combinator(self):
        """Test that an empty anyOf is reported."""
        issues = run(check_input_schema_valid, make_tool(schema=params(v={"anyOf": []})))
        assert "anyOf must be a non-empty array" in issues[0].message

    def test_type_must_be_object(self):
        """Test SCH-005 messages for wrong and missing types."""
        wrong = run(check_input_schema_object, make_tool(schema={"type": "array"}))
        missing = run(check_input_schema_object, make_tool(schema={"properties": {}}))
        assert wrong[0].message == 'inputSchema.type is "array" but must be "object"'
        assert 'missing required "type"' in missing[0].message
        assert run(check_input_schema_object, ToolDefinition(name="get-x")) == []

    def test_properties_defined(self):
        """Test SCH-006 for missing and empty properties."""
        missing = run(check_properties_defined, make_tool(schema={"type": "object"}))
        empty = run(check_properties_defined, make_tool(schema=params()))
        assert missing[0].message == 'inputSchema is missing "properties" field'
        assert "is empty" in empty[0].message

    def test_required_listed(self):
        """Test SCH-007 for absent and non-array required."""
        absent = run(check_required_listed, make_tool(schema=params(city={"type": "string"})))
        not_array = run(
            check_required_listed,
            make_tool(schema=dict(params(city={"type": "string"}), required="city")),
        )
        assert len(absent) == 1
        assert not_array[0].message == "inputSchema.required is not an array"
        assert run(check_required_listed, make_tool(schema=params())) == []

    def test_required_exist(self):
        """Test SCH-008 for undefined and non-string required entries."""
        schema = dict(params(city={"type": "string"}), required=["city", "country", 1])
        issues = run(check_required_exist, make_tool(schema=schema))
        assert len(issues) == 2
        assert issues[0].message == 'Required parameter "country" is not defined in properties'
        assert "non-string value: 1" in issues[1].message


class TestNamingRules:
    """Tests for NAM rules and naming helpers."""

    def test_case_conversion(self):
        """Test kebab and camel conversions."""
        assert to_kebab_case("getUserProfile") == "get-user-profile"
        assert to_kebab_case("GetUserProfile") == "get-user-profile"
        assert to_kebab_case("get_user__profile") == "get-user-profile"
        assert to_camel_case("user_id") == "userId"
        assert to_camel_case("page-size") == "pageSize"

    def test_detect_casing(self):
        """Test casing classification."""
        assert detect_casing("userId") == "camelCase"
        assert detect_casing("limit") == "camelCase"
        assert detect_casing("user_id") == "snake_case"
        assert detect_casing("user-id") == "kebab-case"
        assert detect_casing("UserId") == "PascalCase"
        assert detect_casing("USER_ID") == "SCREAMING_CASE"
        assert detect_casing("_private") == "other"

    def test_kebab_case_suggestion(self):
        """Test NAM-002 suggests the converted name."""
        issues = run(check_kebab_case, make_tool(name="getUser"))
        assert len(issues) == 1
        assert issues[0].suggestion == 'Use kebab-case format: "get-user"'
        assert run(check_kebab_case, make_tool(name="get-user")) == []
        assert run(check_kebab_case, make_tool(name="")) == []

    def test_leading_digit(self):
        """Test NAM-004."""
        assert len(run(check_leading_digit, make_tool(name="3d-render"))) == 1
        assert run(check_leading_digit, make_tool(name="render-3d")) == []

    def test_descriptive_verb(self):
        """Test NAM-005 looks at the first name segment."""
        assert len(run(check_descriptive_verb, make_tool(name="user-get"))) == 1
        assert run(check_descriptive_verb, make_tool(name="get-user")) == []

    def test_mixed_parameter_casing(self):
        """Test NAM-006 names the odd parameter out."""
        schema = params(userId={}, user_name={}, limit={})
        issues = run(check_parameter_casing, make_tool(schema=schema))
        assert len(issues) == 1
        assert "Inconsistent: user_name" in issues[0].suggestion

    def test_consistent_snake_case(self):
        """Test NAM-006 still recommends camelCase for consistent snake_case."""
        issues = run(check_parameter_casing, make_tool(schema=params(user_id={}, page_size={})))
        assert len(issues) == 1
        assert issues[0].message == "Parameter names should use camelCase (current: snake_case)"
        assert "user_id -> userId" in issues[0].suggestion

    def test_consistent_camel_case(self):
        """Test NAM-006 is quiet for camelCase parameters."""
        assert run(check_parameter_casing, make_tool(schema=params(userId={}, pageSize={}))) == []


class TestSecurityRules:
    """Tests for SEC rules."""

    def test_string_max_length(self):
        """Test SEC-001 with the content-field exemption."""
        schema = params(username={"type": "string"}, content={"type": "string"}, query={"type": "string"})
        issues = run(check_string_max_length, make_tool(schema=schema))
        assert [issue.path for issue in issues] == ["inputSchema.properties.username"]

    def test_array_and_number_bounds(self):
        """Test SEC-002 and SEC-003."""
        schema = params(
            tags={"type": "array"},
            ids={"type": "array", "maxItems": 5},
            count={"type": "integer"},
            ratio={"type": "number", "maximum": 1},
        )
        tool = make_tool(schema=schema)
        assert [i.path for i in run(check_array_max_items, tool)] == ["inputSchema.properties.tags"]
        assert [i.path for i in run(check_number_bounds, tool)] == ["inputSchema.properties.count"]

    def test_path_pattern(self):
        """Test SEC-004 for file path parameters."""
        tool = make_tool(schema=params(filePath={"type": "string"}, outputDir={"type": "string", "pattern": "^/tmp"}))
        issues = run(check_path_pattern, tool)
        assert len(issues) == 1
        assert "'filePath'" in issues[0].message

    def test_url_format(self):
        """Test SEC-005 for URL parameters."""
        tool = make_tool(schema=params(callbackUrl={"type": "string"}, homepage={"type": "string"}))
        assert len(run(check_url_format, tool)) == 1
        ok = make_tool(schema=params(callbackUrl={"type": "string", "format": "uri"}))
        assert run(check_url_format, ok) == []

    def test_sensitive_parameters(self):
        """Test SEC-007 and SEC-008."""
        tool = make_tool(schema=params(apiKey={"type": "string", "default": "abc"}, password={"type": "string"}))
        assert len(run(check_sensitive_names, tool)) == 2
        defaults = run(check_sensitive_defaults, tool)
        assert len(defaults) == 1
        assert defaults[0].message == "Security-sensitive parameter 'apiKey' has a default value"

    def test_additional_properties(self):
        """Test SEC-009 only fires when additional properties are allowed."""
        schema = params(
            open={"type": "object"},
            explicit={"type": "object", "additionalProperties": True},
            closed={"type": "object", "additionalProperties": False},
            typed={"type": "object", "additionalProperties": {"type": "string"}},
        )
        issues = run(check_additional_properties, make_tool(schema=schema))
        assert [i.path for i in issues] == ["inputSchema.properties.open", "inputSchema.properties.explicit"]

    def test_code_parameters(self):
        """Test SEC-010 requires a warning in the description."""
        bare = make_tool(schema=params(script={"type": "string", "description": "Runs the script"}))
        documented = make_tool(
            schema=params(script={"type": "string", "description": "Warning: executes untrusted code"})
        )
        assert len(run(check_code_documented, bare)) == 1
        assert run(check_code_documented, documented) == []


class TestLLMCompatibilityRules:
    """Tests for LLM rules."""

    def test_action_verbs_are_whole_words(self):
        """Test LLM-003 does not match verbs inside other words."""
        assert len(run(check_description_what, make_tool(description="Budgets and targets overview"))) == 1
        assert run(check_description_what, make_tool(description="Gets the weather")) == []

    def test_when_to_use(self):
        """Test LLM-004."""
        assert len(run(check_description_when, make_tool(description="Gets the weather"))) == 1
        assert run(check_description_when, make_tool(description="Gets the weather. Use this when planning.")) == []

    def test_examples(self):
        """Test LLM-005."""
        assert len(run(check_description_examples, make_tool(description="Gets the weather"))) == 1
        assert run(check_description_examples, make_tool(description="Gets the weather, e.g. Paris")) == []
        assert run(check_description_examples, make_tool(description="Gets the weather for `city`")) == []

    def test_blank_description_skipped(self):
        """Test that description heuristics stay quiet when LLM-001 applies."""
        assert run(check_description_what, make_tool(description="  ")) == []
        assert run(check_description_when, make_tool(description=None)) == []

    def test_parameter_descriptions(self):
        """Test LLM-006 and LLM-007."""
        schema = params(
            city={"type": "string"},
            country={"type": "string", "description": "   "},
            unit={"type": "string", "description": "Unit"},
        )
        tool = make_tool(schema=schema)
        assert [i.path for i in run(check_param_description, tool)] == [
            "inputSchema.properties.city.description",
            "inputSchema.properties.country.description",
        ]
        short = run(check_param_description_length, tool)
        assert len(short) == 1
        assert "'unit' description is too short (4 characters" in short[0].message

    def test_constraints_documented(self):
        """Test LLM-009 names the undocumented constraint."""
        undocumented = make_tool(schema=params(city={"type": "string", "maxLength": 100, "description": "City to look up"}))
        documented = make_tool(
            schema=params(city={"type": "string", "maxLength": 100, "description": "City name, max 100 characters"})
        )
        issues = run(check_constraints_documented, undocumented)
        assert len(issues) == 1
        assert issues[0].message.endswith("maximum length")
        assert run(check_constraints_documented, documented) == []

    def test_side_effect_names(self):
        """Test the side-effect name heuristic."""
        assert name_suggests_side_effects("delete-file")
        assert name_suggests_side_effects("createUser")
        assert name_suggests_side_effects("user_update")
        assert not name_suggests_side_effects("get-user")

    def test_side_effects_mentioned(self):
        """Test LLM-011 for side-effect names and destructive annotations."""
        silent = make_tool(name="delete-file", description="Looks at a file.")
        honest = make_tool(name="delete-file", description="Deletes the file permanently.")
        flagged = make_tool(
            name="get-file",
            description="Gets a file by name.",
            annotations=ToolAnnotations(destructive_hint=True),
        )
        assert len(run(check_side_effects_mentioned, silent)) == 1
        assert run(check_side_effects_mentioned, honest) == []
        issues = run(check_side_effects_mentioned, flagged)
        assert len(issues) == 1
        assert "marked as destructive" in issues[0].message

    def test_tool_prefix(self):
        """Test tool family prefixes."""
        assert tool_prefix("user-create") == "user"
        assert tool_prefix("user_create") == "user"
        assert tool_prefix("userCreate") == "user"
        assert tool_prefix("UserCreate") == "User"
        assert tool_prefix("ping") is None

    def test_family_consistency(self):
        """Test LLM-012 compares a tool with same-prefix siblings."""
        create = make_tool(name="user-create", description="Creates a user. Use this when onboarding, e.g. new staff.")
        update = make_tool(name="user-update", description="Updates a user. Use this when details change, e.g. email.")
        odd = make_tool(name="user-remove", description="Gone.")

        issues = run(check_family_consistency, odd, create, update)
        assert len(issues) == 1
        assert "does not start with an action verb like related tools" in issues[0].message
        assert run(check_family_consistency, odd, create) == []

    def test_workflow_guidance(self):
        """Test LLM-013 accepts keywords and sibling tool names."""
        assert len(run(check_workflow_guidance, make_tool(description="Gets the weather."))) == 1
        assert run(check_workflow_guidance, make_tool(description="Gets the weather. Call geocode first.")) == []

        sibling = make_tool(name="lookup-city", description="Finds a city.")
        mentioning = make_tool(description="Gets the weather for a lookup-city result.")
        assert run(check_workflow_guidance, mentioning, sibling) == []


class TestBestPracticeRules:
    """Tests for BP rules."""

    def test_destructive_hint(self):
        """Test BP-003 only asks modifying tools."""
        assert len(run(check_destructive_hint, make_tool(name="delete-file"))) == 1
        hinted = make_tool(name="delete-file", annotations=ToolAnnotations(destructive_hint=False))
        assert run(check_destructive_hint, hinted) == []
        assert run(check_destructive_hint, make_tool(name="get-file")) == []

    def test_parameter_count(self):
        """Test BP-005 above ten parameters."""
        many = make_tool(schema=params(**{f"p{i}": {"type": "string"} for i in range(11)}))
        ten = make_tool(schema=params(**{f"p{i}": {"type": "string"} for i in range(10)}))
        issues = run(check_parameter_count, many)
        assert issues[0].message == "Tool has 11 parameters which exceeds the recommended limit of 10"
        assert issues[0].severity == IssueSeverity.WARNING
        assert run(check_parameter_count, ten) == []

    def test_complex_examples(self):
        """Test BP-008 for complex parameters."""
        schema = params(
            tags={"type": "array", "items": {"type": "string"}},
            filters={"type": "object", "examples": [{"a": 1}]},
            color={"enum": ["red", "green", "blue", "black"]},
            size={"enum": ["s", "m", "l"]},
            name={"type": "string"},
        )
        issues = run(check_complex_examples, make_tool(schema=schema))
        assert [i.path for i in issues] == ["inputSchema.properties.tags", "inputSchema.properties.color"]

    def test_output_schema_missing(self):
        """Test BP-009 when no outputSchema is present."""
        issues = run(check_output_schema, make_tool())
        assert len(issues) == 1
        assert issues[0].path == "outputSchema"

    def test_output_schema_partially_documented(self):
        """Test BP-009 counts undocumented output properties."""
        raw = {
            "outputSchema": {
                "type": "object",
                "description": "Current conditions",
                "properties": {
                    "temp": {"type": "number"},
                    "unit": {"type": "string", "description": "Unit of temp"},
                },
            }
        }
        issues = run(check_output_schema, make_tool(source=ToolSource(raw=raw)))
        assert [i.message for i in issues] == ["1 of 2 outputSchema properties are missing descriptions"]

    def test_output_schema_missing_type_and_description(self):
        """Test BP-009 on a bare outputSchema."""
        issues = run(check_output_schema, make_tool(source=ToolSource(raw={"outputSchema": {}})))
        assert [i.path for i in issues] == ["outputSchema.type", "outputSchema.description"]
