"""Tests for configuration resolution, rule overrides and config discovery."""

import json

import pytest

from mcp_validator.core.config import (
    DEFAULT_RULES,
    LoadedConfig,
    default_config,
    load_config,
    parse_rule_overrides,
    resolve_config,
)
from mcp_validator.errors import ConfigError
from mcp_validator.schema import IssueSeverity, LLMProvider, OutputFormat


class TestDefaultConfig:
    """Tests for default_config."""

    def test_every_rule_enabled(self):
        """Test that defaults enable every rule."""
        config = default_config()
        assert config.rules == dict(DEFAULT_RULES)
        assert all(value is True for value in config.rules.values())

    def test_default_output(self):
        """Test default output options."""
        output = default_config().output
        assert output.format == OutputFormat.HUMAN
        assert output.verbose is False
        assert output.color is True

    def test_no_llm_by_default(self):
        """Test that LLM analysis is never defaulted in."""
        assert default_config().llm is None

    def test_fresh_value_each_call(self):
        """Test that defaults are built fresh."""
        assert default_config() is not default_config()


class TestResolveConfig:
    """Tests for resolve_config."""

    def test_rules_merge_key_by_key(self):
        """Test that user rule entries overwrite only their own keys."""
        config = resolve_config(default_config(), {"rules": {"LLM-004": False, "NAM-005": "error"}})
        assert config.rules["LLM-004"] is False
        assert config.rules["NAM-005"] == IssueSeverity.ERROR
        assert config.rules["SCH-001"] is True
        assert len(config.rules) == len(DEFAULT_RULES)

    def test_output_merge(self):
        """Test that output options merge shallowly."""
        config = resolve_config(default_config(), {"output": {"format": "sarif"}})
        assert config.output.format == OutputFormat.SARIF
        assert config.output.color is True

    def test_llm_only_when_supplied(self):
        """Test that the llm section comes from overrides only."""
        without = resolve_config(default_config(), {"rules": {}})
        with_llm = resolve_config(default_config(), {"llm": {"enabled": True, "provider": "ollama"}})
        assert without.llm is None
        assert with_llm.llm.enabled is True
        assert with_llm.llm.provider == LLMProvider.OLLAMA

    def test_defaults_not_mutated(self):
        """Test that resolution returns a new config."""
        defaults = default_config()
        resolve_config(defaults, {"rules": {"SCH-001": False}})
        assert defaults.rules["SCH-001"] is True

    def test_unknown_rule_ids_kept_but_inert(self):
        """Test that unknown rule ids are accepted."""
        config = resolve_config(default_config(), {"rules": {"XYZ-001": False}})
        assert config.rules["XYZ-001"] is False

    def test_invalid_values_raise_config_error(self):
        """Test that invalid values are reported as ConfigError."""
        with pytest.raises(ConfigError):
            resolve_config(default_config(), {"rules": {"SCH-001": "fatal"}})
        with pytest.raises(ConfigError):
            resolve_config(default_config(), {"output": {"format": "pdf"}})

    def test_non_mapping_section_raises(self):
        """Test that a section must be a mapping."""
        with pytest.raises(ConfigError):
            resolve_config(default_config(), {"rules": ["SCH-001"]})

    def test_empty_overrides_return_defaults(self):
        """Test that nothing to merge returns the defaults unchanged."""
        defaults = default_config()
        assert resolve_config(defaults, {}) is defaults
        assert resolve_config(defaults, None) is defaults


class TestParseRuleOverrides:
    """Tests for the RULE-ID=value mini-language."""

    def test_values(self):
        """Test each accepted value."""
        overrides = parse_rule_overrides([
            "SCH-001=off",
            "SCH-002=false",
            "SCH-003=on",
            "SCH-004=true",
            "NAM-001=error",
            "NAM-002=warning",
            "NAM-003=suggestion",
        ])
        assert overrides == {
            "SCH-001": False,
            "SCH-002": False,
            "SCH-003": True,
            "SCH-004": True,
            "NAM-001": IssueSeverity.ERROR,
            "NAM-002": IssueSeverity.WARNING,
            "NAM-003": IssueSeverity.SUGGESTION,
        }

    def test_values_are_case_insensitive(self):
        """Test that values are lowercased before matching."""
        assert parse_rule_overrides(["LLM-004=OFF", "NAM-005=Error"]) == {
            "LLM-004": False,
            "NAM-005": IssueSeverity.ERROR,
        }

    def test_invalid_tokens_dropped(self):
        """Test that malformed tokens are silently ignored."""
        assert parse_rule_overrides(["LLM-004", "=off", "LLM-004=", "LLM-004=fatal"]) == {}

    def test_later_tokens_win(self):
        """Test that a repeated rule id keeps the last valid value."""
        assert parse_rule_overrides(["LLM-004=off", "LLM-004=bogus", "LLM-004=on"]) == {"LLM-004": True}


class TestLoadConfig:
    """Tests for load_config."""

    def test_explicit_yaml(self, tmp_path):
        """Test loading an explicit YAML config file."""
        path = tmp_path / "custom.yaml"
        path.write_text("rules:\n  LLM-004: false\n  NAM-005: error\noutput:\n  format: json\n")
        loaded = load_config(path)
        assert isinstance(loaded, LoadedConfig)
        assert loaded.filepath == str(path)
        assert loaded.config.rules["LLM-004"] is False
        assert loaded.config.rules["NAM-005"] == IssueSeverity.ERROR
        assert loaded.config.output.format == OutputFormat.JSON

    def test_explicit_json(self, tmp_path):
        """Test loading an explicit JSON config file."""
        path = tmp_path / "custom.json"
        path.write_text(json.dumps({"rules": {"SEC-001": "warning"}}))
        assert load_config(path).config.rules["SEC-001"] == IssueSeverity.WARNING

    def test_explicit_missing_raises(self, tmp_path):
        """Test that an explicit path must exist."""
        with pytest.raises(ConfigError):
            load_config(tmp_path / "nope.yaml")

    def test_explicit_unparseable_raises(self, tmp_path):
        """Test that an explicit path must parse."""
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_explicit_invalid_values_raise(self, tmp_path):
        """Test that an explicit config with bad values fails."""
        path = tmp_path / "bad.yaml"
        path.write_text("rules:\n  SCH-001: fatal\n")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_explicit_non_mapping_raises(self, tmp_path):
        """Test that config content must be a mapping."""
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_explicit_invalid_utf8_raises(self, tmp_path):
        """Test that an explicit file that is not UTF-8 fails with ConfigError."""
        path = tmp_path / "bad.yaml"
        path.write_bytes(b"rules:\n  LLM-001: \xff\xfe\n")
        with pytest.raises(ConfigError, match="Cannot read config file"):
            load_config(path)

    def test_discovery_finds_config(self, tmp_path):
        """Test implicit discovery in a directory."""
        (tmp_path / "mcp-validate.config.yaml").write_text("rules:\n  LLM-005: false\n")
        loaded = load_config(search_dir=tmp_path)
        assert loaded.filepath.endswith("mcp-validate.config.yaml")
        assert loaded.config.rules["LLM-005"] is False

    def test_discovery_order(self, tmp_path):
        """Test that earlier search places win."""
        (tmp_path / ".mcp-validaterc").write_text('{"rules": {"LLM-005": "error"}}')
        (tmp_path / "mcp-validate.config.json").write_text('{"rules": {"LLM-005": false}}')
        loaded = load_config(search_dir=tmp_path)
        assert loaded.filepath.endswith("mcp-validate.config.json")

    def test_discovery_rc_file(self, tmp_path):
        """Test that an extensionless rc file is read as YAML or JSON."""
        (tmp_path / ".mcp-validaterc").write_text("rules:\n  NAM-005: suggestion\n")
        loaded = load_config(search_dir=tmp_path)
        assert loaded.config.rules["NAM-005"] == IssueSeverity.SUGGESTION

    def test_discovery_pyproject(self, tmp_path):
        """Test reading [tool.mcp-validate] from pyproject.toml."""
        (tmp_path / "pyproject.toml").write_text(
            '[project]\nname = "demo"\n\n[tool.mcp-validate.rules]\n"LLM-004" = false\n'
        )
        loaded = load_config(search_dir=tmp_path)
        assert loaded.filepath.endswith("pyproject.toml")
        assert loaded.config.rules["LLM-004"] is False

    def test_discovery_pyproject_without_section(self, tmp_path):
        """Test that a pyproject.toml without the table is skipped."""
        (tmp_path / "pyproject.toml").write_text('[project]\nname = "demo"\n')
        loaded = load_config(search_dir=tmp_path)
        assert loaded.filepath is None
        assert loaded.config == default_config()

    def test_discovery_nothing_found(self, tmp_path):
        """Test that an empty directory yields defaults."""
        loaded = load_config(search_dir=tmp_path)
        assert loaded.filepath is None
        assert loaded.config == default_config()

    def test_discovery_failure_falls_back(self, tmp_path):
        """Test that an unusable discovered file yields defaults."""
        (tmp_path / "mcp-validate.config.yaml").write_text("rules: [unclosed\n")
        loaded = load_config(search_dir=tmp_path)
        assert loaded.filepath is None
        assert loaded.config == default_config()

    def test_discovery_invalid_utf8_falls_back(self, tmp_path):
        """Test that a discovered file that is not UTF-8 yields defaults."""
        (tmp_path / ".mcp-validaterc").write_bytes(b"rules:\n  LLM-001: \xff\xfe\n")
        loaded = load_config(search_dir=tmp_path)
        assert loaded.filepath is None
        assert loaded.config == default_config()

    def test_discovery_pyproject_non_table_tool_falls_back(self, tmp_path):
        """Test that a pyproject.toml whose tool key is not a table yields defaults."""
        (tmp_path / "pyproject.toml").write_text("tool = 5\n")
        loaded = load_config(search_dir=tmp_path)
        assert loaded.filepath is None
        assert loaded.config == default_config()

    def test_discovery_uses_cwd(self, tmp_path, monkeypatch):
        """Test that discovery defaults to the working directory."""
        (tmp_path / ".mcp-validaterc.json").write_text('{"output": {"color": false}}')
        monkeypatch.chdir(tmp_path)
        assert load_config().config.output.color is False
