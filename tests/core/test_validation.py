"""Tests for configuration validation helpers."""

import json

import yaml

from inbox_autopilot.core import AutopilotConfig
from inbox_autopilot.core.validation import (
    generate_json_schema,
    lint_workflows,
    validate_config_dict,
    validate_yaml_config,
)


class TestSchema:
    """Tests for generate_json_schema."""

    def test_schema_lists_sections(self):
        schema = generate_json_schema()
        assert {"logging", "engine", "desk", "workflows"} <= set(schema["properties"])

    def test_schema_written_to_file(self, tmp_path):
        output = tmp_path / "schema" / "config.schema.json"
        generate_json_schema(output)
        assert json.loads(output.read_text(encoding="utf-8"))["title"] == "AutopilotConfig"


class TestValidateConfig:
    """Tests for dictionary and YAML validation."""

    def test_valid_dict(self):
        assert validate_config_dict({"engine": {"category_bonus": 2}}) == (True, [])

    def test_invalid_dict_reports_location(self):
        ok, errors = validate_config_dict({"engine": {"category_bonus": -1}})
        assert not ok
        assert errors[0].startswith("engine -> category_bonus")

    def test_yaml_missing_file(self, tmp_path):
        ok, errors = validate_yaml_config(tmp_path / "nope.yaml")
        assert not ok
        assert "not found" in errors[0]

    def test_yaml_syntax_error(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("workflows: [", encoding="utf-8")
        ok, errors = validate_yaml_config(path)
        assert not ok
        assert errors[0].startswith("Invalid YAML syntax")

    def test_yaml_must_be_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        assert validate_yaml_config(path) == (False, ["Top-level configuration must be a mapping"])

    def test_yaml_expands_env_vars_like_loader(self, tmp_path, monkeypatch):
        """Test that ${VAR} in a typed field validates the same way it loads."""
        monkeypatch.setenv("AUTOPILOT_TEST_SEED", "7")
        path = tmp_path / "seeded.yaml"
        path.write_text("engine:\n  seed: ${AUTOPILOT_TEST_SEED}\n", encoding="utf-8")

        assert validate_yaml_config(path) == (True, [])
        assert AutopilotConfig.load(path).engine.seed == 7

    def test_valid_yaml(self, tmp_path):
        path = tmp_path / "ok.yaml"
        path.write_text(
            yaml.safe_dump({"workflows": [{"id": "a", "name": "A"}]}), encoding="utf-8"
        )
        assert validate_yaml_config(path) == (True, [])


class TestLint:
    """Tests for lint_workflows."""

    def test_warnings(self):
        config = AutopilotConfig(
            workflows=[
                {"id": "silent", "name": "Silent", "trigger": {"keywords": [" "]}},
                {
                    "id": "manual",
                    "name": "Manual",
                    "trigger": {"auto_detect": False},
                    "actions": [{"summary": "Do it"}],
                },
                {
                    "id": "fine",
                    "name": "Fine",
                    "trigger": {"keywords": ["ok"]},
                    "actions": [{"summary": "Do it"}],
                },
            ]
        )
        assert lint_workflows(config) == [
            "silent: auto-detect is on but no keywords are set",
            "silent: no actions defined",
        ]
