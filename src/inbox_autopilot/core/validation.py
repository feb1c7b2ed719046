"""Configuration validation utilities and JSON schema generation."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .config import AutopilotConfig, _expand_env_vars, _load_env_once
from .logger import get_logger

logger = get_logger("validation")


def _format_errors(exc: ValidationError) -> list[str]:
    errors = []
    for error in exc.errors():
        loc = " -> ".join(str(x) for x in error["loc"])
        errors.append(f"{loc}: {error['msg']}")
    return errors


def generate_json_schema(output_path: str | Path | None = None) -> dict[str, Any]:
    """Generate JSON schema for AutopilotConfig.

    Args:
        output_path: Optional path to save the schema to

    Returns:
        JSON schema dictionary
    """
    schema = AutopilotConfig.model_json_schema()

    if output_path:
        output_file = Path(output_path)
        output_file.parent.mkdir(parents=True, exist_ok=True)
        with open(output_file, "w", encoding="utf-8") as f:
            json.dump(schema, f, indent=2)
        logger.info("JSON schema saved to %s", output_file)

    return schema


def validate_config_dict(config_data: dict[str, Any]) -> tuple[bool, list[str]]:
    """Validate a configuration dictionary.

    Returns:
        Tuple of (is_valid, list_of_errors)
    """
    try:
        AutopilotConfig(**config_data)
        return True, []
    except ValidationError as e:
        return False, _format_errors(e)


def validate_yaml_config(config_path: str | Path) -> tuple[bool, list[str]]:
    """Validate a YAML configuration file.

    Args:
        config_path: Path to the YAML configuration file

    Returns:
        Tuple of (is_valid, list_of_errors)

    Example:
        ```python
        is_valid, errors = validate_yaml_config("config.yaml")
        if not is_valid:
            for error in errors:
                print(f"Error: {error}")
        ```
    """
    _load_env_once()
    config_file = Path(config_path)
    if not config_file.exists():
        return False, [f"Configuration file not found: {config_path}"]

    try:
        with open(config_file, encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        return False, [f"Invalid YAML syntax: {e}"]

    if yaml_data is None:
        yaml_data = {}
    if not isinstance(yaml_data, dict):
        return False, ["Top-level configuration must be a mapping"]

    # Same ${VAR} expansion as AutopilotConfig.from_yaml
    return validate_config_dict(_expand_env_vars(yaml_data))


def lint_workflows(config: AutopilotConfig) -> list[str]:
    """Return warnings for workflows that load but can never do useful work."""

    warnings: list[str] = []
    for workflow in config.workflows:
        keywords = [k for k in workflow.trigger.keywords if k.strip()]
        if workflow.trigger.auto_detect and not keywords:
            warnings.append(f"{workflow.id}: auto-detect is on but no keywords are set")
        if not workflow.actions:
            warnings.append(f"{workflow.id}: no actions defined")
    return warnings
