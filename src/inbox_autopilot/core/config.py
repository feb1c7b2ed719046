"""Configuration management for Inbox Autopilot.

This module provides configuration models and loading functionality using Pydantic
for validation and type safety. Workflow definitions are plain declarative data
and live here alongside the engine settings that interpret them.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

_DOTENV_LOADED = False


def _load_env_once() -> None:
    """Load environment variables from a .env file exactly once."""

    global _DOTENV_LOADED
    if not _DOTENV_LOADED:
        load_dotenv()
        _DOTENV_LOADED = True


def _expand_env_vars(data: Any) -> Any:
    """Recursively expand environment variables in configuration data."""

    if isinstance(data, str):
        return os.path.expandvars(data)
    if isinstance(data, dict):
        return {key: _expand_env_vars(value) for key, value in data.items()}
    if isinstance(data, list):
        return [_expand_env_vars(item) for item in data]
    return data


# ----------------------------------------------------------------------
# Workflow definitions
# ----------------------------------------------------------------------
class Trigger(BaseModel):
    """Declarative condition set deciding whether a workflow applies to a message."""

    model_config = ConfigDict(frozen=True)

    keywords: tuple[str, ...] = Field(
        default=(), description="Keywords matched case-insensitively in subject, body and tags"
    )
    categories: tuple[str, ...] = Field(
        default=(), description="Categories compared against message tags"
    )
    auto_detect: bool = Field(
        default=True,
        description="Whether the workflow may be matched automatically (False = manual only)",
    )


class ActionSpec(BaseModel):
    """One typed unit of work in a workflow.

    ``type`` is kept as the raw authored value. It is resolved against
    :class:`~inbox_autopilot.core.models.ActionType` when the action runs, so
    an unknown value never prevents a workflow from loading.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default="", description="Action identifier within the workflow")
    type: str = Field(default="custom", description="Action type tag")
    summary: str = Field(..., description="Short action summary")
    details: str = Field(default="", description="Longer action detail text")

    @field_validator("type", mode="before")
    @classmethod
    def _stringify_type(cls, value: Any) -> str:
        # Enum members and other scalars are stored by their value
        if value is None:
            return ""
        return str(getattr(value, "value", value))


class WorkflowDefinition(BaseModel):
    """Named automation rule: a trigger plus an ordered sequence of actions."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Unique workflow identifier")
    name: str = Field(..., description="Human-readable workflow name")
    description: str = Field(default="", description="What the workflow does")
    trigger: Trigger = Field(default_factory=Trigger, description="Trigger configuration")
    actions: tuple[ActionSpec, ...] = Field(
        default=(), description="Actions executed, in order, when the workflow matches"
    )
    autopilot: bool = Field(
        default=True, description="Whether the workflow may run without human confirmation"
    )
    sla_minutes: int = Field(default=30, ge=0, description="Service-level agreement in minutes")
    success_metric: str = Field(default="", description="How success is measured")
    playbook_highlights: tuple[str, ...] = Field(
        default=(), description="Highlight strings for display"
    )


# ----------------------------------------------------------------------
# Engine settings
# ----------------------------------------------------------------------
class LoggingConfig(BaseModel):
    """Configuration for logging."""

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format",
    )
    log_file: str | None = Field(default=None, description="Log file path")
    max_bytes: int = Field(default=10485760, description="Max log file size (10MB)")
    backup_count: int = Field(default=5, description="Number of backup files")

    @field_validator("level")
    @classmethod
    def validate_level(cls, value: str) -> str:
        level = value.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Invalid log level: {value}")
        return level


class EngineConfig(BaseModel):
    """Settings interpreted by the automation engine."""

    operator_address: str = Field(
        default="whatsapp:+15550000000",
        description="Destination for notify_whatsapp confirmations (the operator, not the sender)",
    )
    category_bonus: int = Field(
        default=1, ge=0, description="Score bonus when a trigger category equals a message tag"
    )
    runtime_min_seconds: float = Field(
        default=0.8, gt=0.0, description="Lower bound of simulated action runtime"
    )
    runtime_max_seconds: float = Field(
        default=4.2, gt=0.0, description="Upper bound of simulated action runtime"
    )
    seed: int | None = Field(
        default=None, description="Seed for simulated runtimes (None = nondeterministic)"
    )
    velocity_window: int = Field(
        default=5, ge=1, description="Number of recent results used for the velocity metric"
    )
    notification_template: str = Field(
        default='Autopilot update for "$subject": $summary. $details',
        description="string.Template used for notification bodies",
    )

    @model_validator(mode="after")
    def check_runtime_bounds(self) -> EngineConfig:
        if self.runtime_max_seconds < self.runtime_min_seconds:
            raise ValueError("runtime_max_seconds must be >= runtime_min_seconds")
        return self


class DeskConfig(BaseModel):
    """Limits for the caller-owned automation desk."""

    history_limit: int = Field(default=15, ge=1, description="Processed results kept")
    log_limit: int = Field(default=40, ge=1, description="Action log entries kept")
    notification_limit: int = Field(default=20, ge=1, description="Notifications kept")
    max_workers: int = Field(default=4, ge=1, description="Worker pool size for batch runs")


class AutopilotConfig(BaseSettings):
    """Main configuration for Inbox Autopilot."""

    model_config = SettingsConfigDict(
        env_prefix="INBOX_AUTOPILOT_",
        env_nested_delimiter="__",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
    engine: EngineConfig = Field(default_factory=EngineConfig, description="Engine settings")
    desk: DeskConfig = Field(default_factory=DeskConfig, description="Desk limits")
    workflows: list[WorkflowDefinition] = Field(
        default_factory=list, description="Workflow definitions in registry order"
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Let INBOX_AUTOPILOT_* variables override values read from config files.

        Sources are deep-merged, so an override replaces a single nested field
        and keeps the rest of its section.
        """
        return env_settings, dotenv_settings, init_settings, file_secret_settings

    @model_validator(mode="after")
    def ensure_unique_workflows(self) -> AutopilotConfig:
        seen: set[str] = set()
        for workflow in self.workflows:
            if workflow.id in seen:
                raise ValueError(f"Duplicate workflow id: {workflow.id}")
            seen.add(workflow.id)
        return self

    @classmethod
    def from_yaml(cls, path: str | Path) -> AutopilotConfig:
        """Load configuration from a YAML file."""

        _load_env_once()
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, encoding="utf-8") as handle:
            try:
                config_data = yaml.safe_load(handle)
            except yaml.YAMLError as exc:
                raise ValueError(f"Invalid YAML in config file: {exc}") from exc

        if not config_data:
            config_data = {}

        config_data = _expand_env_vars(config_data)
        return cls(**config_data)

    @classmethod
    def from_json(cls, path: str | Path) -> AutopilotConfig:
        """Load configuration from a JSON file."""

        _load_env_once()
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, encoding="utf-8") as handle:
            try:
                config_data = json.load(handle)
            except json.JSONDecodeError as exc:
                raise ValueError(f"Invalid JSON in config file: {exc}") from exc

        config_data = _expand_env_vars(config_data)
        return cls(**config_data)

    @classmethod
    def load(cls, path: str | Path) -> AutopilotConfig:
        """Load configuration, choosing the parser from the file suffix."""

        if Path(path).suffix.lower() == ".json":
            return cls.from_json(path)
        return cls.from_yaml(path)

    def get_workflow(self, workflow_id: str) -> WorkflowDefinition | None:
        """Get a workflow definition by id."""

        for workflow in self.workflows:
            if workflow.id == workflow_id:
                return workflow
        return None

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary."""

        return self.model_dump(mode="json")
