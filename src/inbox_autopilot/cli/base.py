"""Base utilities and shared imports for CLI module."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any

import yaml
from rich.console import Console

from ..automation import default_workflows
from ..core import AutopilotConfig, get_logger, setup_logging

logger = get_logger("cli")

console = Console()


def load_config(path: str | None) -> AutopilotConfig:
    """Load a config file, or fall back to the built-in sample workflows.

    Raises:
        FileNotFoundError: If an explicit path does not exist
    """
    if path is None:
        return AutopilotConfig(workflows=default_workflows())
    return AutopilotConfig.load(path)


def load_document(path: str | Path) -> Any:
    """Read a YAML or JSON document (JSON is valid YAML)."""
    doc_path = Path(path)
    if not doc_path.exists():
        raise FileNotFoundError(f"File not found: {doc_path}")
    with open(doc_path, encoding="utf-8") as handle:
        try:
            return yaml.safe_load(handle)
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML/JSON in {doc_path}: {exc}") from exc


def configure_logging(config: AutopilotConfig, args: argparse.Namespace) -> None:
    logging_config = config.logging
    if getattr(args, "debug", False):
        logging_config = logging_config.model_copy(update={"level": "DEBUG"})
    setup_logging(logging_config)


__all__ = [
    "AutopilotConfig",
    "console",
    "configure_logging",
    "load_config",
    "load_document",
    "logger",
]
