from __future__ import annotations

import json
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

"""Config loader.

Responsibilities:
- Load YAML config (config/editor.yml by default)
- Validate it against config_schema.json (unknown keys rejected)
- Apply defaults for optional keys
- Apply environment overrides (THROUGHPUT_DATASET_PATH / THROUGHPUT_OUTPUT_PATH),
  which are typically provided through a .env file
"""

__all__ = [
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "EditorConfig",
    "apply_env_overrides",
    "load_config",
]

SCHEMA_PATH = Path(__file__).parent / "config_schema.json"
DEFAULT_CONFIG_PATH = Path("config/editor.yml")

ENV_DATASET_PATH = "THROUGHPUT_DATASET_PATH"
ENV_OUTPUT_PATH = "THROUGHPUT_OUTPUT_PATH"


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class EditorConfig:
    dataset_path: str = "./data/keystone-throughput-and-capacity.csv"
    output_path: str = "./data/updated_dataset.csv"
    list_style: str = "full"  # full | detailed | basic
    color: str = "auto"  # auto | always | never
    error_log_dir: str = "./logs"


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: The schema file is missing or invalid, or the data
            violates it (missing required keys, wrong types, unknown keys)
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def load_config(path: Path) -> EditorConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping: {path}")

    _validate_config_schema(data)

    defaults = EditorConfig()
    return EditorConfig(
        dataset_path=data["dataset_path"],
        output_path=data.get("output_path", defaults.output_path),
        list_style=data.get("list_style", defaults.list_style),
        color=data.get("color", defaults.color),
        error_log_dir=data.get("error_log_dir", defaults.error_log_dir),
    )


def apply_env_overrides(cfg: EditorConfig) -> EditorConfig:
    """Return ``cfg`` with dataset/output paths taken from the environment when set."""
    dataset = os.getenv(ENV_DATASET_PATH)
    output = os.getenv(ENV_OUTPUT_PATH)
    if dataset:
        cfg = replace(cfg, dataset_path=dataset)
    if output:
        cfg = replace(cfg, output_path=output)
    return cfg
