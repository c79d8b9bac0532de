"""Configuration for vestige-init. YAML-based with env var expansion and env var overlay."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


# --- Config Models ---


class ServiceConfig(BaseModel):
    name: str = "vestige"            # key written under each tool's server map
    binary: str = "vestige-mcp"
    extra_dirs: list[str] = Field(default_factory=list)  # searched after the built-in locations


class DelegateConfig(BaseModel):
    """Bounds for external registration commands (e.g. `claude mcp add`)."""
    timeout: float = 5.0


class WriteConfig(BaseModel):
    backup: bool = True  # copy <file> to <file>.bak before overwriting


class LoggingConfig(BaseModel):
    """Logging configuration."""
    format: str = "text"   # "text" or "json"
    level: str = "WARNING"


class Config(BaseModel):
    service: ServiceConfig = Field(default_factory=ServiceConfig)
    delegate: DelegateConfig = Field(default_factory=DelegateConfig)
    write: WriteConfig = Field(default_factory=WriteConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


# --- Helpers ---

_ENV_PATTERN = re.compile(r"\$\{(\w+)\}")
_ENV_PREFIX = "VESTIGE_INIT_"


def get_config_dir() -> Path:
    return Path.home() / ".vestige"


def get_config_path() -> Path:
    override = os.environ.get(f"{_ENV_PREFIX}CONFIG")
    if override:
        return _expand_path(override)
    return get_config_dir() / "init.yaml"


def _expand_env_vars(data: Any) -> Any:
    """Recursively expand ${VAR} in strings."""
    if isinstance(data, str):
        return _ENV_PATTERN.sub(lambda m: os.environ.get(m.group(1), m.group(0)), data)
    if isinstance(data, dict):
        return {k: _expand_env_vars(v) for k, v in data.items()}
    if isinstance(data, list):
        return [_expand_env_vars(v) for v in data]
    return data


def _expand_path(path: str) -> Path:
    """Expand ~ and env vars in path string."""
    return Path(os.path.expanduser(os.path.expandvars(path)))


# Mapping of VESTIGE_INIT_* env var suffixes to (section, field) tuples.
_ENV_VAR_MAP: dict[str, tuple[str, str]] = {
    "SERVICE_NAME": ("service", "name"),
    "SERVICE_BINARY": ("service", "binary"),
    "DELEGATE_TIMEOUT": ("delegate", "timeout"),
    "WRITE_BACKUP": ("write", "backup"),
    "LOG_FORMAT": ("logging", "format"),
    "LOG_LEVEL": ("logging", "level"),
}


def _get_section_models() -> dict[str, type[BaseModel]]:
    return {
        "service": ServiceConfig,
        "delegate": DelegateConfig,
        "write": WriteConfig,
        "logging": LoggingConfig,
    }


def _apply_env_overlay(data: dict[str, Any]) -> dict[str, Any]:
    """Apply VESTIGE_INIT_* environment variables on top of YAML data dict.

    Converts values to the correct type based on Pydantic field annotations.
    """
    section_models = _get_section_models()

    for env_suffix, (section, field) in _ENV_VAR_MAP.items():
        raw_val = os.environ.get(f"{_ENV_PREFIX}{env_suffix}")
        if raw_val is None:
            continue

        model_cls = section_models.get(section)
        target_type: type = str
        if model_cls is not None:
            field_info = model_cls.model_fields.get(field)
            if field_info is not None:
                ann = field_info.annotation
                if ann is int:
                    target_type = int
                elif ann is bool:
                    target_type = bool
                elif ann is float:
                    target_type = float

        try:
            if target_type is bool:
                typed_val: Any = raw_val.lower() in ("1", "true", "yes")
            else:
                typed_val = target_type(raw_val)
        except (ValueError, TypeError):
            typed_val = raw_val  # fall back to string; Pydantic will validate

        if section not in data or not isinstance(data[section], dict):
            data[section] = {}
        data[section][field] = typed_val

    return data


def load_config(path: Path | None = None) -> Config:
    """Load config from YAML, expanding env vars, then applying VESTIGE_INIT_* overlay."""
    config_path = path or get_config_path()
    if config_path.exists():
        with open(config_path) as f:
            raw = yaml.safe_load(f) or {}
        data = _expand_env_vars(raw)
    else:
        data = {}
    data = _apply_env_overlay(data)
    return Config(**data)


def get_config_value(config: Config, key_path: str) -> Any:
    """Get nested config value via dot notation (e.g. 'delegate.timeout')."""
    obj: Any = config
    for part in key_path.split("."):
        if isinstance(obj, BaseModel):
            obj = getattr(obj, part, None)
        elif isinstance(obj, dict):
            obj = obj.get(part)
        else:
            return None
    return obj


def set_config_value(key_path: str, value: str, path: Path | None = None) -> Config:
    """Set config value via dot notation, save, and return updated config.

    The merged result is validated before anything is written, so a bad value
    leaves the file untouched.
    """
    config_path = path or get_config_path()
    if config_path.exists():
        with open(config_path) as f:
            raw = yaml.safe_load(f) or {}
    else:
        raw = {}

    parts = key_path.split(".")
    obj = raw
    for part in parts[:-1]:
        if part not in obj or not isinstance(obj[part], dict):
            obj[part] = {}
        obj = obj[part]
    obj[parts[-1]] = value

    Config(**_expand_env_vars(raw))

    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "w") as f:
        yaml.dump(raw, f, default_flow_style=False, sort_keys=False)

    return load_config(config_path)
