"""screenref configuration — settings merge and match document decoding.

Settings merge order (later wins):
    1. Model defaults
    2. YAML file values
    3. Environment variables (SCREENREF_ prefix, __ nested delimiter)
    4. Overrides dict

Match documents are JSON or YAML mappings holding ``sources`` and
``references``.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from screenref.core.exceptions import ConfigError, ConfigLoadError, ConfigParseError
from screenref.core.models import MatchDocument, MatcherSettings

DEFAULT_SETTINGS_FILENAME = "screenref.yaml"
_ENV_PREFIX = "SCREENREF_"


def load_settings(
    settings_path: Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> MatcherSettings:
    """Load MatcherSettings from YAML + env vars + overrides.

    Args:
        settings_path: Path to a YAML settings file. Missing files are ignored.
        overrides: Values merged on top (e.g. CLI flags).

    Returns:
        Validated MatcherSettings instance.

    Raises:
        ConfigError: If YAML parsing or validation fails.
    """
    yaml_data: dict[str, Any] = {}
    if settings_path is not None and settings_path.exists():
        yaml_data = _load_yaml(settings_path)

    merged = _deep_merge(yaml_data, _collect_env_vars())
    if overrides:
        merged = _deep_merge(merged, overrides)

    try:
        return MatcherSettings(**merged)
    except ValidationError as e:
        msg = f"Settings validation failed: {e}"
        raise ConfigError(msg) from e


def load_document(
    raw: bytes | str,
    strict_geometry: bool = True,
) -> MatchDocument:
    """Decode a JSON or YAML match document.

    Raises:
        ConfigParseError: If the document is malformed.
    """
    try:
        text = raw.decode("utf-8") if isinstance(raw, bytes) else raw
    except UnicodeDecodeError as e:
        msg = f"Match document is not UTF-8 text: {e}"
        raise ConfigParseError(msg) from e
    data = _parse_text(text)
    if not isinstance(data, dict):
        msg = f"Match document must be a mapping, got {type(data).__name__}"
        raise ConfigParseError(msg)

    try:
        return MatchDocument.model_validate(
            data,
            context={"strict_geometry": strict_geometry},
        )
    except ValidationError as e:
        msg = f"Match document validation failed: {e}"
        raise ConfigParseError(msg) from e


def read_document(path: Path, strict_geometry: bool = True) -> MatchDocument:
    """Read and decode a match document from disk.

    Raises:
        ConfigLoadError: If the file cannot be read.
        ConfigParseError: If the document is malformed.
    """
    try:
        raw = path.read_bytes()
    except OSError as e:
        msg = f"Failed to read match document: {path}: {e}"
        raise ConfigLoadError(msg) from e
    return load_document(raw, strict_geometry=strict_geometry)


def _parse_text(text: str) -> Any:
    """Parse JSON first, then YAML."""
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        msg = f"Failed to parse match document: {e}"
        raise ConfigParseError(msg) from e


def _load_yaml(path: Path) -> dict[str, Any]:
    """Load and parse a YAML settings file."""
    try:
        with open(path, encoding="utf-8") as f:  # noqa: PTH123
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        msg = f"Failed to parse YAML: {path}: {e}"
        raise ConfigError(msg) from e
    except OSError as e:
        msg = f"Failed to read settings: {path}: {e}"
        raise ConfigError(msg) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        msg = f"Settings file must be a YAML mapping, got {type(data).__name__}: {path}"
        raise ConfigError(msg)
    return data


def _collect_env_vars() -> dict[str, Any]:
    """Collect SCREENREF_ prefixed env vars into a nested dict."""
    delimiter = "__"
    result: dict[str, Any] = {}

    for key, value in os.environ.items():
        if not key.startswith(_ENV_PREFIX):
            continue
        parts = key[len(_ENV_PREFIX) :].lower().split(delimiter)
        current = result
        for part in parts[:-1]:
            if part not in current or not isinstance(current[part], dict):
                current[part] = {}
            current = current[part]
        current[parts[-1]] = value

    return result


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge override into base. Override wins on conflicts."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result
