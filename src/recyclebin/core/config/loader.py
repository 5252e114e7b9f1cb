"""
Configuration loading with layered overrides.

Implements the precedence chain:
    defaults < bin config file < env vars

The config file holds ``key=value`` lines. Blank lines and ``#`` comments are
skipped. Unknown keys, lines without ``=`` and invalid values are ignored
with a logged warning; a bad config never stops the bin from working.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from recyclebin.core.bin.errors import MalformedConfigError
from recyclebin.core.bin.layout import BinLayout

from .models import DEFAULT_MAX_SIZE_MB, DEFAULT_RETENTION_DAYS, BinConfig

logger = logging.getLogger(__name__)

# Config file key -> BinConfig field
CONFIG_KEYS = {
    "MAX_SIZE_MB": "max_size_mb",
    "RETENTION_DAYS": "retention_days",
}

# Environment variable -> BinConfig field
ENV_OVERRIDES = {
    "RECYCLEBIN_MAX_SIZE_MB": "max_size_mb",
    "RECYCLEBIN_RETENTION_DAYS": "retention_days",
}


def get_default_config() -> dict[str, Any]:
    """Hardcoded defaults, matching the config file a fresh bin is created with."""
    return {
        "max_size_mb": DEFAULT_MAX_SIZE_MB,
        "retention_days": DEFAULT_RETENTION_DAYS,
    }


def _parse_non_negative_int(raw: str) -> int:
    value = int(raw.strip())
    if value < 0:
        raise ValueError(f"must be >= 0, got {value}")
    return value


def parse_config_line(line_num: int, line: str) -> tuple[str, int] | None:
    """
    Parse one line of the config file.

    Args:
        line_num: 1-based line number (for error messages)
        line: Raw line text

    Returns:
        (field name, value), or None for blank and comment lines

    Raises:
        MalformedConfigError: If the line is not a recognized ``key=value``
    """
    stripped = line.strip()
    if not stripped or stripped.startswith("#"):
        return None

    key, sep, raw_value = stripped.partition("=")
    if not sep:
        raise MalformedConfigError(line_num, line, "expected key=value")

    key = key.strip()
    field = CONFIG_KEYS.get(key)
    if field is None:
        raise MalformedConfigError(line_num, line, f"unrecognized key '{key}'")

    try:
        value = _parse_non_negative_int(raw_value)
    except ValueError as e:
        raise MalformedConfigError(
            line_num, line, f"invalid integer for {key}: {raw_value.strip()!r}"
        ) from e

    return field, value


def load_config_file(path: Path) -> tuple[dict[str, Any], list[str]]:
    """
    Read a bin config file.

    Returns:
        (parsed values, warnings for ignored lines). A missing file yields
        no values and no warnings.
    """
    values: dict[str, Any] = {}
    warnings: list[str] = []

    if not path.exists():
        return values, warnings

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        message = f"Failed to read config at {path}: {e}"
        logger.warning(message)
        return values, [message]

    for line_num, line in enumerate(text.splitlines(), start=1):
        try:
            parsed = parse_config_line(line_num, line)
        except MalformedConfigError as e:
            message = f"Ignoring config {e}"
            logger.warning("%s in %s", message, path)
            warnings.append(message)
            continue
        if parsed is not None:
            field, value = parsed
            values[field] = value

    return values, warnings


def apply_env_overrides(
    config_dict: dict[str, Any],
    environ: Mapping[str, str] | None = None,
) -> tuple[dict[str, Any], list[str]]:
    """
    Apply environment variable overrides.

    Supported env vars:
        RECYCLEBIN_MAX_SIZE_MB - overrides MAX_SIZE_MB
        RECYCLEBIN_RETENTION_DAYS - overrides RETENTION_DAYS

    Returns:
        (updated values, warnings for ignored variables)
    """
    if environ is None:
        environ = os.environ

    result = config_dict.copy()
    warnings: list[str] = []

    for env_name, field in ENV_OVERRIDES.items():
        raw = environ.get(env_name)
        if not raw:
            continue
        try:
            result[field] = _parse_non_negative_int(raw)
        except ValueError:
            message = f"Invalid {env_name} value '{raw}', ignoring"
            logger.warning(message)
            warnings.append(message)

    return result, warnings


def load_config(
    layout: BinLayout,
    environ: Mapping[str, str] | None = None,
) -> BinConfig:
    """
    Load configuration for the bin at ``layout.root``.

    Args:
        layout: Bin whose ``config`` file is read
        environ: Environment to read overrides from (defaults to os.environ)

    Returns:
        Validated BinConfig

    Example:
        >>> config = load_config(BinLayout(Path("/tmp/bin")))
        >>> config.max_size_mb
        1024
    """
    merged = get_default_config()

    file_values, warnings = load_config_file(layout.config_file)
    merged.update(file_values)

    merged, env_warnings = apply_env_overrides(merged, environ)
    warnings.extend(env_warnings)

    return BinConfig(root=layout.root, warnings=warnings, **merged)
