"""Helpers for loading analyser configuration from TOML/JSON sources.

This module provides a single entry point `load_config` that accepts
various configuration sources:

* None -> default AnalyserConfig
* dict -> AnalyserConfig.from_dict
* Path / path-like string -> load .toml/.json from filesystem
* Inline JSON/TOML strings
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError

from licenseanalyzer.config.schema import AnalyserConfig
from licenseanalyzer.core.errors import ConfigurationError

logger = logging.getLogger("licenseanalyzer.config.loader")

ConfigSource = Union[str, Path, Dict[str, Any], None]


def parse_toml(text: str) -> Dict[str, Any]:
    """Parse TOML text into a dict.

    Uses stdlib tomllib on Python 3.11+ and the `tomli` package on older
    interpreters.
    """
    try:
        import tomllib  # type: ignore[attr-defined]
    except ImportError:  # pragma: no cover - Python <3.11 path
        import tomli as tomllib  # type: ignore[import-not-found,no-redef]
    return tomllib.loads(text)


def load_config(source: ConfigSource) -> AnalyserConfig:
    """Load AnalyserConfig from various configuration sources.

    Args:
        source: One of:
            * None: returns AnalyserConfig.default()
            * dict: treated as already-parsed configuration mapping
            * str/Path: either a filesystem path to a .toml/.json file,
              or an inline TOML/JSON string (auto-detected)

    Returns:
        AnalyserConfig instance.

    Raises:
        ConfigurationError: If the source cannot be parsed or validated.
    """
    if source is None:
        logger.debug("No config source provided; using default AnalyserConfig")
        return AnalyserConfig.default()

    if isinstance(source, dict):
        logger.debug("Loading AnalyserConfig from provided dict")
        return _validate(source)

    if not isinstance(source, (str, Path)):
        raise TypeError(f"Unsupported config source type: {type(source)!r}")

    text: Optional[str] = None
    path = Path(source)
    try:
        is_file = path.is_file()
    except (OSError, ValueError):
        # Long inline strings are not valid paths on every platform.
        is_file = False

    if is_file:
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigurationError(f"Cannot read configuration {path}: {exc}") from exc
        suffix = path.suffix.lower()
        if suffix in {".toml", ".tml"}:
            fmt = "toml"
        elif suffix == ".json":
            fmt = "json"
        else:
            fmt = "json" if text.lstrip().startswith(("{", "[")) else "toml"
        logger.info("Loading configuration from file: %s (fmt=%s)", path, fmt)
    else:
        text = str(source)
        fmt = "json" if text.lstrip().startswith(("{", "[")) else "toml"
        logger.info("Loading configuration from inline %s string", fmt)

    try:
        data = json.loads(text) if fmt == "json" else parse_toml(text)
    except ValueError as exc:
        raise ConfigurationError(f"Malformed {fmt} configuration: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigurationError("Top-level configuration must be a mapping/dict")

    return _validate(data)


def _validate(data: Dict[str, Any]) -> AnalyserConfig:
    try:
        return AnalyserConfig.from_dict(data)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration: {exc}") from exc


__all__ = ["load_config", "parse_toml", "ConfigSource"]
