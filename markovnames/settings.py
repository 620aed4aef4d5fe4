#!/usr/bin/env python3
"""
Settings Loader
===============
Reads configs/app.yaml once and serves values by dotted path.

Usage:
    from markovnames.settings import get_setting

    get_setting("model.context_length")       # 2
    get_setting("stats.top", 10)
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any
import os

import yaml

PACKAGE_DIR = Path(__file__).resolve().parent
CONFIG_DIR = PACKAGE_DIR / "configs"
APP_CONFIG_PATH = CONFIG_DIR / "app.yaml"


@lru_cache(maxsize=1)
def load_app_config() -> dict:
    if not APP_CONFIG_PATH.exists():
        raise FileNotFoundError(f"Missing app config: {APP_CONFIG_PATH}")
    data = yaml.safe_load(APP_CONFIG_PATH.read_text())
    return data or {}


def get_setting(path: str, default: Any = None) -> Any:
    """Get nested setting by dotted path."""
    current: Any = load_app_config()
    for part in path.split('.'):
        if not isinstance(current, dict) or part not in current:
            return default
        current = current[part]
    return current


def resolve_path(value: str, base: Path | None = None) -> Path:
    """Resolve a corpus or data path; relative paths are taken from the package directory."""
    if value is None:
        raise ValueError("path value is required")
    path = Path(os.path.expanduser(str(value)))
    if not path.is_absolute():
        path = ((base or PACKAGE_DIR) / path).resolve()
    return path


__all__ = [
    "load_app_config",
    "get_setting",
    "resolve_path",
    "PACKAGE_DIR",
    "APP_CONFIG_PATH",
]
