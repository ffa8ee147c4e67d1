"""
Default file names and environment-driven settings for env-mage.

Environment:
    ENVMAGE_BACKUP=0 disables backups by default for init and sync
    ENVMAGE_SCAN_EXTENSIONS=.ts,.js overrides the scanned file extensions
    ENVMAGE_SCAN_EXCLUDE=node_modules,vendor overrides the pruned names
"""

import os
from typing import List

ENV_FILE = ".env"
ENV_EXAMPLE_FILE = ".env.example"
EXAMPLE_SUFFIX = ".example"
TYPES_FILE = "env.types.ts"
JSON_FILE = ".env.json"
BACKUP_SUFFIX = ".backup"

SCAN_PATH = "."
SCAN_EXTENSIONS = [".ts", ".tsx", ".js", ".jsx"]
SCAN_EXCLUDE = ["node_modules", ".git", "dist", "build", ".next"]


def env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() not in {"0", "false", "no", "off", ""}


def env_list(name: str, default: List[str]) -> List[str]:
    value = os.getenv(name)
    if value is None:
        return list(default)
    return split_list(value)


def split_list(value: str) -> List[str]:
    """Split a comma-separated option value, dropping empty items."""
    return [item.strip() for item in value.split(",") if item.strip()]


def default_backup() -> bool:
    return env_bool("ENVMAGE_BACKUP", True)


def default_scan_extensions() -> List[str]:
    return env_list("ENVMAGE_SCAN_EXTENSIONS", SCAN_EXTENSIONS)


def default_scan_exclude() -> List[str]:
    return env_list("ENVMAGE_SCAN_EXCLUDE", SCAN_EXCLUDE)
