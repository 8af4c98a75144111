"""
Configuration for the allowlist tooling.

Sources, later ones win:
    defaults
    JSON config file (--config, or ./.allowlist-merkle.json)
    .env file
    process environment

Environment Variables:
    ALLOWLIST_HASH          Hash function: keccak256 (default) or sha256
    ALLOWLIST_LEAF_ENCODING Leaf payload: packed (default) or padded
    ALLOWLIST_LOG_LEVEL     Log level (default: INFO)
    ALLOWLIST_LOG_FILE      Optional log file
    ALLOWLIST_OUTPUT        Export path (default: merkle_data.json)
"""
from __future__ import annotations

import hashlib
import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from dotenv import dotenv_values
from eth_utils import keccak

from .leaf import HashFn

ENV_PREFIX = "ALLOWLIST_"
DEFAULT_CONFIG_FILE = ".allowlist-merkle.json"


def _sha256(data: bytes) -> bytes:
    return hashlib.sha256(data).digest()


HASH_FUNCTIONS: dict[str, HashFn] = {
    "keccak256": keccak,
    "sha256": _sha256,
}
LEAF_ENCODINGS = ("packed", "padded")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def get_hash_fn(name: str) -> HashFn:
    try:
        return HASH_FUNCTIONS[name.lower()]
    except KeyError:
        raise ValueError(f"Unknown hash function: {name}") from None


@dataclass
class Settings:
    hash_name: str = "keccak256"
    leaf_encoding: str = "packed"
    log_level: str = "INFO"
    log_file: str | None = None
    output: str = "merkle_data.json"

    @property
    def hash_fn(self) -> HashFn:
        return get_hash_fn(self.hash_name)

    @property
    def padded(self) -> bool:
        return self.leaf_encoding == "padded"

    def validate(self) -> "Settings":
        get_hash_fn(self.hash_name)
        if str(self.log_level).upper() not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {self.log_level}")
        if self.leaf_encoding not in LEAF_ENCODINGS:
            raise ValueError(
                f"Unknown leaf encoding: {self.leaf_encoding} (expected one of {', '.join(LEAF_ENCODINGS)})"
            )
        return self


# setting field -> key suffix used in env vars and .env files
_ENV_KEYS = {
    "hash_name": "HASH",
    "leaf_encoding": "LEAF_ENCODING",
    "log_level": "LOG_LEVEL",
    "log_file": "LOG_FILE",
    "output": "OUTPUT",
}


def _apply_env(settings: Settings, env: Mapping[str, str | None]) -> None:
    for field_name, suffix in _ENV_KEYS.items():
        value = env.get(f"{ENV_PREFIX}{suffix}")
        if value:
            setattr(settings, field_name, value)


def load_settings_from_file(path: Path) -> Settings:
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{path}: config file must contain a JSON object")

    settings = Settings()
    settings.hash_name = data.get("hash", settings.hash_name)
    settings.leaf_encoding = data.get("leaf_encoding", settings.leaf_encoding)
    settings.log_level = data.get("log_level", settings.log_level)
    settings.log_file = data.get("log_file", settings.log_file)
    settings.output = data.get("output", settings.output)
    return settings


def load_settings(config_path: Path | None = None, env_file: Path | None = None) -> Settings:
    """
    Load settings from file, .env and environment.

    Args:
        config_path: Optional JSON config file
        env_file: Optional .env file (default: ./.env when present)

    Returns:
        Validated settings
    """
    settings = Settings()

    if config_path is not None:
        settings = load_settings_from_file(config_path)
    else:
        default_path = Path.cwd() / DEFAULT_CONFIG_FILE
        if default_path.exists():
            settings = load_settings_from_file(default_path)

    env_path = env_file if env_file is not None else Path.cwd() / ".env"
    if env_path.exists():
        _apply_env(settings, dotenv_values(env_path))

    _apply_env(settings, os.environ)
    return settings.validate()
