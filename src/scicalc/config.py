"""Calculator configuration loaded from ``scicalc.yaml``."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from scicalc.expression.model import DEFAULT_MAX_OPERANDS

CONFIG_FILENAME = "scicalc.yaml"

DEFAULT_CONFIG: dict[str, Any] = {
    "max_operands": DEFAULT_MAX_OPERANDS,
    "precision": 2,
    "prompt": "Enter expression: ",
    "banner": True,
    "log_dir": None,  # logging disabled unless set
    "logging_fsync": False,
}

DEFAULT_CONFIG_YAML = """\
# scicalc configuration
max_operands: 100
precision: 2
prompt: "Enter expression: "
banner: true
# log_dir: logs
logging_fsync: false
"""


def _validate(config: dict[str, Any]) -> dict[str, Any]:
    """Check value types and ranges; raise ``ValueError`` naming the key."""
    for key in ("max_operands", "precision"):
        value = config[key]
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"Config key {key!r} must be an integer, got {value!r}")
    if config["max_operands"] < 1:
        raise ValueError(f"Config key 'max_operands' must be at least 1, got {config['max_operands']}")
    if not 0 <= config["precision"] <= 15:
        raise ValueError(f"Config key 'precision' must be between 0 and 15, got {config['precision']}")
    if not isinstance(config["prompt"], str):
        raise ValueError(f"Config key 'prompt' must be a string, got {config['prompt']!r}")
    if config["log_dir"] is not None and not isinstance(config["log_dir"], str):
        raise ValueError(f"Config key 'log_dir' must be a path string or null, got {config['log_dir']!r}")
    for key in ("banner", "logging_fsync"):
        if not isinstance(config[key], bool):
            raise ValueError(f"Config key {key!r} must be true or false, got {config[key]!r}")
    return config


def load_config(path: Path | None = None) -> dict[str, Any]:
    """Load configuration, with defaults.

    Args:
        path: Explicit config file.  When None, ``scicalc.yaml`` in the
            current directory is used if it exists.

    Returns:
        Merged configuration dict.

    Raises:
        FileNotFoundError: If an explicit *path* does not exist.
        ValueError: If the file is not valid YAML, or a value has the wrong
            type or range.
    """
    config = dict(DEFAULT_CONFIG)
    if path is None:
        candidate = Path.cwd() / CONFIG_FILENAME
        path = candidate if candidate.exists() else None
    elif not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    if path is not None:
        try:
            user_config = yaml.safe_load(path.read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e
        if not isinstance(user_config, dict):
            raise ValueError(f"Config file {path} must contain a mapping")
        unknown = sorted(set(user_config) - set(DEFAULT_CONFIG))
        if unknown:
            raise ValueError(f"Unknown config keys in {path}: {unknown}")
        config.update(user_config)

    return _validate(config)


def write_default_config(directory: Path) -> Path:
    """Write a commented default ``scicalc.yaml`` into *directory*.

    Raises:
        FileExistsError: If the file is already there.
    """
    target = directory / CONFIG_FILENAME
    if target.exists():
        raise FileExistsError(f"{target} already exists")
    directory.mkdir(parents=True, exist_ok=True)
    target.write_text(DEFAULT_CONFIG_YAML)
    return target
