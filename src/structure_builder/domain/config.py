from __future__ import annotations

"""
Configuration Domain Management.

Persists user defaults for publishing (visibility, branch, Space SDK and
license, retry tuning, request timeout) as JSON in the user data
directory, and normalizes untrusted values back into a safe shape.
"""

import json
import logging
import os
from typing import Any, Dict, List, Optional, Tuple

from structure_builder.core.services.retry import RetryPolicy
from structure_builder.domain.publish_models import SPACE_LICENSES, SPACE_SDKS
from structure_builder.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
CONFIG_FILE_NAME = "config.json"
CURRENT_CONFIG_VERSION = "1.0.0"
DEFAULT_PROJECT_NAME = "my-project"


def get_config_path() -> str:
    return os.path.join(get_user_data_dir(), CONFIG_FILE_NAME)


def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    policy = RetryPolicy()
    return {
        "version": CURRENT_CONFIG_VERSION,
        "project_name": DEFAULT_PROJECT_NAME,

        # GitHub
        "github_branch": "main",
        "github_private": False,

        # Hugging Face Spaces
        "space_sdk": "gradio",
        "space_license": "mit",
        "space_private": False,

        # Retry & Network
        "retry_max_attempts": policy.max_attempts,
        "retry_base_delay": policy.base_delay,
        "retry_factor": policy.factor,
        "retry_max_delay": policy.max_delay,
        "request_timeout": 15.0,
    }

# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load and normalize the configuration file.

    Missing or corrupt files fall back to defaults.
    """
    path = path or get_config_path()
    if not os.path.exists(path):
        return get_default_config()

    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to read config '{path}': {e}. Using defaults.")
        return get_default_config()

    clean, warnings = validate_config(raw)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")
    return clean


def save_config(config: Dict[str, Any], path: Optional[str] = None) -> bool:
    """
    Persist the configuration after normalization.

    Returns:
        bool: True on success.
    """
    path = path or get_config_path()
    clean, _ = validate_config(config)
    try:
        os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(clean, f, indent=2)
        logger.debug(f"Configuration saved to {path}")
        return True
    except OSError as e:
        logger.error(f"Failed to save config '{path}': {e}")
        return False

# -----------------------------------------------------------------------------
# Validation
# -----------------------------------------------------------------------------
def validate_config(config: Any) -> Tuple[Dict[str, Any], List[str]]:
    """
    Coerce a raw configuration into the expected types.

    Unknown keys are dropped; invalid values fall back to defaults and
    produce a warning.

    Returns:
        Tuple[Dict[str, Any], List[str]]: Normalized config and warnings.
    """
    defaults = get_default_config()
    warnings: List[str] = []

    if not isinstance(config, dict):
        warnings.append(f"Invalid config type: {type(config).__name__}. Using defaults.")
        return defaults, warnings

    clean: Dict[str, Any] = dict(defaults)

    for key, default in defaults.items():
        if key not in config:
            continue
        value = config[key]
        try:
            if isinstance(default, bool):
                clean[key] = _to_bool(value)
            elif isinstance(default, int):
                clean[key] = int(value)
            elif isinstance(default, float):
                clean[key] = float(value)
            else:
                clean[key] = str(value).strip() or default
        except (TypeError, ValueError):
            warnings.append(f"Invalid value for '{key}': {value!r}. Using default.")

    if clean["space_sdk"] not in SPACE_SDKS:
        warnings.append(f"Unsupported space_sdk '{clean['space_sdk']}'. Using default.")
        clean["space_sdk"] = defaults["space_sdk"]
    if clean["space_license"] not in SPACE_LICENSES:
        warnings.append(f"Unsupported space_license '{clean['space_license']}'. Using default.")
        clean["space_license"] = defaults["space_license"]

    try:
        retry_policy_from_config(clean)
    except ValueError as e:
        warnings.append(f"Invalid retry settings ({e}). Using defaults.")
        for key in ("retry_max_attempts", "retry_base_delay", "retry_factor", "retry_max_delay"):
            clean[key] = defaults[key]

    return clean, warnings


def retry_policy_from_config(config: Dict[str, Any]) -> RetryPolicy:
    """Build the Space upload retry policy from config values."""
    return RetryPolicy(
        max_attempts=int(config["retry_max_attempts"]),
        base_delay=float(config["retry_base_delay"]),
        factor=float(config["retry_factor"]),
        max_delay=float(config["retry_max_delay"]),
    )


def _to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("1", "true", "yes", "on"):
            return True
        if lowered in ("0", "false", "no", "off", ""):
            return False
        raise ValueError(f"Not a boolean: {value!r}")
    if isinstance(value, (int, float)):
        return bool(value)
    raise TypeError(f"Not a boolean: {value!r}")
