"""
Configuration loading and validation for the payload builder.

The builder itself only takes an immutable ``BuilderConfig``; this module
produces one from a JSON file (with ``${ENV_VAR:-default}`` placeholders)
or straight from the environment, once at startup.
"""

import json
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional, Union

from dotenv import load_dotenv

from .constants import DEFAULT_ENVIRONMENT, ENV_ACCESS_TOKEN, ENV_CONTEXT, ENV_ENVIRONMENT
from .errors import ConfigError

# Section in the JSON config file holding the notifier settings.
CONFIG_SECTION = "rollbar"

_REQUIRED_KEYS: List[str] = ["access_token", "environment"]


@dataclass(frozen=True)
class BuilderConfig:
    """Immutable settings shared by every payload a builder produces."""

    access_token: str
    environment: str
    rollbar_context: Optional[str] = None


def load_config(config_path: Union[str, Path]) -> BuilderConfig:
    """
    Load a ``BuilderConfig`` from a JSON file, resolving
    ``${ENV_VAR:-default}`` placeholders in all string values.

    Args:
        config_path: Path to a JSON file with a ``rollbar`` section.

    Returns:
        The validated configuration.

    Raises:
        ConfigError: If the file cannot be read, parsed or validated.
    """
    load_dotenv()
    full_path = Path(config_path)

    if not full_path.exists():
        raise ConfigError(f"Configuration file not found: {full_path}")

    try:
        with open(full_path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in {full_path}: {exc}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Cannot read configuration file {full_path}: {exc}") from exc

    return build_config(_resolve(raw))


def config_from_env() -> BuilderConfig:
    """Build a ``BuilderConfig`` from ``ROLLBAR_*`` environment variables."""
    load_dotenv()
    return build_config(
        {
            CONFIG_SECTION: {
                "access_token": os.environ.get(ENV_ACCESS_TOKEN, ""),
                "environment": os.environ.get(ENV_ENVIRONMENT, DEFAULT_ENVIRONMENT),
                "context": os.environ.get(ENV_CONTEXT) or None,
            }
        }
    )


def validate_config(config: Any) -> List[str]:
    """
    Validate a raw config dict.

    Returns:
        A list of human-readable error strings.  Empty means valid.
    """
    if not isinstance(config, dict):
        return [f"Configuration must be a JSON object, got {type(config).__name__}"]

    errors: List[str] = []

    section = config.get(CONFIG_SECTION)
    if not isinstance(section, dict):
        return [f"Missing required config section: '{CONFIG_SECTION}'"]

    for key in _REQUIRED_KEYS:
        value = section.get(key)
        if value is None or value == "":
            errors.append(f"Missing required key '{key}' in config section '{CONFIG_SECTION}'")
        elif not isinstance(value, str):
            errors.append(f"'{CONFIG_SECTION}.{key}' must be a string")

    context = section.get("context")
    if context is not None and not isinstance(context, str):
        errors.append(f"'{CONFIG_SECTION}.context' must be a string")

    token = section.get("access_token")
    if isinstance(token, str) and token.startswith("${"):
        errors.append(
            f"{CONFIG_SECTION}.access_token is an unresolved placeholder: '{token}'. "
            f"Set the {ENV_ACCESS_TOKEN} environment variable."
        )

    return errors


def build_config(config: Any) -> BuilderConfig:
    """Validate *config* and turn its ``rollbar`` section into a ``BuilderConfig``.

    Raises:
        ConfigError: With every validation problem joined into one message.
    """
    errors = validate_config(config)
    if errors:
        raise ConfigError("; ".join(errors))
    section = config[CONFIG_SECTION]
    return BuilderConfig(
        access_token=section["access_token"],
        environment=section["environment"],
        rollbar_context=section.get("context") or None,
    )


# ── Private helpers ──────────────────────────────────────────────

_PLACEHOLDER_RE = re.compile(r"\$\{(\w+)(?::-([^}]*))?\}")


def _resolve(obj: Any) -> Any:
    """Recursively resolve ``${ENV_VAR:-default}`` in string values."""
    if isinstance(obj, str):
        return _PLACEHOLDER_RE.sub(_replace_match, obj)
    elif isinstance(obj, dict):
        return {k: _resolve(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_resolve(v) for v in obj]
    return obj


def _replace_match(m: re.Match) -> str:
    var = m.group(1)
    default = m.group(2) if m.group(2) is not None else ""
    return os.environ.get(var, default)
