"""Settings for icsnorm from ICSNORM_* environment variables and .env files."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_JSON_INDENT = 2

# Settings field -> environment variable
ENV_VARIABLES: dict[str, str] = {
    "log_level": "ICSNORM_LOG_LEVEL",
    "debug": "ICSNORM_DEBUG",
    "json_indent": "ICSNORM_JSON_INDENT",
}


class NormalizerSettings(BaseModel):
    """Runtime settings shared by the CLI and logging setup."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Root log level"
    )
    debug: bool = Field(default=False, description="Force DEBUG logging for icsnorm modules")
    json_indent: int = Field(
        default=DEFAULT_JSON_INDENT, ge=0, description="JSON indentation, 0 for compact output"
    )


def _split_assignment(line: str) -> Optional[tuple[str, str]]:
    """Split one ``KEY=VALUE`` line, or return None for blanks and comments."""
    line = line.strip()
    if not line or line.startswith("#") or "=" not in line:
        return None
    if line.startswith("export "):
        line = line[len("export ") :]

    key, _, value = line.partition("=")
    key = key.strip()
    if not key:
        return None
    return key, value.strip().strip('"').strip("'")


def parse_env_file(path: Path) -> dict[str, str]:
    """Read ``KEY=VALUE`` pairs from a .env file.

    Blank lines and ``#`` comments are skipped, an ``export`` prefix is
    accepted and one layer of quotes is stripped from values.

    Args:
        path: Path to .env file

    Returns:
        Parsed pairs; empty if the file is missing or unreadable
    """
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    except OSError:
        logger.debug("Cannot read %s, ignoring", path, exc_info=True)
        return {}

    pairs = (_split_assignment(line) for line in content.splitlines())
    return dict(pair for pair in pairs if pair is not None)


class ConfigManager:
    """Loads icsnorm settings from a .env file and the process environment."""

    def __init__(self, env_file_path: Optional[Path] = None):
        """Initialize configuration manager.

        Args:
            env_file_path: .env file with defaults (defaults to ./.env)
        """
        self.env_file_path = env_file_path or Path.cwd() / ".env"

    def load_env_file(self) -> list[str]:
        """Export .env values that the environment does not already define.

        Returns:
            Keys added to ``os.environ``
        """
        added = []
        for key, value in parse_env_file(self.env_file_path).items():
            if key in os.environ:
                continue
            os.environ[key] = value
            added.append(key)

        if added:
            logger.debug("Loaded .env defaults for keys: %s", ", ".join(added))
        return added

    def load_settings(self) -> NormalizerSettings:
        """Build settings from ICSNORM_* variables.

        Each variable is validated on its own; an invalid value is logged and
        replaced by the default instead of failing the run.

        Returns:
            Validated settings
        """
        values: dict[str, str] = {}
        for field_name, env_name in ENV_VARIABLES.items():
            raw = os.environ.get(env_name, "").strip()
            if not raw:
                continue
            if field_name == "log_level":
                raw = raw.upper()
            try:
                NormalizerSettings.model_validate({field_name: raw})
            except ValidationError:
                logger.warning("Invalid %s=%r; ignoring", env_name, raw)
                continue
            values[field_name] = raw

        return NormalizerSettings.model_validate(values)

    def build_config_from_env(self) -> dict[str, Any]:
        """Return the settings as a plain dictionary.

        Keys: ``log_level``, ``debug``, ``json_indent``.
        """
        return self.load_settings().model_dump()

    def load_full_config(self) -> dict[str, Any]:
        """Load the .env file, then build configuration from the environment."""
        self.load_env_file()
        return self.build_config_from_env()


def get_config_value(config: Any, key: str, default: Any = None) -> Any:
    """Get a value from a dict or attribute-style configuration.

    Args:
        config: Configuration dict, settings model or None
        key: Setting name
        default: Value returned when the key is absent

    Returns:
        Configuration value or default
    """
    if isinstance(config, dict):
        return config.get(key, default)
    return getattr(config, key, default)
