"""Configuration management with XDG paths, atomic writes, and precedence resolution.

This module handles all persistent configuration for sdkforge:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.sdkforge/`` on macOS and Windows. See :func:`get_config_dir` and
  :func:`get_data_dir`.
* **Global config** -- A single :class:`~sdkforge.models.GlobalConfig`
  JSON file holding the user's default
  :class:`~sdkforge.models.GeneratorSettings`.
* **Project config** -- ``./sdkforge.json`` (or ``.yaml``/``.yml``) next to
  the API description, holding per-repository overrides.
* **Precedence resolution** -- :func:`resolve_settings` merges CLI flags,
  environment variables, project-local config and global config into the
  effective settings.

All file writes use an atomic temp-file-then-rename strategy
(:func:`_atomic_write`) to prevent data loss on crash or power failure.
"""

from __future__ import annotations

import json
import logging
import os
import platform
import tempfile
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from sdkforge.exceptions import ConfigError
from sdkforge.models import GeneratorSettings, GlobalConfig

logger = logging.getLogger(__name__)

_APP_NAME = "sdkforge"
_CONFIG_FILENAME = "config.json"
_PROJECT_CONFIG_FILENAMES = ("sdkforge.json", "sdkforge.yaml", "sdkforge.yml")

ENV_OVERRIDES: dict[str, str] = {
    "SDKFORGE_CLIENT_SUFFIX": "client_suffix",
    "SDKFORGE_TAG_FILTER": "tag_filter",
    "SDKFORGE_OUTPUT_KIND": "output_kind",
    "SDKFORGE_OUTPUT_MODE": "output_mode",
}
"""Environment variable -> :class:`GeneratorSettings` field."""


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir() -> Path:
    return Path.home() / f".{_APP_NAME}"


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    """Resolve an XDG base directory from an env var with fallback segments under $HOME."""
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    base = Path.home()
    for seg in default_segments:
        base = base / seg
    return base


def get_config_dir() -> Path:
    """Return the configuration directory, creating it if necessary.

    On Linux/BSD: ``$XDG_CONFIG_HOME/sdkforge/`` (default ``~/.config/sdkforge/``).
    On macOS/Windows: ``~/.sdkforge/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CONFIG_HOME", (".config",)) / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/sdkforge/`` (default ``~/.local/share/sdkforge/``).
    On macOS/Windows: ``~/.sdkforge/logs/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_DATA_HOME", (".local", "share")) / _APP_NAME
    else:
        path = _fallback_base_dir() / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Atomic file writes ---


def _atomic_write(path: Path, data: str) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is an atomic rename on POSIX systems. On any failure the
    temp file is removed.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None  # prevent double-close below
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise


# --- Global config ---


def global_config_path() -> Path:
    """Path to the global config file."""
    return get_config_dir() / _CONFIG_FILENAME


def load_global_config() -> GlobalConfig:
    """Load the global configuration from the config directory.

    Returns:
        The deserialised :class:`~sdkforge.models.GlobalConfig`, or a
        default instance when the file does not exist.

    Raises:
        ConfigError: If the file contains invalid JSON or fails validation.
    """
    path = global_config_path()
    if not path.is_file():
        return GlobalConfig()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return GlobalConfig.model_validate(data)
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid global config at {path}: {exc}") from exc


def save_global_config(config: GlobalConfig) -> None:
    """Persist the global configuration atomically to disk."""
    data = config.model_dump(mode="json")
    _atomic_write(global_config_path(), json.dumps(data, indent=2) + "\n")


def set_global_setting(key: str, value: Any) -> GlobalConfig:
    """Change one field of the stored :class:`GeneratorSettings` and save it.

    String values are coerced by pydantic, so ``"false"`` sets a boolean
    field and ``"contracts"`` an enum field.

    Raises:
        ConfigError: If *key* is not a settings field or *value* is invalid.
    """
    if key not in GeneratorSettings.model_fields:
        known = ", ".join(sorted(GeneratorSettings.model_fields))
        raise ConfigError(f"Unknown setting '{key}' (expected one of: {known})")

    config = load_global_config()
    data = config.settings.model_dump(mode="json")
    data[key] = value
    try:
        config.settings = GeneratorSettings.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid value for '{key}': {exc}") from exc

    save_global_config(config)
    return config


# --- Project-local config ---


def find_project_config(directory: Optional[Path] = None) -> Optional[Path]:
    """Return the first ``sdkforge.json``/``.yaml``/``.yml`` in *directory*."""
    directory = directory or Path.cwd()
    for name in _PROJECT_CONFIG_FILENAMES:
        path = directory / name
        if path.is_file():
            return path
    return None


def load_project_config(directory: Optional[Path] = None) -> Optional[dict[str, Any]]:
    """Load project-local settings overrides.

    The file holds :class:`GeneratorSettings` fields, either at the top
    level or under a ``settings`` key.

    Returns:
        The settings mapping, or ``None`` if there is no project config.

    Raises:
        ConfigError: If the file cannot be parsed or is not a mapping.
    """
    path = find_project_config(directory)
    if path is None:
        return None
    try:
        text = path.read_text(encoding="utf-8")
        data = json.loads(text) if path.suffix == ".json" else yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError, OSError) as exc:
        raise ConfigError(f"Invalid project config at {path}: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Project config at {path} must be a mapping")
    settings = data.get("settings", data)
    if not isinstance(settings, dict):
        raise ConfigError(f"'settings' in {path} must be a mapping")
    logger.debug("Loaded project config from %s", path)
    return settings


# --- Precedence resolution ---


def resolve_settings(**cli_overrides: Any) -> GeneratorSettings:
    """Resolve the effective generator settings.

    Precedence (high to low):
        1. CLI flags (keyword arguments that are not ``None``)
        2. Environment variables (``SDKFORGE_CLIENT_SUFFIX``,
           ``SDKFORGE_TAG_FILTER``, ``SDKFORGE_OUTPUT_KIND``,
           ``SDKFORGE_OUTPUT_MODE``)
        3. Project config (``./sdkforge.json`` or ``.yaml``/``.yml``)
        4. User config (``~/.config/sdkforge/config.json``)
        5. Defaults

    Raises:
        ConfigError: If any layer is unreadable or the merged values fail
            validation.

    Example::

        settings = resolve_settings(output_kind="script_client", tag_filter=None)
    """
    data = load_global_config().settings.model_dump(mode="json")

    project = load_project_config()
    if project:
        data.update(project)

    for env_var, field in ENV_OVERRIDES.items():
        value = os.environ.get(env_var)
        if value:
            data[field] = value

    data.update({k: v for k, v in cli_overrides.items() if v is not None})

    try:
        return GeneratorSettings.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid generator settings: {exc}") from exc
