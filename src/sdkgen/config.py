"""Configuration management with XDG paths, atomic writes, and precedence resolution.

Generator settings (which spec to read, where to write the SDK, the package
name, the nesting strategy, ...) can come from five places. This module
merges them into one :class:`~sdkgen.models.GeneratorConfig`:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.sdkgen/`` on macOS and Windows. See :func:`get_config_dir` and
  :func:`get_data_dir`.
* **User config** -- ``config.json`` in the config directory, holding
  defaults shared by every project.
* **Project config** -- ``./sdkgen.json``, usually written by
  ``sdkgen init`` and committed next to the spec.
* **Precedence resolution** -- :func:`resolve_config` layers CLI flags over
  ``SDKGEN_*`` environment variables over both files.

Project config writes go through :func:`_atomic_write` so an interrupted
``sdkgen init`` never leaves a truncated file behind.
"""

from __future__ import annotations

import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from sdkgen.exceptions import ConfigError
from sdkgen.models import GeneratorConfig

_APP_NAME = "sdkgen"
_CONFIG_FILENAME = "config.json"
PROJECT_CONFIG_FILENAME = "sdkgen.json"

# GeneratorConfig field -> environment variable
ENV_VARS: dict[str, str] = {
    "spec": "SDKGEN_SPEC",
    "output_dir": "SDKGEN_OUTPUT_DIR",
    "sdk_version": "SDKGEN_VERSION",
    "package_name": "SDKGEN_PACKAGE_NAME",
    "base_url": "SDKGEN_BASE_URL",
    "nesting": "SDKGEN_NESTING",
}


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
    return Path.home().joinpath(*default_segments)


def get_config_dir() -> Path:
    """Return the configuration directory, creating it if necessary.

    On Linux/BSD: ``$XDG_CONFIG_HOME/sdkgen/`` (default ``~/.config/sdkgen/``).
    On macOS/Windows: ``~/.sdkgen/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CONFIG_HOME", (".config",)) / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/sdkgen/`` (default ``~/.local/share/sdkgen/``).
    On macOS/Windows: ``~/.sdkgen/logs/``.
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

    The temporary file lives in the same directory as *path* so that
    ``os.replace`` is an atomic rename on POSIX systems. On failure the temp
    file is removed and the original exception re-raised.
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
        fd = None
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


# --- Config files ---


def _read_json_object(path: Path, label: str) -> Optional[dict[str, Any]]:
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid {label} config at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid {label} config at {path}: expected a JSON object")
    return data


def global_config_path() -> Path:
    """Path to the user-level config file."""
    return get_config_dir() / _CONFIG_FILENAME


def project_config_path() -> Path:
    """Path to the project config file in the current working directory."""
    return Path.cwd() / PROJECT_CONFIG_FILENAME


def load_global_config() -> Optional[dict[str, Any]]:
    """Load the user-level configuration from the XDG config directory.

    Returns:
        The parsed JSON object, or ``None`` if the file does not exist.

    Raises:
        ConfigError: If the file exists but is not a valid JSON object.
    """
    return _read_json_object(global_config_path(), "user")


def load_project_config() -> Optional[dict[str, Any]]:
    """Load project-local configuration from ``./sdkgen.json``.

    Returns:
        The parsed JSON object, or ``None`` if the file does not exist.

    Raises:
        ConfigError: If the file exists but is not a valid JSON object.
    """
    return _read_json_object(project_config_path(), "project")


def save_project_config(config: GeneratorConfig) -> Path:
    """Persist *config* atomically to ``./sdkgen.json``.

    Fields still at ``None`` are left out so the file only records what
    the user actually chose.

    Returns:
        The path that was written.
    """
    data = config.model_dump(mode="json", exclude_none=True)
    path = project_config_path()
    _atomic_write(path, json.dumps(data, indent=2) + "\n")
    return path


# --- Precedence resolution ---


def _env_overrides() -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    for field, var in ENV_VARS.items():
        value = os.environ.get(var)
        if value:
            overrides[field] = value
    return overrides


def resolve_config(**cli_values: Any) -> GeneratorConfig:
    """Resolve the effective generator config with the full precedence chain.

    Precedence (high to low):
        1. CLI flags (keyword arguments; ``None`` means "not given")
        2. Environment variables (``SDKGEN_SPEC``, ``SDKGEN_OUTPUT_DIR``, ...)
        3. Project config (``./sdkgen.json``)
        4. User config (``~/.config/sdkgen/config.json``)
        5. Defaults

    Args:
        **cli_values: :class:`~sdkgen.models.GeneratorConfig` field values
            taken from the command line.

    Returns:
        The validated :class:`~sdkgen.models.GeneratorConfig`.

    Raises:
        ConfigError: If a config file is malformed, a key is unknown, or a
            value fails validation (e.g. an unknown nesting strategy).
    """
    merged: dict[str, Any] = {}
    for layer in (load_global_config(), load_project_config()):
        if layer:
            merged.update(layer)
    merged.update(_env_overrides())
    merged.update({k: v for k, v in cli_values.items() if v is not None})

    unknown = sorted(set(merged) - set(GeneratorConfig.model_fields))
    if unknown:
        raise ConfigError(f"Unknown configuration key(s): {', '.join(unknown)}")

    try:
        return GeneratorConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
