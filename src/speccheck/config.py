"""Where speccheck keeps its settings, and which spec file a command uses.

Files:

* ``config.json`` in :func:`get_config_dir` -- the user's
  :class:`~speccheck.models.GlobalConfig`.
* ``speccheck.json`` in the working directory -- optional project settings,
  currently only ``default_spec``.
* Crash logs under :func:`get_data_dir`.

Linux and the BSDs follow the XDG base directory layout; other platforms use
``~/.speccheck``. Config files are replaced atomically so a crash mid-write
never leaves a truncated file behind.
"""

from __future__ import annotations

import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Any, Optional

from speccheck.exceptions import ConfigError
from speccheck.models import GlobalConfig

_APP_NAME = "speccheck"
_CONFIG_FILENAME = "config.json"
_PROJECT_CONFIG_FILENAME = "speccheck.json"

DEFAULT_SPEC_LOCATION = "specification/http/1.0/openapi.json"
"""Spec file used when nothing else names one."""

SPEC_ENV_VAR = "SPECCHECK_SPEC"

# XDG variable and its default under $HOME, per directory kind.
_XDG_DIRS = {
    "config": ("XDG_CONFIG_HOME", (".config",)),
    "data": ("XDG_DATA_HOME", (".local", "share")),
}


def _is_xdg_platform() -> bool:
    system = platform.system()
    return system == "Linux" or system.endswith("BSD")


def _app_dir(kind: str) -> Path:
    if _is_xdg_platform():
        env_var, default = _XDG_DIRS[kind]
        base = Path(os.environ.get(env_var) or Path.home().joinpath(*default))
        path = base / _APP_NAME
    else:
        path = Path.home() / f".{_APP_NAME}"
        if kind == "data":
            path = path / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_config_dir() -> Path:
    """``$XDG_CONFIG_HOME/speccheck`` (``~/.config/speccheck``), or ``~/.speccheck``."""
    return _app_dir("config")


def get_data_dir() -> Path:
    """``$XDG_DATA_HOME/speccheck`` (``~/.local/share/speccheck``), or ``~/.speccheck/logs``."""
    return _app_dir("data")


def _atomic_write(path: Path, data: str) -> None:
    """Replace *path* with *data* via a synced temp file in the same directory."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(data)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise


def _read_json(path: Path, what: str) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise ConfigError(f"Invalid {what} at {path}: {exc}") from exc


def load_global_config() -> GlobalConfig:
    """Read the user's config, or return defaults when there is none.

    Raises:
        ConfigError: If the file is not JSON or does not match
            :class:`~speccheck.models.GlobalConfig`.
    """
    path = get_config_dir() / _CONFIG_FILENAME
    if not path.is_file():
        return GlobalConfig()
    data = _read_json(path, "global config")
    try:
        return GlobalConfig.model_validate(data)
    except ValueError as exc:
        raise ConfigError(f"Invalid global config at {path}: {exc}") from exc


def save_global_config(config: GlobalConfig) -> None:
    payload = json.dumps(config.model_dump(mode="json"), indent=2) + "\n"
    _atomic_write(get_config_dir() / _CONFIG_FILENAME, payload)


def load_project_config() -> Optional[dict[str, Any]]:
    """Read ``./speccheck.json``; ``None`` when the file does not exist.

    Raises:
        ConfigError: If the file is not a JSON object.
    """
    path = Path.cwd() / _PROJECT_CONFIG_FILENAME
    if not path.is_file():
        return None
    data = _read_json(path, "project config")
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid project config at {path}: expected a JSON object")
    return data


def resolve_config(cli_spec: Optional[str] = None) -> tuple[GlobalConfig, str]:
    """Return the user's config and the spec location a command should load.

    The first source that names a spec wins:

    1. ``--spec`` (*cli_spec*)
    2. ``$SPECCHECK_SPEC``
    3. ``default_spec`` in ``./speccheck.json``
    4. ``default_spec`` in the user's config
    5. :data:`DEFAULT_SPEC_LOCATION`
    """
    global_cfg = load_global_config()
    project = load_project_config() or {}

    candidates = (
        cli_spec,
        os.environ.get(SPEC_ENV_VAR),
        project.get("default_spec"),
        global_cfg.default_spec,
    )
    for candidate in candidates:
        if candidate:
            return global_cfg, str(candidate)
    return global_cfg, DEFAULT_SPEC_LOCATION
