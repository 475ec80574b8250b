"""``speccheck config`` -- show, change, or reset the user's saved settings."""

from __future__ import annotations

from typing import Any

import typer

from speccheck.config import get_config_dir, load_global_config, save_global_config
from speccheck.exceptions import ConfigError, SpeccheckError
from speccheck.exit_codes import EXIT_INVALID_USAGE
from speccheck.models import GlobalConfig
from speccheck.output import error, format_response, info, success


config_app = typer.Typer(no_args_is_help=True)

_TRUE_WORDS = ("true", "1", "yes", "on")


def _assign(data: dict[str, Any], key: str, raw: str) -> Any:
    """Set dotted *key* in *data* to *raw*, coerced to the current value's type.

    Raises:
        ConfigError: If *key* does not name an existing leaf setting.
    """
    *parents, leaf = key.split(".")
    node = data
    for part in parents:
        node = node.get(part)
        if not isinstance(node, dict):
            raise ConfigError(f"Invalid config key: {key}")
    if leaf not in node or isinstance(node[leaf], dict):
        raise ConfigError(f"Unknown config key: {key}")

    value: Any = raw.lower() in _TRUE_WORDS if isinstance(node[leaf], bool) else raw
    node[leaf] = value
    return value


@config_app.command("show")
def config_show() -> None:
    """Print the saved settings.

    Example::

        speccheck --json config show
    """
    try:
        config = load_global_config()
    except SpeccheckError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None
    info(f"Config directory: {get_config_dir()}")
    format_response(config.model_dump(mode="json"))


@config_app.command("set")
def config_set(
    key: str = typer.Argument(help="Dotted setting name, e.g. validation.format_checks."),
    value: str = typer.Argument(help="New value."),
) -> None:
    """Change one setting.

    Example::

        speccheck config set default_spec specification/http/1.0/openapi.json
        speccheck config set validation.format_checks false
    """
    try:
        data = load_global_config().model_dump(mode="json")
        coerced = _assign(data, key, value)
        new_config = GlobalConfig.model_validate(data)
    except ConfigError as exc:
        error(str(exc))
        raise typer.Exit(code=EXIT_INVALID_USAGE) from None
    except ValueError as exc:
        error(f"Invalid value for {key}: {exc}")
        raise typer.Exit(code=EXIT_INVALID_USAGE) from None

    save_global_config(new_config)
    success(f"Set {key} = {coerced}")


@config_app.command("reset")
def config_reset(
    force: bool = typer.Option(False, "--force", "-f", help="Do not ask for confirmation."),
) -> None:
    """Restore every setting to its default."""
    if not force and not typer.confirm("Reset all settings to their defaults?"):
        info("Cancelled.")
        raise typer.Exit()
    save_global_config(GlobalConfig())
    success("Settings reset to defaults.")
