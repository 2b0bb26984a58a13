"""Config commands -- view and modify the global generator settings.

Settings are persisted as :class:`~sdkforge.models.GlobalConfig` in the
sdkforge config directory and act as defaults for every ``generate`` and
``inspect`` run.
"""

from __future__ import annotations

import typer

from sdkforge.commands.generate import cli_errors
from sdkforge.output import get_output, info, success


config_app = typer.Typer(no_args_is_help=True)


@config_app.command("show")
def config_show() -> None:
    """Show the stored generator settings.

    Example::

        sdkforge config show
        sdkforge --json config show
    """
    from sdkforge.config import get_config_dir, load_global_config

    with cli_errors():
        config = load_global_config()
    info(f"Config directory: {get_config_dir()}")
    get_output().format_data(config.settings.model_dump(mode="json"))


@config_app.command("set")
def config_set(
    key: str = typer.Argument(help="Setting name, e.g. 'client_suffix'."),
    value: str = typer.Argument(help="Value to set."),
) -> None:
    """Set one generator setting.

    The value is validated against the setting's type before saving.

    Example::

        sdkforge config set naming_strategy single_client
        sdkforge config set generate_dto_types false
    """
    from sdkforge.config import set_global_setting

    with cli_errors():
        config = set_global_setting(key, value)
    success(f"Set {key} = {config.settings.model_dump(mode='json')[key]}")


@config_app.command("reset")
def config_reset(ctx: typer.Context) -> None:
    """Restore the default generator settings.

    Asks for confirmation unless ``--force`` is given.
    """
    from sdkforge.config import save_global_config
    from sdkforge.models import GlobalConfig

    force = bool((ctx.obj or {}).get("force"))
    if not force and not typer.confirm("Reset all settings to defaults?"):
        info("Aborted.")
        raise typer.Exit()

    save_global_config(GlobalConfig())
    success("Settings reset to defaults")
