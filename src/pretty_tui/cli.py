"""Pretty TUI CLI entry point.

Usage:
    pretty-tui                        # Run the form with configured settings
    pretty-tui init                   # Initialize configuration
    pretty-tui run --distance 10      # Run with explicit overrides
    pretty-tui config --show          # Print the settings file
"""

from __future__ import annotations

import click

from . import __version__
from .config import LOG_LEVELS, SETTINGS_FILE, ConfigError, FormConfig, load_config, save_config


@click.group(invoke_without_command=True)
@click.pass_context
@click.version_option(version=__version__)
def main(ctx: click.Context) -> None:
    """Pretty TUI - collect account, password and mileage in the terminal.

    Run without arguments to start with default/configured settings.
    Use 'init' to configure, 'run' for explicit options.
    """
    if ctx.invoked_subcommand is None:
        _run(_load_or_fail())


# =============================================================================
# Init Command
# =============================================================================


@main.command("init")
@click.option("--distance", type=float, default=None, help="Distance in km for 100% mileage")
@click.option("--mileage", type=click.IntRange(0, 100), default=None, help="Starting mileage percentage")
@click.option("--mask-char", default=None, help="Character shown for each password character")
@click.option("--force", "-f", is_flag=True, help="Overwrite existing configuration")
@click.option("--yes", "-y", is_flag=True, help="Accept defaults without prompting")
def init_config(
    distance: float | None,
    mileage: int | None,
    mask_char: str | None,
    force: bool,
    yes: bool,
) -> None:
    """Initialize the Pretty TUI configuration.

    Examples:

        # Interactive setup
        pretty-tui init

        # Non-interactive with defaults
        pretty-tui init --yes
    """
    if SETTINGS_FILE.exists() and not force:
        click.echo(f"Configuration already exists at {SETTINGS_FILE}")
        click.echo("Use --force to overwrite existing configuration.")
        if not yes and not click.confirm("Continue anyway?"):
            return

    defaults = FormConfig()
    if distance is None:
        distance = defaults.distance_km if yes else click.prompt(
            "Distance for 100% mileage (km)", default=defaults.distance_km, type=float
        )
    if mileage is None:
        mileage = defaults.initial_mileage if yes else click.prompt(
            "Starting mileage (%)", default=defaults.initial_mileage, type=click.IntRange(0, 100)
        )

    try:
        config = FormConfig(
            distance_km=distance,
            initial_mileage=mileage,
            mask_char=mask_char or defaults.mask_char,
        )
    except ConfigError as e:
        raise click.BadParameter(str(e)) from e

    settings_file = save_config(config, SETTINGS_FILE)
    click.echo(f"\n✓ Configuration saved to {settings_file}")
    click.echo(f"  Distance:          {config.distance_km:g} km")
    click.echo(f"  Starting mileage:  {config.initial_mileage}%")
    click.echo(f"  Mask character:    {config.mask_char}")


# =============================================================================
# Run Command
# =============================================================================


@main.command("run")
@click.option("--poll-timeout", type=float, default=None, help="Seconds between redraws without input")
@click.option("--distance", type=float, default=None, help="Distance in km for 100% mileage")
@click.option("--mileage", type=click.IntRange(0, 100), default=None, help="Starting mileage percentage")
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Lowest level shown in the log panel",
)
def run_command(
    poll_timeout: float | None,
    distance: float | None,
    mileage: int | None,
    log_level: str | None,
) -> None:
    """Run the form.

    Command-line options override configuration.
    """
    try:
        config = _load_or_fail().merged(
            poll_timeout=poll_timeout,
            distance_km=distance,
            initial_mileage=mileage,
            log_level=log_level,
        )
    except ConfigError as e:
        raise click.BadParameter(str(e)) from e
    _run(config)


# =============================================================================
# Config Command
# =============================================================================


@main.command("config")
@click.option("--show", is_flag=True, help="Show current configuration")
def config_command(show: bool) -> None:
    """View the form configuration."""
    import yaml

    if not SETTINGS_FILE.exists():
        click.echo("No configuration found. Run 'pretty-tui init' to create one.")
        return

    config = _load_or_fail()
    click.echo(f"Configuration file: {SETTINGS_FILE}\n")
    if show:
        click.echo(yaml.dump(config.to_dict(), default_flow_style=False, sort_keys=False))


# =============================================================================
# Helper Functions
# =============================================================================


def _load_or_fail() -> FormConfig:
    try:
        return load_config(SETTINGS_FILE)
    except ConfigError as e:
        raise click.ClickException(str(e)) from e


def _run(config: FormConfig) -> None:
    """Run the form and report what was confirmed."""
    from .app import run_form
    from .core.controller import BackendError

    try:
        result = run_form(config)
    except BackendError as e:
        raise click.ClickException(str(e)) from e
    if result is None:
        click.echo("Cancelled.")
        raise SystemExit(1)

    click.echo(f"Account:  {result.account}")
    click.echo(f"Mileage:  {result.distance_km(config.distance_km):g} km ({result.mileage}%)")


if __name__ == "__main__":
    main()
