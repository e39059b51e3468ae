"""chatstamp CLI entry point."""

from __future__ import annotations

import logging
from pathlib import Path
from zoneinfo import ZoneInfoNotFoundError

import click
import yaml

from ..core.clock import fixed_clock
from ..core.config import config_to_dict, default_config_path, load_config, save_config
from ..core.errors import InvalidOrderError, UnknownLocaleError
from ..core.formatter import TimeLabelFormatter
from .parsing import TIMESTAMP, to_millis

logger = logging.getLogger(__name__)


class OrderError(click.ClickException):
    """Timestamps handed over out of chronological order."""

    exit_code = 2


@click.group()
@click.version_option(package_name="chatstamp")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Config file (default: ~/.config/chatstamp/chatstamp.yaml)",
)
@click.option("--locale", default=None, help="Locale override, e.g. en_GB")
@click.option("--tz", default=None, help="IANA timezone override, e.g. Europe/Berlin")
@click.option("--now", type=TIMESTAMP, default=None, help="Pin 'now' (epoch ms or ISO 8601)")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, config_path, locale, tz, now, verbose) -> None:
    """chatstamp: timestamp labels for conversation threads."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )
    config = load_config(config_path)
    if locale:
        config.locale = locale
    if tz:
        config.timezone = tz

    try:
        formatter = TimeLabelFormatter.from_config(config)
    except UnknownLocaleError as e:
        raise click.BadParameter(str(e), param_hint="--locale")
    except (ZoneInfoNotFoundError, ValueError):
        raise click.BadParameter(f"Unknown timezone {config.timezone!r}", param_hint="--tz")

    if now is not None:
        formatter.clock = fixed_clock(to_millis(now, formatter.tz))

    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path or default_config_path()
    ctx.obj["config"] = config
    ctx.obj["formatter"] = formatter


@cli.command("format")
@click.argument("timestamp", type=TIMESTAMP)
@click.pass_obj
def format_cmd(obj, timestamp) -> None:
    """Print the thread label for TIMESTAMP."""
    formatter: TimeLabelFormatter = obj["formatter"]
    click.echo(formatter.format_timestamp(to_millis(timestamp, formatter.tz)))


@cli.command("should-display")
@click.argument("previous", type=TIMESTAMP)
@click.argument("next_timestamp", metavar="NEXT", type=TIMESTAMP)
@click.pass_obj
def should_display_cmd(obj, previous, next_timestamp) -> None:
    """Exit 0 (and print 'yes') if NEXT earns a label after PREVIOUS."""
    formatter: TimeLabelFormatter = obj["formatter"]
    try:
        shown = formatter.should_display_timestamp(
            to_millis(previous, formatter.tz), to_millis(next_timestamp, formatter.tz)
        )
    except InvalidOrderError as e:
        raise OrderError(str(e))
    click.echo("yes" if shown else "no")
    if not shown:
        raise SystemExit(1)


@cli.command("section")
@click.argument("timestamp", type=TIMESTAMP)
@click.pass_obj
def section_cmd(obj, timestamp) -> None:
    """Print the conversation-list section for TIMESTAMP."""
    formatter: TimeLabelFormatter = obj["formatter"]
    click.echo(formatter.section_label(to_millis(timestamp, formatter.tz)))


@cli.command("thread")
@click.argument("timestamps", nargs=-1, required=True, type=TIMESTAMP)
@click.pass_obj
def thread_cmd(obj, timestamps) -> None:
    """Label a thread: one line per message, '-' where no label is shown."""
    formatter: TimeLabelFormatter = obj["formatter"]
    millis = [to_millis(t, formatter.tz) for t in timestamps]
    try:
        positions = set(formatter.label_positions(millis))
    except InvalidOrderError as e:
        raise OrderError(str(e))

    now = formatter.clock()
    logger.debug("Thread of %d messages, %d labels", len(millis), len(positions))
    for index, value in enumerate(millis):
        if index in positions:
            click.echo(formatter.format_timestamp(value, now))
        else:
            click.echo("-")


@cli.command("show-config")
@click.pass_obj
def show_config_cmd(obj) -> None:
    """Print the effective configuration as YAML."""
    click.echo(yaml.safe_dump(config_to_dict(obj["config"]), sort_keys=False), nl=False)


@cli.command("init")
@click.option("--gap-minutes", type=click.IntRange(min=0), default=None, help="Minutes between displayed timestamps")
@click.option("--now-window-seconds", type=click.IntRange(min=0), default=None, help="Width of the 'Now' label")
@click.option("--yes", "-y", is_flag=True, help="Overwrite an existing config without prompting")
@click.pass_obj
def init_cmd(obj, gap_minutes, now_window_seconds, yes) -> None:
    """Write the effective configuration (with --locale/--tz applied) to the config file."""
    config_path = obj["config_path"]
    if config_path.exists() and not yes:
        click.confirm(f"Config already exists at {config_path}. Overwrite?", abort=True)

    config = obj["config"]
    if gap_minutes is not None:
        config.gap_minutes = gap_minutes
    if now_window_seconds is not None:
        config.now_window_seconds = now_window_seconds

    written = save_config(config, config_path)
    logger.debug("Wrote %s", written)
    click.echo(f"Config written to {written}")
