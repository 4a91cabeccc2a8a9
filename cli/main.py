import asyncio
import logging
import sys

import click
import yaml

from gitreminder.utils import config as cfg
from gitreminder.utils.config import LOG_FILE, VERSION, ensure_dirs


def setup_logging(verbose: int, log_to_file: bool):
    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose > 1:
        level = logging.DEBUG

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_to_file:
        ensure_dirs()
        handlers.append(logging.FileHandler(LOG_FILE))

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=handlers,
    )


def resolve_target(paths: tuple[str, ...]) -> str | None:
    from gitreminder.workspace.picker import pick_workspace

    try:
        return pick_workspace(paths or (".",))
    except ValueError as e:
        click.echo(str(e), err=True)
        sys.exit(1)


def _run(coro):
    # Prompts block on stdin in daemon threads, so Ctrl+C exits without waiting for them
    try:
        return asyncio.run(coro)
    except KeyboardInterrupt:
        click.echo("\nStopped.")
        return None


def _apply_overrides(remote, timeout, debounce):
    cfg.override(remote_name=remote, sync_timeout=timeout, debounce_delay=debounce)


_common_options = [
    click.option("--remote", default=None, help="Remote to sync and push to (default: origin)"),
    click.option("--timeout", default=None, type=float, help="Seconds before a remote sync counts as timed out"),
    click.option("--no-prompt", is_flag=True, help="Show push prompts but never act on them"),
    click.option("-v", "--verbose", count=True, help="More log output (-vv for debug)"),
    click.option("--log", "log_to_file", is_flag=True, help=f"Also log to {LOG_FILE}"),
]


def common_options(f):
    for option in reversed(_common_options):
        f = option(f)
    return f


@click.group()
@click.version_option(VERSION, prog_name="gitreminder")
def cli():
    """GitReminder - Nudges you when local commits have not been pushed."""


@cli.command()
@click.argument("paths", nargs=-1, type=click.Path(file_okay=False))
@common_options
@click.option("--debounce", default=None, type=float, help="Quiet window in seconds before rescanning")
def watch(paths, remote, timeout, no_prompt, verbose, log_to_file, debounce):
    """Watch a repository and remind about unpushed commits.

    With several PATHS you are asked which one to watch. Press Ctrl+C to stop.

    Examples:
        gitreminder watch
        gitreminder watch ~/src/project --remote upstream
    """
    from gitreminder.app import watch as watch_target
    from gitreminder.notify.host import TerminalHost

    setup_logging(verbose, log_to_file)
    _apply_overrides(remote, timeout, debounce)

    target = resolve_target(paths)
    if target is None:
        click.echo("No workspace selected.", err=True)
        sys.exit(1)

    click.echo(f"☉ GitReminder watching {target}  (Ctrl+C to stop)")
    _run(watch_target(target, TerminalHost(interactive=not no_prompt)))


@cli.command()
@click.argument("path", default=".", type=click.Path(file_okay=False))
@common_options
def check(path, remote, timeout, no_prompt, verbose, log_to_file):
    """Scan a repository once and exit."""
    from gitreminder.app import check_once
    from gitreminder.git.remote import RemoteState
    from gitreminder.notify.host import TerminalHost

    setup_logging(verbose, log_to_file)
    _apply_overrides(remote, timeout, None)

    target = resolve_target((path,))
    info = _run(check_once(target, TerminalHost(interactive=not no_prompt)))
    if info is not None and info.state is not RemoteState.OK:
        sys.exit(1)


@cli.command("config")
@click.option("--reset", is_flag=True, help="Restore defaults and remove config.yaml")
def show_config(reset):
    """Show the effective settings."""
    if reset:
        cfg.reset_to_defaults()
        click.echo(f"Removed {cfg.USER_CONFIG_FILE}")
    click.echo(f"# {cfg.USER_CONFIG_FILE}")
    click.echo(yaml.dump(cfg.get_editable_settings(), default_flow_style=False, sort_keys=False).rstrip())


if __name__ == "__main__":
    cli()
