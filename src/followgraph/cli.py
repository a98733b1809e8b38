"""Root CLI group for followctl with global flags and command registration."""

from __future__ import annotations

from pathlib import Path

import click

from followgraph import __version__
from followgraph.commands import register_commands
from followgraph.commands._context import AppContext
from followgraph.config.settings import FollowSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="followctl")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "--data-root",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory holding the .followgraph/ database.",
)
@click.option("--timeout", type=float, default=None, help="Storage deadline in seconds.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    data_root: Path | None,
    timeout: float | None,
) -> None:
    """followctl — follow-graph service CLI."""
    flags: dict[str, object] = {
        "json_output": json_output,
        "quiet": quiet,
        "verbose": verbose,
        "log_json": log_json,
    }
    if timeout is not None:
        flags["timeout"] = timeout
    settings = FollowSettings.from_cli(config_path=config_path, data_root=data_root, **flags)
    app = AppContext(settings)
    ctx.obj = app
    ctx.call_on_close(app.close)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
