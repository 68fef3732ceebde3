"""nest-repl command line entry point."""

import json
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import click

from nest_repl.config import get_settings, reload_settings
from nest_repl.logger import set_level, setup_logging
from nest_repl.models import ExtractionResult, LineRange, NoticeLevel
from nest_repl.repl.extraction import MethodExtractor
from nest_repl.repl.invocation import build_invocation, collect_arguments
from nest_repl.repl.project import find_nest_root, repl_launch_command


def _target(start: int | None, end: int | None, line: int | None) -> tuple[LineRange | None, int | None]:
    if line is not None:
        if start is not None or end is not None:
            msg = "--line cannot be combined with --start/--end"
            raise click.UsageError(msg)
        return None, line
    if start is None:
        msg = "Give either --line or --start (and optionally --end)"
        raise click.UsageError(msg)
    return LineRange.ordered(start, end if end is not None else start), None


def _report(result: ExtractionResult) -> None:
    for notice in result.notices:
        color = "red" if notice.level == NoticeLevel.ERROR else "yellow"
        click.secho(f"{notice.level.value}: {notice.message}", fg=color, err=True)


def _extract(file: Path, start: int | None, end: int | None, line: int | None) -> ExtractionResult:
    selection, cursor_line = _target(start, end, line)
    result = MethodExtractor().extract_file(file, selection=selection, cursor_line=cursor_line)
    _report(result)
    if not result.ok:
        sys.exit(1)
    return result


target_options = [
    click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path)),
    click.option("--start", type=click.IntRange(min=1), help="First selected line (1-based)"),
    click.option("--end", type=click.IntRange(min=1), help="Last selected line (1-based)"),
    click.option("--line", type=click.IntRange(min=1), help="Cursor line (1-based)"),
]


def with_target(func: Callable[..., Any]) -> Callable[..., Any]:
    """Add the FILE argument and the --start/--end/--line options to a command."""
    for option in reversed(target_options):
        func = option(func)
    return func


@click.group()
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"]),
    default=None,
    help="Logging level",
)
@click.option(
    "--config",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="YAML configuration file",
)
def cli(log_level: str | None, config: Path | None) -> None:
    """Send TypeScript class methods to the NestJS REPL."""
    if config is not None:
        reload_settings(config)
    setup_logging()
    if log_level:
        set_level(log_level)


@cli.command()
@with_target
def extract(file: Path, start: int | None, end: int | None, line: int | None) -> None:
    """Print the class and method descriptor as JSON."""
    result = _extract(file, start, end, line)
    click.echo(json.dumps(result.to_dict(), indent=2))


@cli.command()
@with_target
@click.option("--assign", is_flag=True, help="Store the result in a variable named after the method")
@click.option("--arg", "values", multiple=True, help="Literal argument value, in declared order")
def invoke(
    file: Path,
    start: int | None,
    end: int | None,
    line: int | None,
    assign: bool,
    values: tuple[str, ...],
) -> None:
    """Print the REPL invocation for the selected method."""
    result = _extract(file, start, end, line)
    method = result.method

    if len(values) > len(method.args):
        msg = f"{method.name} takes {len(method.args)} argument(s), got {len(values)}"
        raise click.BadParameter(msg, param_hint="--arg")
    collected = collect_arguments(
        method, lambda label: click.prompt(label.rstrip(), type=str), given=values
    )
    if collected is None:
        sys.exit(1)

    click.echo(
        build_invocation(
            result.class_name,
            method,
            collected,
            assign=assign,
            always_await=get_settings().repl.always_await,
        )
    )


@cli.command()
@click.argument("path", type=click.Path(exists=True, path_type=Path), default=".")
def root(path: Path) -> None:
    """Print the NestJS project root and the command starting its REPL."""
    settings = get_settings()
    project_root = find_nest_root(path, settings.repl.project_marker)
    if project_root is None:
        click.secho("error: Not in a NestJS project directory", fg="red", err=True)
        sys.exit(1)
    click.echo(str(project_root))
    click.echo(repl_launch_command(project_root, settings.repl.command))


if __name__ == "__main__":
    cli()
