"""NestJS project detection."""

from pathlib import Path

from nest_repl.logger import get_logger

logger = get_logger(__name__)

DEFAULT_MARKER = "nest-cli.json"


def find_nest_root(start: str | Path, marker: str = DEFAULT_MARKER) -> Path | None:
    """Walk up from ``start`` to the nearest directory containing ``marker``."""
    path = Path(start).resolve()
    if not path.is_dir():
        path = path.parent

    for directory in (path, *path.parents):
        if (directory / marker).is_file():
            logger.debug("Found NestJS project root", root=str(directory))
            return directory

    logger.debug("No NestJS project root", start=str(start), marker=marker)
    return None


def is_nest_project(start: str | Path, marker: str = DEFAULT_MARKER) -> bool:
    """Check whether ``start`` lives inside a NestJS project."""
    return find_nest_root(start, marker) is not None


def repl_launch_command(root: Path, command: str) -> str:
    """Shell command starting the REPL from the project root."""
    return f"cd {root} && {command}"
