import logging
from dataclasses import dataclass
from pathlib import Path

import typer
from pydantic import TypeAdapter

from unipatch.errors import ParseError
from unipatch.formatting import format_patches
from unipatch.logging import LOGGER_NAME, setup_logging
from unipatch.models import Patch
from unipatch.parsing import parse_all

app = typer.Typer(no_args_is_help = True)

logger = logging.getLogger(__name__)

PATCH_LIST = TypeAdapter(list[Patch])


@dataclass
class CliSettings:
    use_hunk_counts: bool = False


def _configure_logging(level_name: str) -> None:
    level = logging.getLevelName(level_name.upper())
    if not isinstance(level, int):
        raise typer.BadParameter(f"Unknown log level: {level_name}")
    package_logger = logging.getLogger(LOGGER_NAME)
    if package_logger.handlers:
        package_logger.setLevel(level)
    else:
        setup_logging(level=level)


def _read_patches(ctx: typer.Context, path: Path) -> list[Patch]:
    settings: CliSettings = ctx.obj
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise typer.BadParameter(f"{path} is not valid UTF-8: {exc}")
    logger.debug("Parsing %s (%d characters)", path, len(text))
    return parse_all(text, use_hunk_counts=settings.use_hunk_counts)


@app.callback()
def main(
    ctx: typer.Context,
    log_level: str = typer.Option(
        "WARNING", "--log-level", envvar="UNIPATCH_LOG_LEVEL", help="Logging level"
    ),
    use_hunk_counts: bool = typer.Option(
        False,
        "--use-hunk-counts",
        envvar="UNIPATCH_USE_HUNK_COUNTS",
        help="Read hunk bodies by their declared line counts",
    ),
):
    """
    Unified diff parser and formatter
    """
    _configure_logging(log_level)
    ctx.obj = CliSettings(use_hunk_counts=use_hunk_counts)


@app.command("check")
def check_cmd(
    ctx: typer.Context,
    files: list[Path] = typer.Argument(..., exists=True, dir_okay=False, help="Diff files to parse"),
):
    """Parse diff files and report patch and hunk counts."""
    failed = False
    for path in files:
        try:
            patches = _read_patches(ctx, path)
        except ParseError as exc:
            typer.echo(f"{path}: {exc}", err=True)
            failed = True
            continue
        hunks = sum(len(patch.hunks) for patch in patches)
        typer.echo(f"{path}: {len(patches)} patches, {hunks} hunks")
    if failed:
        raise typer.Exit(code=1)


@app.command("fmt")
def fmt_cmd(
    ctx: typer.Context,
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Diff file to format"),
    out: Path | None = typer.Option(None, "--out", help="Write the result to this file"),
    overwrite: bool = typer.Option(False, "--overwrite", help="Overwrite existing files"),
):
    """Re-render a diff file in canonical unified format."""
    try:
        patches = _read_patches(ctx, file)
    except ParseError as exc:
        typer.echo(f"{file}: {exc}", err=True)
        raise typer.Exit(code=1)

    rendered = format_patches(patches)
    if out is None:
        typer.echo(rendered, nl=False)
        return
    _write_output(out, rendered, overwrite)
    typer.echo(f"Wrote {len(patches)} patches to {out}")


@app.command("show")
def show_cmd(
    ctx: typer.Context,
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Diff file to dump"),
):
    """Print the parsed patches as JSON."""
    try:
        patches = _read_patches(ctx, file)
    except ParseError as exc:
        typer.echo(f"{file}: {exc}", err=True)
        raise typer.Exit(code=1)
    typer.echo(PATCH_LIST.dump_json(patches, indent=2).decode("utf-8"))


def _write_output(path: Path, content: str, overwrite: bool) -> None:
    if path.exists() and not overwrite:
        raise typer.BadParameter(f"{path} already exists. Use --overwrite to replace.")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
