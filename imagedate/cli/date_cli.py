"""
CLI for image date resolution.

Resolves the best known creation timestamp of each image and reports it as
seconds since the Unix epoch.
"""

import sys
from pathlib import Path
from typing import List, Optional, Tuple

import arrow
import click
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from ..config import Settings, settings
from ..core.exceptions import ImageOpenError
from ..core.resolver import DateResolver
from ..core.types import Resolution
from ..shared import expand_image_paths, setup_logging
from ..version import get_version_string

# Results may go to stdout, so everything else goes to stderr
console = Console(stderr=True)


def format_line(path: Path, resolution: Resolution, iso: bool) -> str:
    """Render one result as a tab separated line."""
    fields = [str(path), str(resolution.timestamp), resolution.source]
    if iso:
        fields.append(arrow.get(resolution.timestamp).isoformat())
    return "\t".join(fields)


def display_summary(results: List[Tuple[Path, Resolution]], failed: int) -> None:
    """Print a summary table of where dates came from."""
    table = Table(title="Date Summary")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")

    source_counts = {}
    for _, resolution in results:
        source_counts[resolution.source] = source_counts.get(resolution.source, 0) + 1

    table.add_row("Total files", str(len(results) + failed))
    table.add_row("Resolved", str(sum(1 for _, r in results if r.known)))
    table.add_row("Unknown", str(source_counts.get("unknown", 0)))
    table.add_row("Failed to open", str(failed))
    table.add_row("", "")

    for source, count in sorted(source_counts.items()):
        if source != "unknown":
            table.add_row(f"From {source}", str(count))

    console.print(table)


def print_version(ctx: click.Context, param: click.Parameter, value: bool) -> None:
    if not value or ctx.resilient_parsing:
        return
    click.echo(f"imagedate {get_version_string()}")
    ctx.exit()


@click.command()
@click.argument("paths", nargs=-1, required=True, type=click.Path())
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write results to a file instead of stdout",
)
@click.option(
    "--recursive/--no-recursive",
    default=True,
    help="Scan directories recursively",
)
@click.option(
    "--backend",
    type=click.Choice(["pillow", "exiftool"], case_sensitive=False),
    default=None,
    help="Metadata reader (defaults to IMAGEDATE_METADATA_BACKEND or pillow)",
)
@click.option(
    "--sort-by",
    type=click.Choice(["timestamp", "path", "source"], case_sensitive=False),
    default="path",
    help="Sort output by timestamp, path, or source",
)
@click.option("--iso", is_flag=True, help="Also print the timestamp as ISO-8601 UTC")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose logging")
@click.option(
    "-q",
    "--quiet",
    is_flag=True,
    help="Suppress all output except results and errors",
)
@click.option(
    "--version",
    is_flag=True,
    callback=print_version,
    expose_value=False,
    is_eager=True,
    help="Show the version and exit",
)
def cli(
    paths: Tuple[str, ...],
    output: Optional[str],
    recursive: bool,
    backend: Optional[str],
    sort_by: str,
    iso: bool,
    verbose: bool,
    quiet: bool,
) -> None:
    """
    Resolve the creation timestamp of images.

    EXIF dates (DateTimeOriginal, DateTimeDigitized, DateTime) are preferred;
    filesystem creation, modification and access times are the fallback.
    Files with no date at all report 1936268400 with source "unknown".

    PATHS: Image files or directories containing images
    """
    setup_logging(verbose=verbose, quiet=quiet, level=settings.log_level)

    config = Settings(metadata_backend=backend) if backend else settings
    image_files = expand_image_paths((Path(p) for p in paths), recursive=recursive)

    if not image_files:
        if not quiet:
            console.print("[yellow]No image files found.[/yellow]")
        sys.exit(0)

    results: List[Tuple[Path, Resolution]] = []
    failed = 0
    with DateResolver(settings=config) as resolver:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            TextColumn("[progress.percentage]{task.percentage:>3.0f}%"),
            console=console,
            disable=quiet,
        ) as progress:
            task = progress.add_task("Resolving dates...", total=len(image_files))

            for image_path in image_files:
                try:
                    results.append((image_path, resolver.resolve(image_path)))
                except ImageOpenError as e:
                    click.echo(str(e), err=True)
                    failed += 1
                progress.advance(task)

    if sort_by == "timestamp":
        results.sort(key=lambda x: (x[1].timestamp, str(x[0])))
    elif sort_by == "source":
        results.sort(key=lambda x: (x[1].source, str(x[0])))
    else:
        results.sort(key=lambda x: str(x[0]))

    lines = [format_line(path, resolution, iso) for path, resolution in results]
    if output:
        output_path = Path(output)
        with open(output_path, "w", encoding="utf-8") as f:
            for line in lines:
                f.write(line + "\n")
    else:
        for line in lines:
            click.echo(line)

    if not quiet:
        display_summary(results, failed)
        if output:
            console.print(f"\n[green]Results written to:[/green] {output}")

    sys.exit(1 if failed else 0)


if __name__ == "__main__":
    cli()
