"""Tower Stories CLI.

Usage:
    python -m tower_stories <command> [options]

Generator commands (uniform, basement) build a story table and either print
it or write it to --output. Read-only commands (validate, show, render) take
a story table JSON file. All output is JSON on stdout.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import typer

from tower_stories.defaults import DEFAULT_STORY_PREFIX
from tower_stories.errors import InvalidArgument
from tower_stories.export.engine import StoryTable, from_table, to_table, validate_table
from tower_stories.generators.stacks import uniform as build_uniform
from tower_stories.generators.stacks import with_basement
from tower_stories.models.topology import StoryTopology

app = typer.Typer(
    name="tower_stories",
    help="Tower Stories — build and check story stacks for the analysis engine.",
    no_args_is_help=True,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log to stderr"),
):
    """Build and check story stacks."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _output(data: dict) -> None:
    """Print JSON output to stdout."""
    typer.echo(json.dumps(data, indent=2, ensure_ascii=False))


def _fail(message: str) -> None:
    _output({"ok": False, "error": message})
    raise typer.Exit(1)


def _load_table(path: Path) -> StoryTable:
    """Load a story table file or exit with a JSON error."""
    if not path.exists():
        _fail(f"File not found: {path}")
    try:
        return StoryTable.load(path)
    except ValueError as e:
        _fail(f"Invalid story table {path}: {e}")
    except OSError as e:
        _fail(f"Cannot read {path}: {e}")


def _load_topology(path: Path) -> StoryTopology:
    try:
        return from_table(_load_table(path))
    except InvalidArgument as e:
        _fail(str(e))


def _stories_json(topology: StoryTopology) -> list[dict]:
    return [
        {
            "name": s.name,
            "elevation": s.elevation,
            "height": s.height,
            "master": s.is_master_story,
            "similar_to": s.similar_to_story,
        }
        for s in topology.stories
    ]


def _emit_table(topology: StoryTopology, output: Optional[Path]) -> None:
    """Print the generated table, or save it and print a summary."""
    table = to_table(topology)
    result: dict = {
        "ok": True,
        "stories": table.number_stories,
        "total_height": topology.total_height(),
    }
    if output:
        result["path"] = str(table.save(output))
    else:
        result["table"] = table.model_dump()
    _output(result)


# ---------------------------------------------------------------------------
# Generators
# ---------------------------------------------------------------------------

@app.command()
def uniform(
    count: int = typer.Option(..., "--count", "-n", help="Number of stories"),
    height: float = typer.Option(..., "--height", help="Typical story height"),
    base: float = typer.Option(0.0, "--base", "-b", help="Base elevation"),
    first_height: Optional[float] = typer.Option(
        None, "--first-height", help="Height of the bottom story"
    ),
    prefix: str = typer.Option(DEFAULT_STORY_PREFIX, "--prefix", help="Story name prefix"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write table JSON here"),
):
    """Generate equal-height stories STORY1..STORYn."""
    try:
        topology = build_uniform(base, count, height, first_height, prefix)
    except InvalidArgument as e:
        _fail(str(e))
    _emit_table(topology, output)


@app.command()
def basement(
    basement_levels: int = typer.Option(..., "--basements", help="Stories below ground"),
    above_ground: int = typer.Option(..., "--above", help="Stories from GROUND up"),
    basement_height: float = typer.Option(..., "--basement-height", help="Basement story height"),
    height: float = typer.Option(..., "--height", help="Typical story height"),
    ground_height: Optional[float] = typer.Option(
        None, "--ground-height", help="Height of GROUND"
    ),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write table JSON here"),
):
    """Generate B{n}..B1, GROUND and LEVEL stories."""
    try:
        topology = with_basement(
            basement_levels, above_ground, basement_height, height, ground_height
        )
    except InvalidArgument as e:
        _fail(str(e))
    _emit_table(topology, output)


# ---------------------------------------------------------------------------
# Read-only commands
# ---------------------------------------------------------------------------

@app.command()
def validate(path: Path = typer.Argument(..., help="Story table JSON file")):
    """Check a story table against the topology invariants."""
    table = _load_table(path)
    result = validate_table(table)
    validation: dict = {"valid": result.ok}
    if result.violation is not None:
        v = result.violation
        validation["violation"] = {
            "rule": v.rule.value,
            "message": v.message,
            "stories": v.stories,
            "index": v.index,
        }
    _output({"ok": True, "validation": validation})


@app.command()
def show(path: Path = typer.Argument(..., help="Story table JSON file")):
    """Summarize the stories in a table."""
    topology = _load_topology(path)
    _output({
        "ok": True,
        "base_elevation": topology.base_elevation,
        "total_height": topology.total_height(),
        "masters": topology.masters(),
        "stories": _stories_json(topology),
        "summary": topology.describe(),
    })


@app.command()
def render(
    path: Path = typer.Argument(..., help="Story table JSON file"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="PNG path"),
):
    """Render the story stack to PNG."""
    from tower_stories.export.section import render_section

    topology = _load_topology(path)
    out = output or path.with_suffix(".png")
    rendered = render_section(topology, out)
    _output({"ok": True, "rendered": str(rendered)})


@app.command()
def version() -> None:
    """Show version."""
    from tower_stories import __version__

    _output({"ok": True, "version": __version__})


if __name__ == "__main__":
    app()
