"""CLI for inspecting forests through the tree controller (show, stats, validate, replay)."""

import json
from dataclasses import asdict
from pathlib import Path
from typing import Annotated, Any

import typer
from loguru import logger

from canopy.config import TreeConfig, load_config
from canopy.controller import TreeController
from canopy.core.importer.loader import load_forest
from canopy.core.tree.markdown import render_visible_as_markdown
from canopy.logging_config import configure_logging

app = typer.Typer(help="Canopy: load a forest and inspect its tree state.")


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log warnings and errors"),
    config: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="JSON config file (default: $CANOPY_CONFIG)"),
    ] = None,
) -> None:
    configure_logging(verbose=verbose, quiet=quiet)
    try:
        ctx.obj = load_config(config)
    except (OSError, ValueError) as e:
        logger.error("Could not load config: {}", e)
        raise typer.Exit(1) from e


def _open_tree(ctx: typer.Context, file: Path) -> TreeController:
    """Load a forest file into a controller, exiting on unreadable input."""
    config = ctx.obj if isinstance(ctx.obj, TreeConfig) else TreeConfig()
    try:
        forest = load_forest(file)
    except (FileNotFoundError, ValueError) as e:
        logger.error("{}", e)
        raise typer.Exit(1) from e
    return TreeController(forest, config=config)


def _read_json(path: Path, what: str) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.error("Could not read {} {}: {}", what, path, e)
        raise typer.Exit(1) from e


@app.command()
def show(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help="Forest JSON file"),
    depth: Annotated[
        int | None,
        typer.Option("--depth", "-d", help="Expand nodes shallower than this depth"),
    ] = None,
    expand_all: bool = typer.Option(False, "--expand-all", "-a", help="Expand every node"),
    search: Annotated[
        str | None,
        typer.Option("--search", "-s", help="Search and reveal matching nodes"),
    ] = None,
    state: Annotated[
        Path | None,
        typer.Option("--state", help="Snapshot JSON to restore before rendering"),
    ] = None,
    show_ids: bool = typer.Option(False, "--ids", help="Show node ids"),
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """Print the visible outline of a forest."""
    tree = _open_tree(ctx, file)

    with tree.batch():
        if state is not None:
            tree.import_state(_read_json(state, "snapshot"))
        if expand_all:
            tree.expand_all()
        elif depth is not None:
            tree.expand_to_depth(depth)
        if search:
            tree.search(search)

    if output_json:
        nodes = []
        for node_id in tree.visible_order():
            node = tree.get_node(node_id)
            if node is None:
                continue
            nodes.append(
                {
                    "id": node.id,
                    "label": node.label,
                    "depth": node.depth,
                    "child_count": node.child_count,
                    "expanded": tree.is_expanded(node_id),
                    "selected": tree.is_selected(node_id),
                    "match": tree.is_search_result(node_id),
                }
            )
        data = {"nodes": nodes, "state": tree.export_state().to_dict()}
        typer.echo(json.dumps(data, indent=2, ensure_ascii=False))
        return

    md = render_visible_as_markdown(tree, show_ids=show_ids)
    if md:
        typer.echo(md, nl=False)
    else:
        typer.echo("Forest is empty.")


@app.command()
def stats(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help="Forest JSON file"),
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """Show node counts for a forest."""
    tree = _open_tree(ctx, file)
    tree.expand_all()
    result = tree.stats()

    if output_json:
        data = asdict(result)
        data["diagnostics"] = len(tree.diagnostics)
        typer.echo(json.dumps(data, indent=2))
        return

    typer.echo(f"{result.total_nodes} nodes in {result.root_nodes} root(s)")
    typer.echo(f"  max depth:   {result.max_depth}")
    typer.echo(f"  expandable:  {result.expanded_nodes}")
    typer.echo(f"  diagnostics: {len(tree.diagnostics)}")


@app.command()
def validate(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help="Forest JSON file"),
    strict: bool = typer.Option(False, "--strict", help="Fail on pruned records too"),
) -> None:
    """Check a forest for cycles, duplicates and malformed records."""
    tree = _open_tree(ctx, file)
    report = tree.validate()

    for error in report.errors:
        typer.echo(f"error: {error}")
    for diagnostic in tree.diagnostics:
        typer.echo(f"warning: [{diagnostic.kind}] {diagnostic.message}")

    if not report.valid or (strict and report.warnings):
        typer.echo("Forest is invalid.")
        raise typer.Exit(1)
    typer.echo(f"Forest is valid ({len(tree)} nodes, {len(report.warnings)} warnings).")


@app.command()
def replay(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help="Forest JSON file"),
    script: Path = typer.Argument(..., help='JSON list of {"command": ..., "args": {...}}'),
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the resulting snapshot here"),
    ] = None,
) -> None:
    """Run a command script against a forest and print the resulting state."""
    tree = _open_tree(ctx, file)
    steps = _read_json(script, "script")
    if not isinstance(steps, list):
        logger.error("Script {} must contain a JSON list", script)
        raise typer.Exit(1)

    for number, step in enumerate(steps, start=1):
        if not isinstance(step, dict) or not isinstance(step.get("command"), str):
            logger.error("Step {} is not a command object: {!r}", number, step)
            raise typer.Exit(1)
        name = step["command"]
        args = step.get("args") or {}
        if not tree.has_command(name):
            logger.error("Step {}: unknown command {!r}", number, name)
            raise typer.Exit(1)
        try:
            tree.execute_command(name, **args)
        except (TypeError, ValueError) as e:
            logger.error("Step {} ({}) failed: {}", number, name, e)
            raise typer.Exit(1) from e

    text = json.dumps(tree.export_state().to_dict(), indent=2, ensure_ascii=False)
    if output is not None:
        output.write_text(text + "\n", encoding="utf-8")
        typer.echo(f"Ran {len(steps)} command(s), snapshot written to {output}")
    else:
        typer.echo(text)
