#!/usr/bin/env python3
"""
textgraph CLI - extract entity graphs from documents
"""

import asyncio
import json
import logging
from pathlib import Path

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from textgraph import __version__
from textgraph.errors import AcquisitionError, DuplicateDocumentError
from textgraph.knowledge_graph import (
    DocumentProcessor,
    FixedScorer,
    Graph,
    GraphAggregator,
    GraphWorkspace,
    RandomScorer,
    calculate_graph_stats,
)
from textgraph.settings import settings
from textgraph.sources import SAMPLES, WikipediaClient, sample_document, text_document

console = Console()


def _configure_logging(verbose: bool) -> None:
    level = "DEBUG" if verbose else (settings.log_level or "INFO").upper()
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def _workspace(ctx: click.Context) -> GraphWorkspace:
    opts = ctx.obj or {}
    if opts.get("fixed") is not None:
        scorer = FixedScorer(opts["fixed"])
    else:
        scorer = RandomScorer(settings.confidence_low, settings.confidence_high, opts.get("seed"))
    return GraphWorkspace(GraphAggregator(DocumentProcessor.with_scorer(scorer)))


def _render(graph: Graph, as_json: bool) -> None:
    if as_json:
        console.print_json(json.dumps(graph.to_dict()))
        return

    stats = calculate_graph_stats(graph)
    console.print(
        Panel.fit(
            f"[bold cyan]{stats.entity_count} entities, {stats.relationship_count} relationships[/bold cyan]\n"
            f"Sources: {', '.join(stats.sources) or '-'}"
        )
    )

    if not graph.entities:
        console.print("[yellow]No entities found[/yellow]")
        return

    table = Table(title="Entities")
    table.add_column("Id", style="cyan")
    table.add_column("Label", style="white", overflow="fold")
    table.add_column("Type", style="magenta", width=12)
    table.add_column("Conf", style="green", width=6)
    table.add_column("Source", style="blue", overflow="fold")
    for e in graph.entities:
        table.add_row(e.id, e.label, e.type, f"{e.confidence or 0:.2f}", e.source or "")
    console.print(table)

    if graph.relationships:
        rel_table = Table(title="Relationships")
        rel_table.add_column("From", style="cyan")
        rel_table.add_column("Label", style="magenta")
        rel_table.add_column("To", style="cyan")
        rel_table.add_column("Conf", style="green", width=6)
        for r in graph.relationships:
            rel_table.add_row(r.from_id, r.label, r.to_id, f"{r.confidence or 0:.2f}")
        console.print(rel_table)


@click.group()
@click.option("--seed", type=int, default=None, help="Seed for reproducible confidence scores")
@click.option("--fixed", type=float, default=None, help="Use one fixed confidence for every score")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging")
@click.pass_context
def cli(ctx, seed, fixed, verbose):
    """textgraph - turn documents into an entity graph"""
    _configure_logging(verbose)
    ctx.obj = {"seed": seed if seed is not None else settings.confidence_seed, "fixed": fixed}


@cli.command()
def version():
    """Print the package version"""
    click.echo(__version__)


@cli.command()
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--json", "as_json", is_flag=True, help="Print the graph as JSON")
@click.pass_context
def extract(ctx, paths, as_json):
    """Extract a graph from text files (title = file name)"""
    ws = _workspace(ctx)
    for path in paths:
        content = path.read_text(encoding="utf-8", errors="replace")
        try:
            ws.add(text_document(path.stem, content))
        except AcquisitionError as e:
            console.print(f"[red]Skipping {path}: {e}[/red]")
    _render(ws.graph, as_json)


async def _fetch_wikipedia(ws: GraphWorkspace, titles, transport=None) -> int:
    failed = 0
    async with WikipediaClient(transport=transport) as client:
        for title in titles:
            try:
                await ws.acquire(client.summary(title))
            except AcquisitionError as e:
                failed += 1
                console.print(f"[red]{e}[/red]")
            except DuplicateDocumentError:
                console.print(f"[yellow]Skipping {title}: already loaded[/yellow]")
    return failed


@cli.command()
@click.argument("titles", nargs=-1, required=True)
@click.option("--json", "as_json", is_flag=True, help="Print the graph as JSON")
@click.pass_context
def wikipedia(ctx, titles, as_json):
    """Fetch Wikipedia summaries and extract a graph"""
    ws = _workspace(ctx)
    failed = asyncio.run(_fetch_wikipedia(ws, titles))
    _render(ws.graph, as_json)
    if failed:
        raise SystemExit(1)


@cli.command()
@click.argument("names", nargs=-1, type=click.Choice(sorted(SAMPLES)))
@click.option("--json", "as_json", is_flag=True, help="Print the graph as JSON")
@click.pass_context
def sample(ctx, names, as_json):
    """Extract a graph from the built-in sample documents"""
    ws = _workspace(ctx)
    for name in names or sorted(SAMPLES):
        try:
            ws.add(sample_document(name))
        except DuplicateDocumentError:
            console.print(f"[yellow]Skipping sample {name}: already loaded[/yellow]")
    _render(ws.graph, as_json)


@cli.command()
@click.option("--host", default=None, help=f"Bind host (default {settings.bind_host})")
@click.option("--port", default=None, type=int, help=f"Bind port (default {settings.bind_port})")
def serve(host, port):
    """Serve the graph API"""
    from textgraph.server.main import main as serve_main

    serve_main(host=host, port=port)


def main():
    cli()


if __name__ == "__main__":
    main()
