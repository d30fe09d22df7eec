"""CLI for force-lab."""

from __future__ import annotations

import inspect
import logging
import random
from pathlib import Path

import click

from force_lab import __version__
from force_lab.layout import ALGORITHMS, StoppingPolicy, run_layout
from force_lab.layout.constants import DEFAULT_MAX_STEPS
from force_lab.layout.initial import radial_layout, random_layout
from force_lab.parser import read_graph
from force_lab.render import render_svg
from force_lab.themes import THEMES


def _load(input_file: Path):
    try:
        return read_graph(input_file)
    except ValueError as e:
        raise click.ClickException(f"Parse error: {e}") from e


@click.group()
@click.version_option(version=__version__)
@click.option("-v", "--verbose", is_flag=True, help="Log debug messages to stderr.")
def cli(verbose: bool) -> None:
    """force-lab: Lay out graphs by step-wise physical simulation."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, path_type=Path))
@click.option("-a", "--algorithm", type=click.Choice(list(ALGORITHMS.keys())),
              default="harel-koren", help="Layout algorithm (default: harel-koren)")
@click.option("-o", "--output", type=click.Path(path_type=Path), default=None,
              help="Output SVG file path. Defaults to <input>.svg")
@click.option("--steps", type=int, default=DEFAULT_MAX_STEPS,
              help=f"Maximum number of steps (default: {DEFAULT_MAX_STEPS})")
@click.option("--tolerance", type=float, default=None,
              help="Stop once no node moves further than this in one step")
@click.option("--seed", type=int, default=None, help="Random seed")
@click.option("--initial", type=click.Choice(["random", "radial"]), default="random",
              help="Starting layout (default: random)")
@click.option("--theme", type=click.Choice(list(THEMES.keys())), default="dark",
              help="Visual theme (default: dark)")
@click.option("--size", type=int, default=None, help="SVG width and height in pixels")
@click.option("--labels", is_flag=True, help="Draw node labels")
def layout(
    input_file: Path,
    algorithm: str,
    output: Path | None,
    steps: int,
    tolerance: float | None,
    seed: int | None,
    initial: str,
    theme: str,
    size: int | None,
    labels: bool,
) -> None:
    """Lay out a graph definition and render it to SVG."""
    graph = _load(input_file)

    if initial == "radial":
        radial_layout(graph, radius=len(graph))
    else:
        random_layout(graph, rng=random.Random(seed))
    # Keep the O(V^3) shortest-path computation out of the first step
    graph.compute_distances()

    cls = ALGORITHMS[algorithm]
    # Only the stochastic algorithms take a seed
    kwargs = {"seed": seed} if "seed" in inspect.signature(cls).parameters else {}
    algo = cls(graph, **kwargs)
    summary = run_layout(algo, StoppingPolicy(max_steps=steps, tolerance=tolerance))

    svg = render_svg(algo.graph, THEMES[theme], width=size, height=size,
                     show_labels=labels)
    if output is None:
        output = input_file.with_suffix(".svg")
    output.write_text(svg)

    status = "finished" if summary.finished else (
        "converged" if summary.converged else "stopped")
    click.echo(f"{algo.name}: {summary.steps} steps ({status}), "
               f"{len(graph)} nodes, {len(graph.edge_list())} edges, "
               f"{algo.graph.edge_crossings()} crossings -> {output}")


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, path_type=Path))
def info(input_file: Path) -> None:
    """Show information about a graph definition."""
    graph = _load(input_file)

    click.echo(f"Nodes: {len(graph)}")
    click.echo(f"Edges: {len(graph.edge_list())}")
    click.echo(f"Diameter: {graph.diameter()}")
    click.echo(f"Connected: {'yes' if graph.is_connected() else 'no'}")
