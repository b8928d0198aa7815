"""relnet CLI - inspect relationship networks from the terminal.

Usage:
    relnet paths family.yaml alice carol --max-depth 3
    relnet graph family.json
    relnet visibility family.yaml --hide-group cousins
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from relnet.app.config import RelnetConfig, get_config, set_config
from relnet.core.errors import ConfigError, NetworkLoadError
from relnet.core.models.person import Network
from relnet.domain.graph.reconciler import GraphReconciler
from relnet.domain.graph.surface import InMemorySurface
from relnet.domain.groups.visibility import VisibilityIndex
from relnet.domain.paths.finder import describe_path, find_paths, shortest_paths
from relnet.storage.loader import load_network
from relnet.utils.logging import setup_logging

app = typer.Typer(
    name="relnet",
    help="Relationship network graph tools",
    add_completion=False,
)

console = Console()


@app.callback()
def main_callback(
    config: Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to configuration file")] = None,
    log_level: Annotated[Optional[str], typer.Option("--log-level", "-l", help="DEBUG, INFO, WARNING or ERROR")] = None,
    log_file: Annotated[Optional[Path], typer.Option("--log-file", help="Also write logs to this file")] = None,
) -> None:
    """Load configuration and set up logging."""
    try:
        settings = RelnetConfig.load(config)
        if log_level:
            settings.apply_env({"RELNET_LOG_LEVEL": log_level})
    except ConfigError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    setup_logging(level=settings.log_level, log_file=log_file)
    set_config(settings)


def _load(file: Path) -> Network:
    try:
        return load_network(file)
    except NetworkLoadError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


def _require_person(network: Network, person_id: str) -> None:
    if network.get_person(person_id) is None:
        console.print(f"[yellow]Unknown person:[/yellow] {person_id}")


@app.command("paths")
def paths_command(
    file: Annotated[Path, typer.Argument(help="Network file (.json, .yaml)")],
    from_id: Annotated[str, typer.Argument(help="Start person id")],
    to_id: Annotated[str, typer.Argument(help="Target person id")],
    max_depth: Annotated[Optional[int], typer.Option("--max-depth", "-d", help="Maximum hops per path")] = None,
    shortest: Annotated[bool, typer.Option("--shortest", "-s", help="Only the shortest paths")] = False,
) -> None:
    """Show every relationship chain between two people."""
    network = _load(file)
    _require_person(network, from_id)
    _require_person(network, to_id)

    if shortest:
        found = shortest_paths(network.people, from_id, to_id)
    else:
        depth = max_depth if max_depth is not None else get_config().paths.default_max_depth
        found = find_paths(network.people, from_id, to_id, depth)

    if not found:
        console.print(f"No path from [bold]{from_id}[/bold] to [bold]{to_id}[/bold]")
        return

    table = Table(title=f"{len(found)} path(s) {from_id} -> {to_id}")
    table.add_column("#", justify="right")
    table.add_column("Hops", justify="right")
    table.add_column("Chain")
    for i, path in enumerate(found, start=1):
        table.add_row(str(i), str(len(path)), describe_path(path, network.people))
    console.print(table)


@app.command("graph")
def graph_command(
    file: Annotated[Path, typer.Argument(help="Network file (.json, .yaml)")],
) -> None:
    """Build the simulation graph and list each node's neighbors."""
    network = _load(file)
    surface = InMemorySurface()
    reconciler = GraphReconciler(get_config().graph.reconcile_strategy)
    result = reconciler.reconcile(surface.get_graph_data(), network.people, set())
    surface.set_graph_data(result.graph_data)
    data = result.graph_data

    console.print(Panel(
        f"[bold]Network:[/bold] {network.name or network.id}\n"
        f"[bold]Nodes:[/bold] {len(data.nodes)}\n"
        f"[bold]Links:[/bold] {len(data.links)}\n"
        f"[bold]Pinned:[/bold] {len(result.pinned)}",
        title="Graph",
        border_style="blue",
    ))

    table = Table()
    table.add_column("Id")
    table.add_column("Name")
    table.add_column("Neighbors")
    table.add_column("Position")
    for node in data.nodes:
        neighbors = sorted({n.id for n in node.neighbors})
        position = f"({node.x:.1f}, {node.y:.1f})" if node.position else "-"
        table.add_row(node.id, node.name, ", ".join(neighbors), position)
    console.print(table)


@app.command("visibility")
def visibility_command(
    file: Annotated[Path, typer.Argument(help="Network file (.json, .yaml)")],
    hide_group: Annotated[Optional[list[str]], typer.Option("--hide-group", "-g", help="Group id to hide")] = None,
    hide_node: Annotated[Optional[list[str]], typer.Option("--hide-node", "-n", help="Person id to hide")] = None,
    hide_ungrouped: Annotated[bool, typer.Option("--hide-ungrouped", help="Hide people in no group")] = False,
) -> None:
    """Show which people are visible under the given filters."""
    network = _load(file)
    index = VisibilityIndex(show_nodes_without_groups=not hide_ungrouped)
    for group_id in hide_group or []:
        index.toggle_group(group_id, network.people, network.groups, show=False)
    for person_id in hide_node or []:
        index.set_node_visibility(person_id, False)

    visibility = index.visibility_map(network.people, network.groups)
    table = Table(title=f"Visibility ({sum(visibility.values())}/{len(visibility)} visible)")
    table.add_column("Id")
    table.add_column("Name")
    table.add_column("Visible")
    for person in network.people:
        if person.id not in visibility:
            continue
        shown = visibility[person.id]
        table.add_row(person.id, person.name, "[green]yes[/green]" if shown else "[red]no[/red]")
    console.print(table)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
