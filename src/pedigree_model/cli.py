"""CLI interface for the pedigree model."""

import json
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config import CONFIG
from .exceptions import PedigreeModelError
from .logging import LOG_LEVELS, configure_logging
from .pedigree import Pedigree

app = typer.Typer(
    name="pedigree-model",
    help="Normalize and inspect clinical pedigree record files",
    add_completion=False,
)
console = Console()


@app.callback()
def main(
    log_level: str = typer.Option(
        CONFIG.log_level, "--log-level", help="One of DEBUG, INFO, WARNING, ERROR, CRITICAL"
    ),
):
    """Pedigree record tools."""
    level = log_level.upper()
    if level not in LOG_LEVELS:
        raise typer.BadParameter(f"unknown level {log_level!r}", param_hint="--log-level")
    configure_logging(level)


def _load_pedigree(input_path: Path) -> Pedigree:
    """Read a JSON record file into a new pedigree, exiting on bad input."""
    if not input_path.exists():
        console.print(f"[red]Error: File not found: {escape(str(input_path))}[/red]")
        raise typer.Exit(1)

    try:
        records = json.loads(input_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        console.print(f"[red]Error: {input_path.name} is not valid JSON: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    pedigree = Pedigree()
    try:
        pedigree.load_records(records)
    except PedigreeModelError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)
    return pedigree


@app.command()
def normalize(
    input_path: Path = typer.Argument(..., help="JSON file with node records"),
    output: Path = typer.Option(None, "--output", "-o", help="Write records here instead of stdout"),
):
    """Load a record file through the model and write the normalized records."""
    pedigree = _load_pedigree(input_path)
    text = json.dumps(pedigree.to_records(), indent=2, ensure_ascii=False)

    if output is None:
        typer.echo(text)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text + "\n", encoding="utf-8")
    console.print(f"[green]Wrote {len(pedigree)} nodes to {escape(str(output))}[/green]")


@app.command()
def legend(
    input_path: Path = typer.Argument(..., help="JSON file with node records"),
):
    """Show every legend with its items and the nodes referencing them."""
    pedigree = _load_pedigree(input_path)

    shown = 0
    for registry in pedigree.legends.all():
        if not len(registry):
            continue
        table = Table(title=registry.category.capitalize())
        table.add_column("Item", style="dim")
        table.add_column("Name")
        table.add_column("Nodes")

        for item in registry.items():
            nodes = sorted(registry.get_cases(item), key=str)
            table.add_row(str(item), registry.get_name(item), ", ".join(str(n) for n in nodes))

        console.print(table)
        shown += 1

    if not shown:
        console.print(f"[yellow]No legend entries in {escape(input_path.name)}[/yellow]")
    else:
        console.print(f"[dim]{len(pedigree)} nodes, {shown} legends[/dim]")


if __name__ == "__main__":
    app()
