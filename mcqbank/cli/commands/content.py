"""Question content commands."""

from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from mcqbank.core.content.loader import ContentLoader
from mcqbank.core.exceptions import CatalogError, ContentLoadError, UnknownPartitionError
from mcqbank.core.seeders.partition import validate_candidates

app = typer.Typer(help="Question content commands")
console = Console()


@app.command("list")
def list_content() -> None:
    """Show the modules and topics of the catalog."""
    loader = ContentLoader()
    try:
        catalog = loader.catalog
    except CatalogError as e:
        console.print(f"[red]✗ {escape(e.message)}[/red]")
        raise typer.Exit(1)

    table = Table(title=f"Catalog ({loader.content_dir})", show_header=True, header_style="bold cyan")
    table.add_column("Module")
    table.add_column("Topic")
    table.add_column("Name")
    table.add_column("Premium")
    table.add_column("File")
    for module in catalog.modules:
        for topic in module.topics:
            entry_file = loader.content_dir / "questions" / topic.file
            file_label = topic.file if entry_file.is_file() else f"[red]{topic.file} (missing)[/red]"
            table.add_row(
                module.id,
                topic.id,
                topic.name,
                "yes" if module.is_premium else "no",
                file_label,
            )
    console.print(table)


@app.command()
def validate(
    selectors: Optional[List[str]] = typer.Argument(None, help="Module ids or topic ids to check"),
) -> None:
    """Validate content files without touching the database."""
    loader = ContentLoader()
    try:
        entries = loader.resolve(selectors)
    except (CatalogError, UnknownPartitionError) as e:
        console.print(f"[red]✗ {escape(e.message)}[/red]")
        raise typer.Exit(1)

    problems = 0
    for entry in entries:
        if not loader.has_content(entry):
            console.print(f"[yellow]• {entry.key}: no content file ({entry.file})[/yellow]")
            continue
        try:
            candidates = loader.load_candidates(entry)
        except ContentLoadError as e:
            problems += 1
            console.print(f"[red]✗ {entry.key}: {escape(e.message)}[/red]")
            continue

        valid, skipped = validate_candidates(candidates)
        if skipped:
            problems += len(skipped)
            console.print(f"[red]✗ {entry.key}: {len(skipped)} invalid record(s)[/red]")
            for record in skipped:
                console.print(f"    \\[{record.index}] {escape(record.reason)}")
        elif not valid:
            console.print(f"[yellow]• {entry.key}: empty[/yellow]")
        else:
            console.print(f"[green]✓ {entry.key}: {len(valid)} question(s)[/green]")

    if problems:
        console.print(f"\n[red]✗ Found {problems} problem(s)[/red]")
        raise typer.Exit(1)
    console.print("\n[green]✓ All content is valid[/green]")
