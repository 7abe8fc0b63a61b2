"""Database management commands."""

from pathlib import Path
from typing import List, Optional

import typer
from alembic import command
from alembic.config import Config
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from sqlalchemy import inspect, text
from sqlalchemy.exc import SQLAlchemyError

from mcqbank.core.config_file import get_settings
from mcqbank.core.content.loader import ContentLoader
from mcqbank.core.db.session import Base, get_engine, session_scope
from mcqbank.core.exceptions import CatalogError, MCQBankError, UnknownPartitionError
from mcqbank.core.seeders import CatalogSeeder, PartitionSeeder, SeederManager
from mcqbank.models.seed_run import SEED_RUN_FAILED, SEED_RUN_NO_CONTENT
from mcqbank.schemas.catalog import Catalog, PartitionKey

MIGRATIONS_DIR = Path(__file__).resolve().parents[2] / "migrations"

app = typer.Typer(help="Database management commands")
console = Console()


def _print_error(error: MCQBankError) -> None:
    console.print(f"[red]✗ {escape(error.message)}[/red]")
    if isinstance(error, UnknownPartitionError):
        console.print("\n[yellow]Available partitions:[/yellow]")
        for key in error.available:
            console.print(f"  • {key}")


def _load_catalog(loader: ContentLoader) -> Catalog:
    try:
        return loader.catalog
    except CatalogError as e:
        _print_error(e)
        raise typer.Exit(1)


def _counts_table(title: str, counts: dict[PartitionKey, int], keys: list[PartitionKey]) -> Table:
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Module")
    table.add_column("Topic")
    table.add_column("Questions", justify="right")
    for key in keys:
        table.add_row(key.module_id, key.topic, str(counts.get(key, 0)))
    return table


@app.command()
def init() -> None:
    """Create all tables that do not exist yet."""
    console.print("\n[bold cyan]Creating tables...[/bold cyan]")
    try:
        Base.metadata.create_all(bind=get_engine())
    except SQLAlchemyError as e:
        console.print(f"[red]✗ Could not create tables: {escape(str(e))}[/red]")
        raise typer.Exit(1)
    console.print("[green]✓ Tables created[/green]")


@app.command()
def migrate(
    revision: str = typer.Argument("head", help="Target revision"),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Path to alembic.ini. Defaults to the bundled migrations"
    ),
) -> None:
    """Apply Alembic migrations."""
    if config_path is None:
        alembic_cfg = Config()
        alembic_cfg.set_main_option("script_location", str(MIGRATIONS_DIR))
    elif not config_path.exists():
        console.print(f"[red]✗ Alembic config not found: {config_path}[/red]")
        raise typer.Exit(1)
    else:
        alembic_cfg = Config(str(config_path))
    # ConfigParser interpolation treats % as special
    alembic_cfg.set_main_option("sqlalchemy.url", get_settings().DATABASE_URL.replace("%", "%%"))

    console.print(f"\n[bold cyan]Upgrading database to {revision}...[/bold cyan]")
    try:
        command.upgrade(alembic_cfg, revision)
    except SQLAlchemyError as e:
        console.print(f"[red]✗ Migration failed: {escape(str(e))}[/red]")
        raise typer.Exit(1)
    console.print("[green]✓ Database is up to date[/green]")


@app.command()
def seed(
    selectors: Optional[List[str]] = typer.Argument(None, help="Module ids or topic ids to reseed"),
    all_partitions: bool = typer.Option(False, "--all", help="Reseed every catalog partition"),
    batch_size: Optional[int] = typer.Option(None, "--batch-size", min=1, help="Records per batch"),
) -> None:
    """Reseed partitions from the question content files."""
    loader = ContentLoader()
    catalog = _load_catalog(loader)

    if not selectors and not all_partitions:
        console.print("[yellow]Specify a module or topic to reseed, or use --all[/yellow]")
        console.print("\n[bold]Available modules:[/bold]")
        for module in catalog.modules:
            topics = ", ".join(topic.id for topic in module.topics)
            console.print(f"  • {module.id} ({module.name}): {topics}")
        raise typer.Exit(1)

    try:
        entries = loader.resolve(None if all_partitions else selectors)
    except UnknownPartitionError as e:
        _print_error(e)
        raise typer.Exit(1)

    keys = [entry.key for entry in entries]
    console.print(f"\n[bold cyan]Reseeding {len(entries)} partition(s)...[/bold cyan]")

    with session_scope() as db:
        partition_seeder = PartitionSeeder(db)
        try:
            console.print(_counts_table("Before", partition_seeder.partition_counts(), keys))
            seeder = CatalogSeeder(loader, entries, batch_size=batch_size)
            result = SeederManager().execute(seeder, db)
            if "report" in result:
                console.print(_counts_table("After", partition_seeder.partition_counts(), keys))
        except SQLAlchemyError as e:
            console.print(f"[red]✗ Database error: {escape(str(e))}[/red]")
            raise typer.Exit(1)

    if "report" not in result:
        console.print(f"[red]✗ Error: {escape(result.get('error', 'Unknown error'))}[/red]")
        raise typer.Exit(1)

    for outcome in result["report"].outcomes:
        if outcome.status == SEED_RUN_NO_CONTENT:
            console.print(f"[yellow]• {outcome.key}: no content, left untouched[/yellow]")
        elif outcome.status == SEED_RUN_FAILED:
            console.print(f"[red]✗ {outcome.key}: {escape(outcome.error)}[/red]")
        else:
            reseed = outcome.result
            line = f"[green]✓ {outcome.key}: {reseed.inserted} inserted[/green]"
            if reseed.skipped_count or reseed.failed:
                line += f" [yellow]({reseed.skipped_count} skipped, {reseed.failed} failed)[/yellow]"
            console.print(line)

    if not result["success"]:
        console.print(f"\n[red]✗ {len(result['failed'])} partition(s) failed[/red]")
        raise typer.Exit(1)
    console.print(f"\n[green]✓ Imported {result['inserted']} question(s)[/green]")


@app.command()
def cleanup(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Remove questions outside the catalog and questions flagged as samples."""
    catalog = _load_catalog(ContentLoader())

    console.print(
        "\n[bold red]⚠ WARNING: This deletes every question outside the catalog "
        "and every flagged sample, with their options and attempts![/bold red]"
    )
    if not yes:
        confirm = typer.confirm("Are you sure you want to clean up the database?", default=False)
        if not confirm:
            console.print("[yellow]Cleanup cancelled[/yellow]")
            raise typer.Exit(0)

    with session_scope() as db:
        try:
            result = PartitionSeeder(db).cleanup_invalid_partitions(catalog.keys())
        except MCQBankError as e:
            _print_error(e)
            raise typer.Exit(1)

    if not result.removed_questions:
        console.print("[green]✓ Database is clean[/green]")
        return

    for key, count in sorted(result.removed_by_partition.items()):
        console.print(f"  • {key}: {count} question(s)")
    console.print(
        f"[green]✓ Removed {result.removed_questions} question(s), "
        f"{result.removed_options} option(s), {result.removed_attempts} attempt(s)[/green]"
    )


@app.command("flag-samples")
def flag_samples(
    markers: Optional[List[str]] = typer.Option(
        None, "--marker", "-m", help="Text marking placeholder questions (repeatable)"
    ),
) -> None:
    """Flag placeholder questions so cleanup removes them."""
    markers = markers or get_settings().SAMPLE_MARKERS
    console.print(f"\n[bold cyan]Flagging questions containing: {', '.join(markers)}[/bold cyan]")

    with session_scope() as db:
        try:
            flagged = PartitionSeeder(db).flag_sample_questions(markers)
        except MCQBankError as e:
            _print_error(e)
            raise typer.Exit(1)

    console.print(f"[green]✓ Flagged {flagged} question(s) as samples[/green]")
    if flagged:
        console.print("  Run [bold]mcqbank db cleanup[/bold] to remove them")


@app.command()
def status() -> None:
    """Show question counts per partition."""
    catalog = _load_catalog(ContentLoader())

    with session_scope() as db:
        try:
            counts = PartitionSeeder(db).partition_counts()
        except SQLAlchemyError as e:
            console.print(f"[red]✗ Could not read question counts: {escape(str(e))}[/red]")
            raise typer.Exit(1)

    keys = [entry.key for entry in catalog.entries()]
    console.print(_counts_table("Questions per partition", counts, keys))

    unknown = [key for key in counts if key not in catalog.keys()]
    if unknown:
        console.print("\n[yellow]Partitions not in the catalog (removed by cleanup):[/yellow]")
        for key in unknown:
            console.print(f"  • {key}: {counts[key]} question(s)")

    console.print(f"\n[bold]Total:[/bold] {sum(counts.values())} question(s)")


@app.command()
def history(
    limit: int = typer.Option(20, "--limit", "-n", min=1, help="Number of runs to show"),
) -> None:
    """Show recent seed runs."""
    with session_scope() as db:
        try:
            runs = SeederManager().history(db, limit=limit)
        except SQLAlchemyError as e:
            console.print(f"[red]✗ Could not read seed history: {escape(str(e))}[/red]")
            raise typer.Exit(1)

    if not runs:
        console.print("[yellow]No seed runs recorded[/yellow]")
        return

    table = Table(title="Seed runs", show_header=True, header_style="bold cyan")
    table.add_column("Executed at")
    table.add_column("Partition")
    table.add_column("Status")
    table.add_column("Inserted", justify="right")
    table.add_column("Skipped", justify="right")
    table.add_column("Failed", justify="right")
    table.add_column("Error")
    for run in runs:
        table.add_row(
            run.executed_at.strftime("%Y-%m-%d %H:%M:%S"),
            f"{run.module_id}/{run.topic}",
            run.status,
            str(run.inserted),
            str(run.skipped),
            str(run.failed_records),
            run.error or "",
        )
    console.print(table)


@app.command()
def check() -> None:
    """Check database connection and schema."""
    console.print("\n[bold cyan]Checking database connection...[/bold cyan]")

    engine = get_engine()
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
            tables = set(inspect(connection).get_table_names())
    except SQLAlchemyError as e:
        console.print("\n[red]✗ Database connection failed:[/red]")
        console.print(f"  {escape(str(e))}")
        raise typer.Exit(1)

    console.print("\n[green]✓ Database connection successful[/green]")
    console.print("\n[bold]Database Information:[/bold]")
    console.print(f"  Dialect: {engine.dialect.name}")
    console.print(f"  URL: {engine.url.render_as_string(hide_password=True)}")
    console.print(f"  Tables: {len(tables)}")

    missing = sorted(set(Base.metadata.tables) - tables)
    if missing:
        console.print(f"\n[yellow]⚠ Missing tables: {', '.join(missing)}[/yellow]")
        console.print("  Run [bold]mcqbank db init[/bold] or [bold]mcqbank db migrate[/bold]")
        raise typer.Exit(1)
