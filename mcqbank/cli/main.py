"""Main CLI entry point for the MCQ bank."""

import typer

from mcqbank.cli.commands import content, db
from mcqbank.core.logging import setup_logging

app = typer.Typer(
    name="mcqbank",
    help="MCQ bank CLI - content and database tools",
    add_completion=False,
)

# Register subcommands
app.add_typer(db.app, name="db")
app.add_typer(content.app, name="content")


@app.callback()
def configure(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output"),
) -> None:
    """Configure logging before any command runs."""
    setup_logging(level="DEBUG" if verbose else None)


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
