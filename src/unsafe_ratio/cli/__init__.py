"""CLI entry point: registers the count command."""

import typer

app = typer.Typer(
    name="unsafe-ratio",
    help="Count the share of Rust statements that run inside unsafe code.",
    add_completion=False,
    rich_markup_mode="rich",
)


# Import commands to register them
from .count import count as _count  # noqa: F401, E402
