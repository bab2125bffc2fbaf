"""CLI commands for the record store."""

from __future__ import annotations

import click

from fulfillment.domain.exceptions import DomainException
from fulfillment.infrastructure.bootstrap import engine, session_factory
from fulfillment.infrastructure.persistence.database import create_schema
from fulfillment.infrastructure.persistence.seed import seed


@click.command("init")
@click.option("--seed", "with_seed", is_flag=True, default=False, help="Load demo customers and products.")
def db_init(with_seed: bool) -> None:
    """Create the tables (idempotent)."""
    create_schema(engine())
    click.echo("Schema ready.")

    if not with_seed:
        return

    try:
        loaded = seed(session_factory())
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo("Demo data loaded." if loaded else "Data already present, seed skipped.")
