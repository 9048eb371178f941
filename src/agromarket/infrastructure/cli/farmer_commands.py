"""CLI commands for the farmer directory."""

from __future__ import annotations

import click

from agromarket.application.register_farmer import ListFarmersHandler, RegisterFarmerHandler
from agromarket.domain.exceptions import DomainException
from agromarket.infrastructure import bootstrap
from agromarket.infrastructure.config import Settings


@click.command("register")
@click.option("--id", "farmer_id", required=True, help="Farmer id.")
@click.option("--name", required=True, help="Display name.")
@click.option("--email", default=None, help="Where new-order emails are sent.")
@click.pass_obj
def farmer_register(config: Settings, farmer_id: str, name: str, email: str | None) -> None:
    """Register a farmer or update their details."""
    handler = RegisterFarmerHandler(bootstrap.unit_of_work(config))

    try:
        farmer = handler.handle(farmer_id, name, email)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Farmer {farmer.id} registered ({farmer.name}).")


@click.command("list")
@click.pass_obj
def farmer_list(config: Settings) -> None:
    """List registered farmers."""
    handler = ListFarmersHandler(bootstrap.unit_of_work(config))

    try:
        farmers = handler.handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not farmers:
        click.echo("No farmers registered.")
        return

    click.echo(f"  {'ID':<20} {'Name':<24} {'Email'}")
    click.echo(f"  {'-'*70}")
    for farmer in farmers:
        click.echo(f"  {farmer.id:<20} {farmer.name:<24} {farmer.email or '-'}")
