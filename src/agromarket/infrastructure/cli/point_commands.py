"""CLI commands for delivery points."""

from __future__ import annotations

import click

from agromarket.application.delivery_points import (
    AddDeliveryPointHandler,
    DeleteDeliveryPointHandler,
    ListDeliveryPointsHandler,
    UpdateDeliveryPointHandler,
)
from agromarket.application.dto import DeliveryPointChanges, DeliveryPointDTO
from agromarket.domain.exceptions import DomainException
from agromarket.infrastructure import bootstrap
from agromarket.infrastructure.config import Settings


def _coords(dto: DeliveryPointDTO) -> str:
    if dto.latitude is None or dto.longitude is None:
        return "-"
    return f"{dto.latitude:.5f},{dto.longitude:.5f}"


def _display_point(dto: DeliveryPointDTO) -> None:
    click.echo(f"Delivery point {dto.id}")
    click.echo(f"  Name:    {dto.name}")
    click.echo(f"  Address: {dto.address or '-'}")
    click.echo(f"  Zone:    {dto.zone}")
    click.echo(f"  Coords:  {_coords(dto)}")
    click.echo(f"  Active:  {'yes' if dto.active else 'no'}")


@click.command("add")
@click.option("--farmer", "farmer_id", required=True, help="Owning farmer id.")
@click.option("--name", required=True, help="Point name.")
@click.option("--address", default="", help="Street address (looked up from coordinates if omitted).")
@click.option("--zone", required=True, help="Zone or neighbourhood.")
@click.option("--lat", "latitude", default=None, type=float, help="Latitude.")
@click.option("--lon", "longitude", default=None, type=float, help="Longitude.")
@click.option("--inactive", is_flag=True, default=False, help="Create disabled.")
@click.option("--no-geocode", is_flag=True, default=False, help="Skip address/coordinate lookup.")
@click.pass_obj
def point_add(
    config: Settings,
    farmer_id: str,
    name: str,
    address: str,
    zone: str,
    latitude: float | None,
    longitude: float | None,
    inactive: bool,
    no_geocode: bool,
) -> None:
    """Publish a new meeting point."""
    geocoder = None if no_geocode else bootstrap.geocoder(config)
    handler = AddDeliveryPointHandler(bootstrap.unit_of_work(config), geocoder)

    try:
        dto = handler.handle(
            farmer_id=farmer_id,
            name=name,
            address=address,
            zone=zone,
            latitude=latitude,
            longitude=longitude,
            active=not inactive,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_point(dto)


@click.command("update")
@click.option("--id", "point_id", required=True, help="Delivery point ID.")
@click.option("--farmer", "farmer_id", required=True, help="Your farmer id.")
@click.option("--name", default=None, help="New name.")
@click.option("--address", default=None, help="New address.")
@click.option("--zone", default=None, help="New zone.")
@click.option("--lat", "latitude", default=None, type=float, help="New latitude.")
@click.option("--lon", "longitude", default=None, type=float, help="New longitude.")
@click.option("--active/--inactive", default=None, help="Enable or disable the point.")
@click.option("--no-geocode", is_flag=True, default=False, help="Skip coordinate lookup.")
@click.pass_obj
def point_update(
    config: Settings,
    point_id: str,
    farmer_id: str,
    name: str | None,
    address: str | None,
    zone: str | None,
    latitude: float | None,
    longitude: float | None,
    active: bool | None,
    no_geocode: bool,
) -> None:
    """Edit one of your delivery points."""
    geocoder = None if no_geocode else bootstrap.geocoder(config)
    handler = UpdateDeliveryPointHandler(bootstrap.unit_of_work(config), geocoder)
    changes = DeliveryPointChanges(
        name=name,
        address=address,
        zone=zone,
        latitude=latitude,
        longitude=longitude,
        active=active,
    )

    try:
        dto = handler.handle(point_id, farmer_id, changes)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_point(dto)


@click.command("delete")
@click.option("--id", "point_id", required=True, help="Delivery point ID.")
@click.option("--farmer", "farmer_id", required=True, help="Your farmer id.")
@click.pass_obj
def point_delete(config: Settings, point_id: str, farmer_id: str) -> None:
    """Remove one of your delivery points."""
    handler = DeleteDeliveryPointHandler(bootstrap.unit_of_work(config))

    try:
        handler.handle(point_id, farmer_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Delivery point {point_id} deleted.")


@click.command("list")
@click.option("--farmer", "farmer_id", default=None, help="Only this farmer's points.")
@click.option("--zone", default=None, help="Only points in this zone.")
@click.option("--active-only", is_flag=True, default=False, help="Hide disabled points.")
@click.pass_obj
def point_list(
    config: Settings,
    farmer_id: str | None,
    zone: str | None,
    active_only: bool,
) -> None:
    """List delivery points, newest first."""
    handler = ListDeliveryPointsHandler(bootstrap.unit_of_work(config))

    try:
        dtos = handler.handle(farmer_id=farmer_id, zone=zone, active_only=active_only)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not dtos:
        click.echo("No delivery points found.")
        return

    for dto in dtos:
        marker = "" if dto.active else "  (inactive)"
        click.echo(f"  {dto.id}  {dto.name} [{dto.zone}] {dto.address or '-'}  {_coords(dto)}{marker}")
