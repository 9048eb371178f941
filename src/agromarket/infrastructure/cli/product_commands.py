"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from agromarket.application.add_product import AddProductHandler
from agromarket.application.delete_product import DeleteProductHandler
from agromarket.application.dto import ProductChanges, ProductDTO
from agromarket.application.list_products import ListProductsHandler
from agromarket.application.update_product import UpdateProductHandler
from agromarket.domain.exceptions import DomainException
from agromarket.domain.model.availability import AvailabilityTier
from agromarket.infrastructure import bootstrap
from agromarket.infrastructure.config import Settings


def _display_product(dto: ProductDTO) -> None:
    click.echo(f"Product {dto.id}")
    click.echo(f"  Name:         {dto.name}")
    click.echo(f"  Seller:       {dto.seller_name or dto.farmer_id}")
    click.echo(f"  Stock:        {dto.stock}")
    click.echo(f"  Availability: {dto.availability}")
    click.echo(f"  Active:       {'yes' if dto.active else 'no'}")


@click.command("add")
@click.option("--farmer", "farmer_id", required=True, help="Owning farmer id.")
@click.option("--name", required=True, help="Product name.")
@click.option("--stock", default=0, show_default=True, type=int, help="Initial stock.")
@click.option("--category", default="", help="Catalogue category.")
@click.option("--price-range", default="", help="Display price range, e.g. '$2.000 - $3.500'.")
@click.option("--harvest-window", default="", help="When the product is harvested.")
@click.option("--sustainability", default="", help="Sustainability notes.")
@click.option("--highlight", "highlights", multiple=True, help="Highlight (repeatable).")
@click.option("--location", default=None, help="Origin (defaults to Osorno).")
@click.option("--image-url", default=None, help="Image URL.")
@click.option("--inactive", is_flag=True, default=False, help="Create hidden from the catalogue.")
@click.pass_obj
def product_add(
    config: Settings,
    farmer_id: str,
    name: str,
    stock: int,
    category: str,
    price_range: str,
    harvest_window: str,
    sustainability: str,
    highlights: tuple[str, ...],
    location: str | None,
    image_url: str | None,
    inactive: bool,
) -> None:
    """Add a listing to the catalogue."""
    handler = AddProductHandler(bootstrap.unit_of_work(config))

    try:
        dto = handler.handle(
            farmer_id=farmer_id,
            name=name,
            category=category,
            price_range=price_range,
            stock=stock,
            active=not inactive,
            harvest_window=harvest_window,
            sustainability=sustainability,
            highlights=list(highlights),
            location=location,
            image_url=image_url,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_product(dto)


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--farmer", "farmer_id", required=True, help="Your farmer id.")
@click.option("--name", default=None, help="New name.")
@click.option("--stock", default=None, type=int, help="New stock (recomputes availability).")
@click.option(
    "--availability",
    default=None,
    type=click.Choice([t.value for t in AvailabilityTier], case_sensitive=False),
    help="Override availability (ignored when --stock is given).",
)
@click.option("--category", default=None, help="New category.")
@click.option("--price-range", default=None, help="New price range.")
@click.option("--location", default=None, help="New origin.")
@click.option("--image-url", default=None, help="New image URL.")
@click.option("--active/--inactive", default=None, help="Show or hide in the catalogue.")
@click.pass_obj
def product_update(
    config: Settings,
    product_id: str,
    farmer_id: str,
    name: str | None,
    stock: int | None,
    availability: str | None,
    category: str | None,
    price_range: str | None,
    location: str | None,
    image_url: str | None,
    active: bool | None,
) -> None:
    """Edit one of your listings."""
    handler = UpdateProductHandler(bootstrap.unit_of_work(config))
    changes = ProductChanges(
        name=name,
        category=category,
        price_range=price_range,
        location=location,
        image_url=image_url,
        stock=stock,
        availability=availability,
        active=active,
    )

    try:
        dto = handler.handle(product_id, farmer_id, changes)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_product(dto)


@click.command("delete")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--farmer", "farmer_id", required=True, help="Your farmer id.")
@click.pass_obj
def product_delete(config: Settings, product_id: str, farmer_id: str) -> None:
    """Remove one of your listings."""
    handler = DeleteProductHandler(bootstrap.unit_of_work(config))

    try:
        handler.handle(product_id, farmer_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product_id} deleted.")


@click.command("list")
@click.option("--farmer", "farmer_id", default=None, help="Only this farmer's listings.")
@click.option("--active-only", is_flag=True, default=False, help="Hide inactive listings.")
@click.pass_obj
def product_list(config: Settings, farmer_id: str | None, active_only: bool) -> None:
    """List catalogue entries, newest first."""
    handler = ListProductsHandler(bootstrap.unit_of_work(config))

    try:
        dtos = handler.handle(farmer_id=farmer_id, only_active=active_only)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not dtos:
        click.echo("No products found.")
        return

    click.echo(f"  {'ID':<36} {'Name':<20} {'Seller':<16} {'Stock':>6} {'Avail.':<7}")
    click.echo(f"  {'-'*89}")
    for dto in dtos:
        seller = dto.seller_name or dto.farmer_id
        marker = "" if dto.active else "  (inactive)"
        click.echo(
            f"  {dto.id:<36} {dto.name:<20} {seller:<16} {dto.stock:>6} "
            f"{dto.availability:<7}{marker}"
        )
