import click

from agromarket.infrastructure import bootstrap
from agromarket.infrastructure.cli.farmer_commands import farmer_list, farmer_register
from agromarket.infrastructure.cli.order_commands import (
    order_cancellations,
    order_delete,
    order_list,
    order_place,
    order_show,
    order_transition,
)
from agromarket.infrastructure.cli.point_commands import (
    point_add,
    point_delete,
    point_list,
    point_update,
)
from agromarket.infrastructure.cli.product_commands import (
    product_add,
    product_delete,
    product_list,
    product_update,
)
from agromarket.infrastructure.config import ConfigurationError
from agromarket.infrastructure.logging import configure_logging


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """AgroMarket — farm produce orders and inventory"""
    try:
        config = bootstrap.settings()
    except ConfigurationError as exc:
        raise click.ClickException(str(exc))
    configure_logging(config.log_level, json=config.log_json)
    ctx.obj = config


@cli.group()
def order() -> None:
    """Place and manage orders."""


@cli.group()
def product() -> None:
    """Manage catalogue listings."""


@cli.group()
def point() -> None:
    """Manage delivery points."""


@cli.group()
def farmer() -> None:
    """Manage the farmer directory."""


# Register subcommands
order.add_command(order_cancellations)
order.add_command(order_delete)
order.add_command(order_list)
order.add_command(order_place)
order.add_command(order_show)
order.add_command(order_transition)
product.add_command(product_add)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_update)
point.add_command(point_add)
point.add_command(point_delete)
point.add_command(point_list)
point.add_command(point_update)
farmer.add_command(farmer_list)
farmer.add_command(farmer_register)
