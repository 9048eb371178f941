"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from agromarket.application.cancellation_notices import (
    CountUnviewedCancellationsHandler,
    MarkCancellationsViewedHandler,
)
from agromarket.application.delete_order import DeleteCancelledOrderHandler
from agromarket.application.dto import CartLineSpec, CustomerInfo, OrderDTO
from agromarket.application.place_order import PlaceOrderHandler
from agromarket.application.show_order import ListOrdersHandler, ShowOrderHandler
from agromarket.application.transition_order import TransitionOrderHandler
from agromarket.domain.exceptions import DomainException
from agromarket.domain.model.logistics import DeliverySlot, LogisticsMode
from agromarket.domain.model.order import OrderStatus
from agromarket.infrastructure import bootstrap
from agromarket.infrastructure.config import Settings


def _parse_items(raw: str) -> list[CartLineSpec]:
    """Parse 'product-id:3,other-id:5' into CartLineSpec list."""
    specs: list[CartLineSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductId:Quantity'."
            )
        product_id, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{product_id}'."
            )
        specs.append(CartLineSpec(product_id=product_id.strip(), quantity=qty))
    return specs


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order {dto.id}  (status={dto.status})")
    click.echo(f"Customer: {dto.customer_name or '-'}  {dto.customer_email or ''}")
    click.echo(f"Created:  {dto.created_at}")
    click.echo(f"Slot:     {dto.delivery_slot}   Logistics: {dto.logistics_mode}"
               + (f" ({dto.delivery_point_id})" if dto.delivery_point_id else ""))
    if dto.notes:
        click.echo(f"Notes:    {dto.notes}")
    if dto.cancellation_reason:
        click.echo(f"Reason:   {dto.cancellation_reason}")
    click.echo()
    click.echo(f"  {'Product':<24} {'Qty':>5} {'Stock now':>10} {'Availability':>13}")
    click.echo(f"  {'-'*55}")
    for line in dto.lines:
        stock = str(line.product.stock) if line.product else "-"
        tier = line.product.availability if line.product else "(removed)"
        click.echo(f"  {line.product_name:<24} {line.quantity:>5} {stock:>10} {tier:>13}")
    click.echo(f"  {'-'*55}")
    click.echo(f"  {'Total items':<24} {dto.total_items:>5}")


@click.command("place")
@click.option("--items", required=True, help="Items as 'ProductId:Qty,ProductId:Qty'.")
@click.option(
    "--slot",
    required=True,
    type=click.Choice([s.value for s in DeliverySlot]),
    help="Delivery slot.",
)
@click.option(
    "--logistics",
    "logistics_mode",
    default=LogisticsMode.PLATFORM_DELIVERY.value,
    show_default=True,
    type=click.Choice([m.value for m in LogisticsMode]),
    help="How the order reaches the customer.",
)
@click.option("--point", "delivery_point_id", default=None, help="Delivery point for meeting-point logistics.")
@click.option("--name", "customer_name", default=None, help="Customer name.")
@click.option("--email", default=None, help="Customer email.")
@click.option("--phone", default=None, help="Customer phone.")
@click.option("--user", "user_id", default=None, help="Customer account id.")
@click.option("--notes", default=None, help="Free-text notes for the farmers.")
@click.pass_obj
def order_place(
    config: Settings,
    items: str,
    slot: str,
    logistics_mode: str,
    delivery_point_id: str | None,
    customer_name: str | None,
    email: str | None,
    phone: str | None,
    user_id: str | None,
    notes: str | None,
) -> None:
    """Place an order, reserving stock for every line."""
    cart = _parse_items(items)

    with bootstrap.dispatcher(config) as dispatcher:
        handler = PlaceOrderHandler(bootstrap.unit_of_work(config), dispatcher)
        try:
            dto = handler.handle(
                customer=CustomerInfo(customer_name, email, phone),
                delivery_slot=slot,
                logistics_mode=logistics_mode,
                cart=cart,
                user_id=user_id,
                delivery_point_id=delivery_point_id,
                notes=notes,
            )
        except DomainException as exc:
            raise click.ClickException(str(exc))

    click.echo(f"Order {dto.id} placed.")
    click.echo()
    _display_order(dto)


@click.command("transition")
@click.option("--id", "order_id", required=True, help="Order ID.")
@click.option(
    "--status",
    required=True,
    type=click.Choice([s.value for s in OrderStatus]),
    help="New status.",
)
@click.option("--reason", default=None, help="Cancellation reason (required to cancel).")
@click.pass_obj
def order_transition(
    config: Settings,
    order_id: str,
    status: str,
    reason: str | None,
) -> None:
    """Move an order to its next status, or cancel it (restores stock)."""
    with bootstrap.dispatcher(config) as dispatcher:
        handler = TransitionOrderHandler(bootstrap.unit_of_work(config), dispatcher)
        try:
            dto = handler.handle(order_id, status, reason)
        except DomainException as exc:
            raise click.ClickException(str(exc))

    click.echo(f"Order {dto.id} is now {dto.status}.")


@click.command("delete")
@click.option("--id", "order_id", required=True, help="Order ID.")
@click.option("--user", "user_id", required=True, help="Customer account id.")
@click.pass_obj
def order_delete(config: Settings, order_id: str, user_id: str) -> None:
    """Delete one of your cancelled orders."""
    handler = DeleteCancelledOrderHandler(bootstrap.unit_of_work(config))

    try:
        handler.handle(order_id, user_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {order_id} deleted.")


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order ID to display.")
@click.pass_obj
def order_show(config: Settings, order_id: str) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(bootstrap.unit_of_work(config))

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("list")
@click.option("--user", "user_id", default=None, help="Only orders placed by this customer.")
@click.option("--farmer", "farmer_id", default=None, help="Only orders with this farmer's products.")
@click.pass_obj
def order_list(config: Settings, user_id: str | None, farmer_id: str | None) -> None:
    """List orders, newest first."""
    handler = ListOrdersHandler(bootstrap.unit_of_work(config))

    try:
        dtos = handler.handle(user_id=user_id, farmer_id=farmer_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not dtos:
        click.echo("No orders found.")
        return

    click.echo(f"  {'ID':<36} {'Status':<10} {'Items':>5} {'Slot':<11} {'Created'}")
    click.echo(f"  {'-'*88}")
    for dto in dtos:
        click.echo(
            f"  {dto.id:<36} {dto.status:<10} {dto.total_items:>5} "
            f"{dto.delivery_slot:<11} {dto.created_at}"
        )


@click.command("cancellations")
@click.option("--user", "user_id", required=True, help="Customer account id.")
@click.option("--mark-viewed", is_flag=True, default=False, help="Mark them as seen.")
@click.pass_obj
def order_cancellations(config: Settings, user_id: str, mark_viewed: bool) -> None:
    """Count (or acknowledge) cancelled orders the customer has not seen."""
    uow = bootstrap.unit_of_work(config)

    try:
        if mark_viewed:
            changed = MarkCancellationsViewedHandler(uow).handle(user_id)
            click.echo(f"{changed} cancellation(s) marked as viewed.")
        else:
            count = CountUnviewedCancellationsHandler(uow).handle(user_id)
            click.echo(f"{count} unviewed cancellation(s).")
    except DomainException as exc:
        raise click.ClickException(str(exc))
