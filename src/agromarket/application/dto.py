"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from agromarket.domain.model.delivery_point import DeliveryPoint
from agromarket.domain.model.order import Order
from agromarket.domain.model.product import Product

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M UTC"


# --- Inputs -------------------------------------------------------------------


@dataclass(frozen=True)
class CartLineSpec:
    """Input: what the customer asked for (product id + quantity)."""

    product_id: str
    quantity: int


@dataclass(frozen=True)
class CustomerInfo:
    name: str | None = None
    email: str | None = None
    phone: str | None = None


@dataclass(frozen=True)
class ProductChanges:
    """Input: fields to change on a product.  ``None`` means unchanged."""

    name: str | None = None
    category: str | None = None
    price_range: str | None = None
    harvest_window: str | None = None
    sustainability: str | None = None
    highlights: list[str] | None = None
    location: str | None = None
    image_url: str | None = None
    stock: int | None = None
    availability: str | None = None
    active: bool | None = None


@dataclass(frozen=True)
class DeliveryPointChanges:
    name: str | None = None
    address: str | None = None
    zone: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    active: bool | None = None


# --- Outputs ------------------------------------------------------------------


@dataclass(frozen=True)
class ProductDTO:
    id: str
    farmer_id: str
    name: str
    category: str
    price_range: str
    stock: int
    availability: str
    active: bool
    location: str
    image_url: str | None = None
    seller_name: str | None = None


@dataclass(frozen=True)
class OrderLineDTO:
    product_id: str
    product_name: str
    quantity: int
    farmer_id: str | None
    product: ProductDTO | None  # current listing, None if since deleted


@dataclass(frozen=True)
class OrderDTO:
    id: str
    user_id: str | None
    customer_name: str | None
    customer_email: str | None
    customer_phone: str | None
    delivery_slot: str
    logistics_mode: str
    delivery_point_id: str | None
    notes: str | None
    status: str
    cancellation_reason: str | None
    total_items: int
    created_at: str
    lines: list[OrderLineDTO] = field(default_factory=list)


@dataclass(frozen=True)
class DeliveryPointDTO:
    id: str
    farmer_id: str
    name: str
    address: str | None
    zone: str
    latitude: float | None
    longitude: float | None
    active: bool


# --- Mapping ------------------------------------------------------------------


def product_to_dto(product: Product, seller_name: str | None = None) -> ProductDTO:
    return ProductDTO(
        id=product.id,
        farmer_id=product.farmer_id,
        name=product.name,
        category=product.category,
        price_range=product.price_range,
        stock=product.stock,
        availability=product.availability.value,  # type: ignore[union-attr]
        active=product.active,
        location=product.location,
        image_url=product.image_url,
        seller_name=seller_name,
    )


def order_to_dto(order: Order, products: dict[str, Product]) -> OrderDTO:
    """Hydrate an order with the current listing of each line's product."""
    return OrderDTO(
        id=order.id,
        user_id=order.user_id,
        customer_name=order.customer.name,
        customer_email=order.customer.email,
        customer_phone=order.customer.phone,
        delivery_slot=order.delivery_slot.value,
        logistics_mode=order.logistics.mode.value,
        delivery_point_id=order.logistics.delivery_point_id,
        notes=order.notes,
        status=order.status.value,
        cancellation_reason=order.cancellation_reason,
        total_items=order.total_items,
        created_at=order.created_at.strftime(TIMESTAMP_FORMAT),
        lines=[
            OrderLineDTO(
                product_id=line.product_id,
                product_name=line.product_name,
                quantity=line.quantity.value,
                farmer_id=line.farmer_id,
                product=(
                    product_to_dto(products[line.product_id])
                    if line.product_id in products
                    else None
                ),
            )
            for line in order.lines
        ],
    )


def delivery_point_to_dto(point: DeliveryPoint) -> DeliveryPointDTO:
    coords = point.coordinates
    return DeliveryPointDTO(
        id=point.id,
        farmer_id=point.farmer_id,
        name=point.name,
        address=point.address,
        zone=point.zone,
        latitude=coords.latitude if coords else None,
        longitude=coords.longitude if coords else None,
        active=point.active,
    )
