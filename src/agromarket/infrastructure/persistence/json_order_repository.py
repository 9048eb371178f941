"""JSON-document-backed implementation of OrderRepository.

Lines are embedded in the order record, so deleting an order removes
its lines with it.
"""

from __future__ import annotations

from agromarket.domain.exceptions import ValidationError
from agromarket.domain.model.logistics import DeliverySlot, logistics_from
from agromarket.domain.model.order import Order, OrderLine, OrderStatus
from agromarket.domain.model.value_objects import CustomerContact, Quantity
from agromarket.domain.repository.order_repository import OrderRepository
from agromarket.infrastructure.persistence import records


class JsonOrderRepository(OrderRepository):

    def __init__(self, rows: list[dict]) -> None:
        self._rows = rows

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: str) -> Order | None:
        raw = records.find(self._rows, order_id)
        return self._to_domain(raw) if raw is not None else None

    def list_all(self) -> list[Order]:
        return records.newest_first([self._to_domain(raw) for raw in self._rows])

    def add(self, order: Order) -> None:
        if records.find(self._rows, order.id) is not None:
            raise ValidationError(f"Order '{order.id}' already exists")
        self._rows.append(self._to_raw(order))

    def save(self, order: Order) -> None:
        records.upsert(self._rows, self._to_raw(order))

    def delete(self, order_id: str) -> None:
        records.remove(self._rows, order_id)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "user_id": order.user_id,
            "customer": {
                "name": order.customer.name,
                "email": order.customer.email,
                "phone": order.customer.phone,
            },
            "delivery_slot": order.delivery_slot.value,
            "logistics": {
                "mode": order.logistics.mode.value,
                "delivery_point_id": order.logistics.delivery_point_id,
            },
            "notes": order.notes,
            "status": order.status.value,
            "cancellation_reason": order.cancellation_reason,
            "cancellation_viewed": order.cancellation_viewed,
            "total_items": order.total_items,
            "created_at": order.created_at.isoformat(),
            "lines": [
                {
                    "product_id": line.product_id,
                    "product_name": line.product_name,
                    "farmer_id": line.farmer_id,
                    "quantity": line.quantity.value,
                }
                for line in order.lines
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        lines = [
            OrderLine(
                product_id=line["product_id"],
                quantity=Quantity(line["quantity"]),
                product_name=line.get("product_name", ""),
                farmer_id=line.get("farmer_id"),
            )
            for line in raw["lines"]
        ]
        logistics = raw["logistics"]
        customer = raw.get("customer") or {}
        return Order(
            id=raw["id"],
            lines=lines,
            delivery_slot=DeliverySlot(raw["delivery_slot"]),
            logistics=logistics_from(logistics["mode"], logistics.get("delivery_point_id")),
            customer=CustomerContact(
                name=customer.get("name"),
                email=customer.get("email"),
                phone=customer.get("phone"),
            ),
            user_id=raw.get("user_id"),
            notes=raw.get("notes"),
            status=OrderStatus(raw["status"]),
            cancellation_reason=raw.get("cancellation_reason"),
            cancellation_viewed=raw.get("cancellation_viewed", False),
            total_items=raw.get("total_items", sum(line.quantity.value for line in lines)),
            created_at=records.parse_timestamp(raw["created_at"]),
        )
