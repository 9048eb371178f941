"""Email templates for order notifications.

Each renderer returns a ready-to-send ``Notification`` with matching
HTML and plain-text bodies.  Anything the customer typed is escaped
before it goes into the HTML body.
"""

from __future__ import annotations

from html import escape

from agromarket.application.notifications import Notification
from agromarket.domain.model.order import Order, OrderLine

BRAND = "AgroMarket"
NOT_GIVEN = "Not provided"

NEW_ORDER = "new-order"
ORDER_CANCELLED = "order-cancelled"


def _line_list(lines: list[OrderLine]) -> str:
    if not lines:
        return "No products"
    return "\n".join(
        f"- {line.product_name or 'Product'} ({line.quantity.value} units)"
        for line in lines
    )


def render_new_order(order: Order, recipient: str, lines: list[OrderLine]) -> Notification:
    """Tell a farmer which of their products were just ordered."""
    date = order.created_at.strftime("%Y-%m-%d")
    items = _line_list(lines)
    details = [
        ("Date", date),
        ("Customer", order.customer.name or NOT_GIVEN),
        ("Email", order.customer.email or NOT_GIVEN),
        ("Phone", order.customer.phone or NOT_GIVEN),
        ("Delivery slot", order.delivery_slot.label),
        ("Logistics", order.logistics.label),
    ]
    if order.notes:
        details.append(("Notes", order.notes))

    html_details = "".join(
        f"<li><strong>{label}:</strong> {escape(value)}</li>" for label, value in details
    )
    html = (
        f'<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">'
        f"<h2>New order received</h2>"
        f"<p>You have a new order <strong>#{order.short_id}</strong> on {BRAND}.</p>"
        f"<h3>Order details</h3><ul>{html_details}</ul>"
        f"<h3>Your products in this order</h3>"
        f"<pre>{escape(items)}</pre>"
        f"<p>Please review the order in your farmer dashboard and confirm availability.</p>"
        f"<p>The {BRAND} team</p>"
        f"</div>"
    )
    text = "\n".join(
        [
            "New order received",
            "",
            f"You have a new order #{order.short_id} on {BRAND}.",
            "",
            "Order details:",
            *(f"- {label}: {value}" for label, value in details),
            "",
            "Your products in this order:",
            items,
            "",
            "Please review the order in your farmer dashboard and confirm availability.",
            "",
            f"The {BRAND} team",
        ]
    )
    return Notification(
        recipient=recipient,
        subject=f"New order #{order.short_id} - {BRAND}",
        html=html,
        text=text,
        kind=NEW_ORDER,
        order_id=order.id,
    )


def render_order_cancelled(order: Order) -> Notification:
    """Tell the customer their order was cancelled, and why."""
    if order.customer.email is None:
        raise ValueError(f"Order {order.id} has no customer email")

    reason = order.cancellation_reason or ""
    items = _line_list(order.lines)
    name = order.customer.display_name
    date = order.created_at.strftime("%Y-%m-%d")

    html = (
        f'<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">'
        f"<h2>Order cancelled</h2>"
        f"<p>Dear {escape(name)},</p>"
        f"<p>We are sorry to let you know that your order "
        f"<strong>#{order.short_id}</strong> has been cancelled.</p>"
        f'<div style="border-left: 4px solid #dc2626; padding: 16px;">'
        f"<p><strong>Reason:</strong></p><p>{escape(reason)}</p></div>"
        f"<h3>Order details</h3>"
        f"<ul><li><strong>Date:</strong> {date}</li><li><strong>Products:</strong></li></ul>"
        f"<pre>{escape(items)}</pre>"
        f"<p>If you have any questions, please get in touch.</p>"
        f"<p>The {BRAND} team</p>"
        f"</div>"
    )
    text = "\n".join(
        [
            "Order cancelled",
            "",
            f"Dear {name},",
            "",
            f"We are sorry to let you know that your order #{order.short_id} has been cancelled.",
            "",
            "Reason:",
            reason,
            "",
            "Order details:",
            f"- Date: {date}",
            "- Products:",
            items,
            "",
            "If you have any questions, please get in touch.",
            "",
            f"The {BRAND} team",
        ]
    )
    return Notification(
        recipient=order.customer.email,
        subject=f"Order #{order.short_id} cancelled - {BRAND}",
        html=html,
        text=text,
        kind=ORDER_CANCELLED,
        order_id=order.id,
    )
