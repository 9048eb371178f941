"""Development notifier: logs each message instead of sending it."""

from __future__ import annotations

import uuid

import structlog

from agromarket.application.notifications import Notification, Notifier

logger = structlog.get_logger(__name__)


class LoggingNotifier(Notifier):

    def send(self, notification: Notification) -> str:
        delivery_id = f"log-{uuid.uuid4().hex[:12]}"
        logger.info(
            "notification.logged",
            delivery_id=delivery_id,
            kind=notification.kind,
            recipient=notification.recipient,
            subject=notification.subject,
            order_id=notification.order_id,
        )
        return delivery_id
