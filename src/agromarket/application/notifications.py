"""Notification ports.

Handlers never talk to an email provider directly.  They hand finished
``Notification`` messages to a ``NotificationDispatcher``, which delivers
them out of band through a ``Notifier``.  Nothing a notifier does can
affect the outcome of the request that produced the message.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


class NotificationError(Exception):
    """A notifier could not deliver a message."""


@dataclass(frozen=True)
class Notification:
    recipient: str
    subject: str
    html: str
    text: str
    kind: str
    order_id: str | None = None


class Notifier(ABC):

    @abstractmethod
    def send(self, notification: Notification) -> str:
        """Deliver a message and return the provider's delivery id.

        Raises NotificationError when delivery fails.
        """


class NotificationDispatcher(ABC):

    @abstractmethod
    def submit(self, notification: Notification) -> bool:
        """Queue a message for delivery.  Never raises and never blocks.

        Returns False when the message was dropped instead of queued.
        """
