"""Application service: unseen cancellation notices for a customer."""

from __future__ import annotations

from agromarket.domain.exceptions import ValidationError
from agromarket.domain.repository.unit_of_work import UnitOfWork


def _require_user(user_id: str) -> str:
    if not user_id or not user_id.strip():
        raise ValidationError("A user id is required")
    return user_id.strip()


class CountUnviewedCancellationsHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, user_id: str) -> int:
        user_id = _require_user(user_id)
        with self._uow:
            return len(self._uow.orders.unviewed_cancellations(user_id))


class MarkCancellationsViewedHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, user_id: str) -> int:
        """Mark every unseen cancellation as seen; return how many changed."""
        user_id = _require_user(user_id)
        with self._uow:
            changed = 0
            for order in self._uow.orders.unviewed_cancellations(user_id):
                if order.mark_cancellation_viewed():
                    self._uow.orders.save(order)
                    changed += 1
            self._uow.commit()
        return changed
