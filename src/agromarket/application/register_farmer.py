"""Application service: Register Farmer use case.

Creates or updates a farmer's directory entry.  The email on file is
where new-order notifications for their products are sent.
"""

from __future__ import annotations

from agromarket.domain.exceptions import ValidationError
from agromarket.domain.model.delivery_point import Farmer
from agromarket.domain.repository.unit_of_work import UnitOfWork


class RegisterFarmerHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, farmer_id: str, name: str, email: str | None = None) -> Farmer:
        if not name or not name.strip():
            raise ValidationError("Farmer name is required")
        farmer = Farmer(id=(farmer_id or "").strip(), name=name.strip(), email=email)
        with self._uow:
            self._uow.farmers.save(farmer)
            self._uow.commit()
        return farmer


class ListFarmersHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self) -> list[Farmer]:
        with self._uow:
            return self._uow.farmers.list_all()
