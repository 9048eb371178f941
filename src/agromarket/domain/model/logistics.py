"""Delivery scheduling and logistics choices for an order.

Logistics is a closed set of variants.  Only ``MeetingPoint`` carries a
delivery point reference, so an order can never name a meeting point
without choosing that mode, or choose the mode without naming one.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from agromarket.domain.exceptions import ValidationError


class DeliverySlot(Enum):
    TUESDAY_AM = "tuesday-am"
    TUESDAY_PM = "tuesday-pm"
    FRIDAY_AM = "friday-am"
    FRIDAY_PM = "friday-pm"

    @property
    def label(self) -> str:
        return _SLOT_LABELS[self]

    @staticmethod
    def parse(raw: str) -> DeliverySlot:
        try:
            return DeliverySlot((raw or "").strip().lower())
        except ValueError:
            choices = ", ".join(s.value for s in DeliverySlot)
            raise ValidationError(
                f"Unknown delivery slot '{raw}' (expected one of: {choices})"
            ) from None


_SLOT_LABELS = {
    DeliverySlot.TUESDAY_AM: "Tuesday 09:00 - 12:00",
    DeliverySlot.TUESDAY_PM: "Tuesday 14:00 - 17:00",
    DeliverySlot.FRIDAY_AM: "Friday 09:00 - 12:00",
    DeliverySlot.FRIDAY_PM: "Friday 14:00 - 17:00",
}


class LogisticsMode(Enum):
    PLATFORM_DELIVERY = "platform-delivery"
    MEETING_POINT = "meeting-point"
    IN_PERSON = "in-person"


@dataclass(frozen=True)
class PlatformDelivery:
    """The marketplace delivers the order."""

    mode = LogisticsMode.PLATFORM_DELIVERY
    label = "Platform delivery"
    delivery_point_id = None


@dataclass(frozen=True)
class MeetingPoint:
    """Customer and farmer meet at a farmer-defined delivery point."""

    delivery_point_id: str

    mode = LogisticsMode.MEETING_POINT
    label = "Meeting point"

    def __post_init__(self) -> None:
        if not self.delivery_point_id or not str(self.delivery_point_id).strip():
            raise ValidationError("A meeting point must reference a delivery point")


@dataclass(frozen=True)
class InPerson:
    """The farmer hands the order over directly."""

    mode = LogisticsMode.IN_PERSON
    label = "In-person handoff"
    delivery_point_id = None


Logistics = Union[PlatformDelivery, MeetingPoint, InPerson]


def logistics_from(mode: str, delivery_point_id: str | None = None) -> Logistics:
    """Build the logistics variant for a mode string and optional point id."""
    try:
        parsed = LogisticsMode((mode or "").strip().lower())
    except ValueError:
        choices = ", ".join(m.value for m in LogisticsMode)
        raise ValidationError(
            f"Unknown logistics mode '{mode}' (expected one of: {choices})"
        ) from None

    if parsed is LogisticsMode.MEETING_POINT:
        return MeetingPoint(delivery_point_id or "")

    if delivery_point_id:
        raise ValidationError(
            f"A delivery point can only be chosen with the "
            f"'{LogisticsMode.MEETING_POINT.value}' mode"
        )
    if parsed is LogisticsMode.IN_PERSON:
        return InPerson()
    return PlatformDelivery()
