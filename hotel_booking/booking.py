from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any


class InvalidBookingDates(ValueError):
    pass


@dataclass(frozen=True)
class Room:
    room_id: int
    description: str

    def to_dict(self) -> dict[str, Any]:
        return {"room_id": self.room_id, "description": self.description}

    @staticmethod
    def from_dict(data: dict[str, Any]) -> "Room":
        return Room(room_id=int(data["room_id"]), description=str(data.get("description", "")))


@dataclass
class Booking:
    start_date: date
    end_date: date
    room_id: int | None = None
    is_active: bool = False
    customer_id: int | None = None
    booking_id: str | None = None
    created_at: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "booking_id": self.booking_id,
            "room_id": self.room_id,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "is_active": self.is_active,
        }
        if self.customer_id is not None:
            payload["customer_id"] = self.customer_id
        if self.created_at is not None:
            payload["created_at"] = self.created_at.isoformat(timespec="seconds")
        return payload

    @staticmethod
    def from_dict(data: dict[str, Any]) -> "Booking":
        return Booking(
            booking_id=(str(data["booking_id"]) if data.get("booking_id") is not None else None),
            room_id=(int(data["room_id"]) if data.get("room_id") is not None else None),
            start_date=date.fromisoformat(str(data["start_date"])),
            end_date=date.fromisoformat(str(data["end_date"])),
            is_active=data.get("is_active") is True,
            customer_id=(int(data["customer_id"]) if data.get("customer_id") is not None else None),
            created_at=(datetime.fromisoformat(str(data["created_at"])) if data.get("created_at") is not None else None),
        )


def as_date(value: date | datetime) -> date:
    """Drop the time-of-day part of ``value``, if any."""
    if isinstance(value, datetime):
        return value.date()
    return value


def date_ranges_overlap(start: date, end: date, other_start: date, other_end: date) -> bool:
    """Return True when two date ranges share at least one day.

    Both ends are inclusive: a stay ending on the 10th and another
    starting on the 10th overlap.
    """
    return other_start <= end and start <= other_end


def booking_conflicts(booking: Booking, start: date, end: date) -> bool:
    """Return True if an active ``booking`` blocks its room for [start, end]."""
    return booking.is_active and date_ranges_overlap(start, end, booking.start_date, booking.end_date)
