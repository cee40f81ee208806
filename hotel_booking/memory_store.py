from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Iterable
from uuid import uuid4

from .booking import Booking, Room
from .repository import BookingRepository, RoomRepository


class InMemoryRoomRepository(RoomRepository):
    def __init__(self, rooms: Iterable[Room] | None = None) -> None:
        self._rooms: list[Room] = list(rooms or [])

    def get_all(self) -> list[Room]:
        return list(self._rooms)

    def get_by_id(self, room_id: int) -> Room | None:
        for room in self._rooms:
            if room.room_id == room_id:
                return room
        return None


class InMemoryBookingRepository(BookingRepository):
    def __init__(self, bookings: Iterable[Booking] | None = None) -> None:
        self._bookings: list[Booking] = list(bookings or [])

    def get_all(self) -> list[Booking]:
        return list(self._bookings)

    def get_by_id(self, booking_id: str) -> Booking | None:
        for booking in self._bookings:
            if booking.booking_id == booking_id:
                return booking
        return None

    def add(self, booking: Booking) -> Booking:
        if booking.booking_id is None:
            booking.booking_id = str(uuid4())
        if booking.created_at is None:
            booking.created_at = datetime.now()
        self._bookings.append(booking)
        return booking


def build_test_rooms() -> list[Room]:
    return [Room(room_id=1, description="A"), Room(room_id=2, description="B")]


def build_test_bookings(occupied_start: date, occupied_end: date) -> list[Booking]:
    """Active bookings filling every test room for [occupied_start, occupied_end].

    Room 1 also carries an inactive booking for the nine days before the
    window; inactive rows never block a room.
    """
    bookings = [
        Booking(
            booking_id=str(uuid4()),
            room_id=room.room_id,
            start_date=occupied_start,
            end_date=occupied_end,
            is_active=True,
            customer_id=room.room_id,
        )
        for room in build_test_rooms()
    ]
    bookings.append(
        Booking(
            booking_id=str(uuid4()),
            room_id=1,
            start_date=occupied_start - timedelta(days=9),
            end_date=occupied_start - timedelta(days=1),
            is_active=False,
            customer_id=3,
        )
    )
    return bookings
