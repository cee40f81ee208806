from __future__ import annotations

from datetime import date, datetime
from typing import Callable

from .booking import Booking, InvalidBookingDates, as_date, booking_conflicts
from .repository import BookingRepository, RoomRepository

NO_ROOM_AVAILABLE = -1


class BookingManager:
    """Find free rooms for a date range and book them.

    Every call reads both stores fresh and keeps no state between calls.
    Nothing here serializes concurrent callers: two ``create_booking``
    calls racing over the same range can both pick the same room unless
    the booking store rejects the second write. A store that fails after
    writing the row (the YAML store logging the event, for one) raises even
    though the booking was kept.
    """

    def __init__(
        self,
        booking_repository: BookingRepository,
        room_repository: RoomRepository,
        today_provider: Callable[[], date | datetime] | None = None,
    ) -> None:
        self.booking_repository = booking_repository
        self.room_repository = room_repository
        self._today: Callable[[], date | datetime] = today_provider or date.today

    def find_available_room(self, start_date: date | datetime, end_date: date | datetime) -> int:
        """Return the id of the first room free for the whole range, or ``NO_ROOM_AVAILABLE``.

        Raises InvalidBookingDates when the range starts today or earlier,
        or when it starts after it ends.
        """
        start = as_date(start_date)
        end = as_date(end_date)
        _validate_requested_range(start, end, as_date(self._today()))

        bookings = self.booking_repository.get_all()
        rooms = self.room_repository.get_all()

        occupied = {booking.room_id for booking in bookings if booking_conflicts(booking, start, end)}
        for room in rooms:
            if room.room_id not in occupied:
                return room.room_id
        return NO_ROOM_AVAILABLE

    def create_booking(self, booking: Booking) -> bool:
        """Assign a free room to ``booking`` and store it.

        Returns False, without writing anything, when no room is free.
        The stored dates have their time of day dropped.
        """
        room_id = self.find_available_room(booking.start_date, booking.end_date)
        if room_id == NO_ROOM_AVAILABLE:
            return False

        booking.start_date = as_date(booking.start_date)
        booking.end_date = as_date(booking.end_date)
        booking.room_id = room_id
        booking.is_active = True
        self.booking_repository.add(booking)
        return True


def _validate_requested_range(start: date, end: date, today: date) -> None:
    if start <= today:
        raise InvalidBookingDates("The start date cannot be in the past or today.")
    if start > end:
        raise InvalidBookingDates("The start date cannot be later than the end date.")
