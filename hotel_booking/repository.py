from __future__ import annotations

from abc import ABC, abstractmethod

from .booking import Booking, Room


class RoomRepository(ABC):
    """Read-only access to the hotel's rooms."""

    @abstractmethod
    def get_all(self) -> list[Room]:
        """Return every room. The order decides which free room is picked first."""

    @abstractmethod
    def get_by_id(self, room_id: int) -> Room | None:
        pass


class BookingRepository(ABC):
    """Read and append access to bookings."""

    @abstractmethod
    def get_all(self) -> list[Booking]:
        pass

    @abstractmethod
    def get_by_id(self, booking_id: str) -> Booking | None:
        pass

    @abstractmethod
    def add(self, booking: Booking) -> Booking:
        """Persist ``booking`` and return it with ``booking_id`` assigned."""
