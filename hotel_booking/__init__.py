from .booking import Booking, InvalidBookingDates, Room, booking_conflicts, date_ranges_overlap
from .booking_manager import NO_ROOM_AVAILABLE, BookingManager
from .memory_store import InMemoryBookingRepository, InMemoryRoomRepository, build_test_bookings, build_test_rooms
from .repository import BookingRepository, RoomRepository
from .yaml_store import BookingStorageError, BookingYamlRepository, RoomYamlRepository

__all__ = [
	"Booking",
	"InvalidBookingDates",
	"Room",
	"booking_conflicts",
	"date_ranges_overlap",
	"NO_ROOM_AVAILABLE",
	"BookingManager",
	"InMemoryBookingRepository",
	"InMemoryRoomRepository",
	"build_test_bookings",
	"build_test_rooms",
	"BookingRepository",
	"RoomRepository",
	"BookingStorageError",
	"BookingYamlRepository",
	"RoomYamlRepository",
]
