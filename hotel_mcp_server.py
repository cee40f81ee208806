from __future__ import annotations

from datetime import date
import os
from pathlib import Path

from mcp.server.fastmcp import FastMCP

from hotel_booking import Booking, BookingManager, BookingYamlRepository, NO_ROOM_AVAILABLE, Room, RoomYamlRepository

mcp = FastMCP(
    "Hotel Booking MCP Server",
    instructions=(
        "Check room availability and book rooms using the hotel_booking project. "
        "Rooms come from rooms.yaml in the data directory; an empty one is seeded with test rooms at startup."
    ),
    json_response=True,
)

DATA_DIR = Path(os.getenv("HOTEL_BOOKING_DATA_DIR", str(Path(__file__).parent / "data")))


def prepare_data_dir() -> list[Room]:
    rooms = RoomYamlRepository(DATA_DIR)
    existing = rooms.get_all()
    if existing:
        return existing
    return rooms.seed_rooms()


def _build_manager() -> BookingManager:
    return BookingManager(BookingYamlRepository(DATA_DIR), RoomYamlRepository(DATA_DIR))


@mcp.resource("hotel://rooms")
async def list_rooms() -> list[dict[str, object]]:
    """List the hotel's rooms in booking order."""
    return [room.to_dict() for room in RoomYamlRepository(DATA_DIR).get_all()]


@mcp.tool()
def find_available_room(start_date: str, end_date: str) -> dict[str, object]:
    """Return the first room free for the whole stay. Dates are ISO (YYYY-MM-DD)."""
    room_id = _build_manager().find_available_room(date.fromisoformat(start_date), date.fromisoformat(end_date))
    return {"available": room_id != NO_ROOM_AVAILABLE, "room_id": room_id}


@mcp.tool()
def create_booking(start_date: str, end_date: str, customer_id: int | None = None) -> dict[str, object]:
    """Book the first free room for the stay. Dates are ISO (YYYY-MM-DD)."""
    booking = Booking(
        start_date=date.fromisoformat(start_date),
        end_date=date.fromisoformat(end_date),
        customer_id=customer_id,
    )
    created = _build_manager().create_booking(booking)
    return {"created": created, "booking": booking.to_dict() if created else None}


def main() -> None:
    prepare_data_dir()
    mcp.run()


if __name__ == "__main__":
    main()
