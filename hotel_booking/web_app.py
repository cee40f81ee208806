from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Any, Callable

from flask import Flask, jsonify, request

from .booking import Booking, InvalidBookingDates
from .booking_manager import NO_ROOM_AVAILABLE, BookingManager
from .yaml_store import BookingStorageError, BookingYamlRepository, RoomYamlRepository


def create_app(
    data_dir: str | Path = "data",
    today_provider: Callable[[], date] | None = None,
) -> Flask:
    app = Flask(__name__)
    room_repository = RoomYamlRepository(data_dir)
    booking_repository = BookingYamlRepository(data_dir)
    manager = BookingManager(booking_repository, room_repository, today_provider=today_provider)

    @app.after_request
    def add_cors_headers(response: Any) -> Any:
        response.headers["Access-Control-Allow-Origin"] = "*"
        response.headers["Access-Control-Allow-Methods"] = "GET,POST,OPTIONS"
        response.headers["Access-Control-Allow-Headers"] = "Content-Type"
        return response

    @app.get("/api/rooms")
    def list_rooms() -> Any:
        return jsonify({"ok": True, "rooms": [room.to_dict() for room in room_repository.get_all()]})

    @app.get("/api/rooms/<int:room_id>")
    def get_room(room_id: int) -> Any:
        room = room_repository.get_by_id(room_id)
        if room is None:
            return jsonify({"ok": False, "message": "Room not found."}), 404
        return jsonify({"ok": True, "room": room.to_dict()})

    @app.get("/api/availability")
    def get_availability() -> Any:
        try:
            start = _parse_date(request.args.get("start"), "start")
            end = _parse_date(request.args.get("end"), "end")
        except ValueError as error:
            return jsonify({"ok": False, "message": str(error)}), 400

        try:
            room_id = manager.find_available_room(start, end)
        except InvalidBookingDates as error:
            return jsonify({"ok": False, "message": str(error)}), 400
        except (BookingStorageError, ValueError):
            return jsonify({"ok": False, "message": "Failed to read bookings."}), 500

        return jsonify(
            {
                "ok": True,
                "available": room_id != NO_ROOM_AVAILABLE,
                "room_id": room_id,
                "start": start.isoformat(),
                "end": end.isoformat(),
            }
        )

    @app.get("/api/bookings")
    def list_bookings() -> Any:
        return jsonify({"ok": True, "bookings": [booking.to_dict() for booking in booking_repository.get_all()]})

    @app.post("/api/bookings")
    def create_booking() -> Any:
        payload = request.get_json(silent=True) or {}
        try:
            start = _parse_date(payload.get("start_date"), "start_date")
            end = _parse_date(payload.get("end_date"), "end_date")
            customer_id = payload.get("customer_id")
            booking = Booking(
                start_date=start,
                end_date=end,
                customer_id=int(customer_id) if customer_id is not None else None,
            )
        except (TypeError, ValueError) as error:
            return jsonify({"ok": False, "message": str(error)}), 400

        try:
            created = manager.create_booking(booking)
        except InvalidBookingDates as error:
            return jsonify({"ok": False, "message": str(error)}), 400
        except (BookingStorageError, ValueError):
            return jsonify({"ok": False, "message": "Failed to store the booking."}), 500

        if not created:
            return jsonify({"ok": False, "message": "No room is available for the requested dates."}), 409
        return jsonify({"ok": True, "booking": booking.to_dict()}), 201

    return app


def _parse_date(value: Any, field: str) -> date:
    text = str(value or "").strip()
    if not text:
        raise ValueError(f"{field} is required (YYYY-MM-DD).")
    try:
        return date.fromisoformat(text)
    except ValueError as error:
        raise ValueError(f"{field} must be a date in YYYY-MM-DD format.") from error


if __name__ == "__main__":
    rooms = RoomYamlRepository("data")
    if not rooms.get_all():
        rooms.seed_rooms()
    app = create_app()
    app.run(host="127.0.0.1", port=5000, debug=False)
