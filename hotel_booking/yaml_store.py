from __future__ import annotations

from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Any, Iterable
import shutil
from uuid import uuid4

import yaml

from .booking import Booking, Room
from .memory_store import build_test_bookings, build_test_rooms
from .repository import BookingRepository, RoomRepository


class BookingStorageError(RuntimeError):
    pass


ROOMS_FILE_NAME = "rooms.yaml"
BOOKINGS_FILE_NAME = "bookings.yaml"
EVENTS_FILE_NAME = "booking_events.yaml"
TEST_OCCUPIED_FROM_DAYS = 10
TEST_OCCUPIED_UNTIL_DAYS = 20


class _YamlDataDir:
    def __init__(self, base_dir: str | Path = "data") -> None:
        self.base_dir = Path(base_dir)
        self.rooms_file = self.base_dir / ROOMS_FILE_NAME
        self.bookings_file = self.base_dir / BOOKINGS_FILE_NAME
        self.log_file = self.base_dir / EVENTS_FILE_NAME
        self._ensure_files()

    def _ensure_files(self) -> None:
        self.base_dir.mkdir(parents=True, exist_ok=True)
        for path in (self.rooms_file, self.bookings_file, self.log_file):
            if not path.exists():
                path.write_text("[]\n", encoding="utf-8")

    def _read_yaml_list(self, path: Path) -> list[dict[str, Any]]:
        try:
            payload = yaml.safe_load(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            path.write_text("[]\n", encoding="utf-8")
            return []
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as error:
            self._recover_corrupted_yaml(path, error)
            return []

        if payload is None:
            return []
        if not isinstance(payload, list):
            self._recover_corrupted_yaml(path, ValueError("top-level YAML is not a list"))
            return []

        sanitized: list[dict[str, Any]] = []
        for index, row in enumerate(payload):
            if isinstance(row, dict):
                sanitized.append(row)
            else:
                self._log_event(
                    "YAML_ROW_SKIPPED",
                    {
                        "file": str(path.name),
                        "index": index,
                        "reason": "row is not a mapping",
                    },
                )
        return sanitized

    def _write_yaml_list(self, path: Path, rows: list[dict[str, Any]]) -> None:
        temp_path = path.with_suffix(path.suffix + ".tmp")
        try:
            temp_path.write_text(yaml.safe_dump(rows, allow_unicode=True, sort_keys=False), encoding="utf-8")
            temp_path.replace(path)
        except OSError as error:
            raise BookingStorageError(f"Failed to write YAML file: {path}") from error
        finally:
            if temp_path.exists():
                temp_path.unlink(missing_ok=True)

    def _recover_corrupted_yaml(self, path: Path, error: Exception) -> None:
        timestamp = datetime.now().strftime("%Y%m%d%H%M%S")
        backup_path = path.with_name(f"{path.stem}.corrupt.{timestamp}{path.suffix}")
        try:
            if path.exists():
                shutil.copy2(path, backup_path)
        except OSError:
            pass

        path.write_text("[]\n", encoding="utf-8")
        if path != self.log_file:
            self._log_event(
                "YAML_RECOVERED",
                {
                    "file": str(path.name),
                    "backup": str(backup_path.name),
                    "reason": str(error),
                },
            )

    def _log_event(self, event_type: str, payload: dict[str, Any], event_time: datetime | None = None) -> None:
        timestamp = (event_time or datetime.now()).isoformat(timespec="seconds")
        events = self._read_yaml_list(self.log_file)
        events.append({"event_time": timestamp, "event_type": event_type, "payload": payload})
        self._write_yaml_list(self.log_file, events)


class RoomYamlRepository(_YamlDataDir, RoomRepository):
    def get_all(self) -> list[Room]:
        rows = self._read_yaml_list(self.rooms_file)
        return [Room.from_dict(row) for row in rows]

    def get_by_id(self, room_id: int) -> Room | None:
        for room in self.get_all():
            if room.room_id == room_id:
                return room
        return None

    def seed_rooms(self, rooms: Iterable[Room] | None = None, overwrite: bool = True) -> list[Room]:
        seeded = list(rooms) if rooms is not None else build_test_rooms()
        for room in seeded:
            if room.room_id <= 0:
                raise ValueError("room_id must be a positive integer")

        rows = [] if overwrite else self._read_yaml_list(self.rooms_file)
        known_ids = {int(row["room_id"]) for row in rows if "room_id" in row}
        for room in seeded:
            if room.room_id in known_ids:
                raise ValueError(f"room_id {room.room_id} already exists")
            known_ids.add(room.room_id)
            rows.append(room.to_dict())
        self._write_yaml_list(self.rooms_file, rows)

        self._log_event(
            "ROOMS_SEEDED",
            {
                "count": len(seeded),
                "room_ids": [room.room_id for room in seeded],
                "overwrite": overwrite,
            },
        )
        return seeded


class BookingYamlRepository(_YamlDataDir, BookingRepository):
    def get_all(self) -> list[Booking]:
        rows = self._read_yaml_list(self.bookings_file)
        return [Booking.from_dict(row) for row in rows]

    def get_by_id(self, booking_id: str) -> Booking | None:
        for booking in self.get_all():
            if booking.booking_id == booking_id:
                return booking
        return None

    def add(self, booking: Booking, now: datetime | None = None) -> Booking:
        """Append ``booking`` and log BOOKING_CREATED.

        The row is written before the event, so a failed log write raises
        BookingStorageError for a booking that is already stored.
        """
        effective_now = now or datetime.now()
        if booking.booking_id is None:
            booking.booking_id = str(uuid4())
        if booking.created_at is None:
            booking.created_at = effective_now

        rows = self._read_yaml_list(self.bookings_file)
        rows.append(booking.to_dict())
        self._write_yaml_list(self.bookings_file, rows)

        self._log_event(
            "BOOKING_CREATED",
            {
                "booking_id": booking.booking_id,
                "room_id": booking.room_id,
                "start_date": booking.start_date.isoformat(),
                "end_date": booking.end_date.isoformat(),
                "customer_id": booking.customer_id,
            },
            effective_now,
        )
        return booking

    def seed_test_data(self, today: date | None = None, overwrite: bool = True) -> list[Booking]:
        effective_today = today or date.today()
        generated = build_test_bookings(
            effective_today + timedelta(days=TEST_OCCUPIED_FROM_DAYS),
            effective_today + timedelta(days=TEST_OCCUPIED_UNTIL_DAYS),
        )

        rows = [] if overwrite else self._read_yaml_list(self.bookings_file)
        rows.extend([booking.to_dict() for booking in generated])
        self._write_yaml_list(self.bookings_file, rows)

        self._log_event(
            "TEST_DATA_GENERATED",
            {
                "count": len(generated),
                "occupied_from": generated[0].start_date.isoformat(),
                "occupied_until": generated[0].end_date.isoformat(),
                "overwrite": overwrite,
            },
        )
        return generated
