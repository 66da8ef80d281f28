from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional, Union

from loguru import logger


ROW_COUNT = 13
COLUMN_COUNT = 6

SEAT_PATTERN = re.compile(r"(1[0-3]|[1-9])([A-F])")


class JetAssignError(Exception):
    pass


class SeatOutOfRangeError(JetAssignError, ValueError):
    pass


class SeatOccupiedError(JetAssignError):
    def __init__(self, location: "SeatLocation"):
        super().__init__(f"seat {location} is already occupied by another passenger")
        self.location = location


class TicketClass(str, Enum):
    first = "first"
    business = "business"
    economy = "economy"

    @property
    def rows(self) -> range:
        return _CLASS_ROWS[self]

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @classmethod
    def for_row(cls, row: int) -> "TicketClass":
        for ticket_class, rows in _CLASS_ROWS.items():
            if row in rows:
                return ticket_class
        raise SeatOutOfRangeError(f"row must be between 0 (inclusive) and {ROW_COUNT} (exclusive), got {row}")


_CLASS_ROWS = {
    TicketClass.first: range(0, 2),
    TicketClass.business: range(2, 7),
    TicketClass.economy: range(7, ROW_COUNT),
}


@dataclass(frozen=True)
class Passenger:
    name: str
    passport_id: str

    def __str__(self) -> str:
        return f"{self.name} ({self.passport_id})"


@dataclass(frozen=True, order=True)
class SeatLocation:
    """
    A seat on the fixed 13 x 6 cabin, zero-indexed. Ordering is row-major.
    """

    row: int
    column: int

    def __post_init__(self) -> None:
        _validate_indices(self.row, self.column)

    @property
    def ticket_class(self) -> TicketClass:
        return TicketClass.for_row(self.row)

    @property
    def row_label(self) -> str:
        return str(self.row + 1)

    @property
    def column_label(self) -> str:
        return chr(ord("A") + self.column)

    def __str__(self) -> str:
        return self.row_label + self.column_label

    @classmethod
    def parse(cls, text: str) -> "SeatLocation":
        m = SEAT_PATTERN.fullmatch(text.strip().upper())
        if m is None:
            raise ValueError(f"not a seat location: {text!r}")
        return cls(int(m.group(1)) - 1, ord(m.group(2)) - ord("A"))

    @classmethod
    def all(cls) -> Iterator["SeatLocation"]:
        for r in range(ROW_COUNT):
            for c in range(COLUMN_COUNT):
                yield cls(r, c)


def _validate_indices(row: int, column: int) -> None:
    if not 0 <= row < ROW_COUNT:
        raise SeatOutOfRangeError(f"row must be between 0 (inclusive) and {ROW_COUNT} (exclusive), got {row}")
    if not 0 <= column < COLUMN_COUNT:
        raise SeatOutOfRangeError(
            f"column must be between 0 (inclusive) and {COLUMN_COUNT} (exclusive), got {column}"
        )


PassengerKey = Union[Passenger, str]


def _passport_of(key: PassengerKey) -> str:
    return key.passport_id if isinstance(key, Passenger) else key


class SeatingPlan:
    """
    Seat occupancy for the whole cabin, one optional passenger per cell.

    Passengers are matched by passport ID. ``assign`` only refuses occupied
    seats; moving a passenger means removing the old seat first.
    """

    def __init__(self) -> None:
        self.grid: list[list[Optional[Passenger]]] = [[None for _ in range(COLUMN_COUNT)] for _ in range(ROW_COUNT)]

    def at(self, location: SeatLocation) -> Optional[Passenger]:
        _validate_indices(location.row, location.column)
        return self.grid[location.row][location.column]

    def is_occupied(self, location: SeatLocation) -> bool:
        return self.grid[location.row][location.column] is not None

    def is_assigned(self, passenger: PassengerKey) -> bool:
        return self.location_of(passenger) is not None

    def location_of(self, passenger: PassengerKey) -> Optional[SeatLocation]:
        passport_id = _passport_of(passenger)
        for r in range(ROW_COUNT):
            for c in range(COLUMN_COUNT):
                occupant = self.grid[r][c]
                if occupant is not None and occupant.passport_id == passport_id:
                    return SeatLocation(r, c)
        return None

    def assign(self, location: SeatLocation, passenger: Passenger) -> None:
        if self.is_occupied(location):
            raise SeatOccupiedError(location)
        self.grid[location.row][location.column] = passenger
        logger.debug("assigned {} to {}", passenger, location)

    def remove(self, target: Union[SeatLocation, PassengerKey]) -> None:
        location = target if isinstance(target, SeatLocation) else self.location_of(target)
        if location is None or not self.is_occupied(location):
            return
        logger.debug("cleared {} (was {})", location, self.grid[location.row][location.column])
        self.grid[location.row][location.column] = None

    def occupied(self) -> Iterator[tuple[SeatLocation, Passenger]]:
        for location in SeatLocation.all():
            occupant = self.grid[location.row][location.column]
            if occupant is not None:
                yield location, occupant

    def passengers_in(self, ticket_class: TicketClass) -> list[tuple[SeatLocation, Passenger]]:
        return [(loc, p) for loc, p in self.occupied() if loc.ticket_class is ticket_class]

    def occupied_count(self) -> int:
        return sum(1 for _ in self.occupied())

    def available_count(self) -> int:
        return ROW_COUNT * COLUMN_COUNT - self.occupied_count()

    def __len__(self) -> int:
        return self.occupied_count()
