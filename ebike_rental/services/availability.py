"""Bike availability rules.

Everything here is pure: the functions read booking and inventory records, never
mutate them, perform no I/O and do not raise for odd input. Times are ``HH:MM``
strings and are compared as strings, so zero-padded 24h values order correctly.
"""
from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date

from ..models.enums import BikeSize, BikeType, BookingStatus, RentalCategory, Suspension

GroupKey = tuple[str, str, str, bool]

NO_VALUE = "none"


@dataclass(frozen=True, slots=True)
class BikeUnit:
    """Garage unit as seen by the availability rules."""

    id: str
    type: BikeType
    size: BikeSize | None = None
    suspension: Suspension | None = None
    has_trailer_hook: bool = False
    is_active: bool = True

    def group_key(self) -> GroupKey:
        return group_key(self.type, self.size, self.suspension, self.has_trailer_hook)


@dataclass(frozen=True, slots=True)
class BikeLineItem:
    """A number of interchangeable bikes requested or held by a booking."""

    type: BikeType
    count: int
    size: BikeSize | None = None
    suspension: Suspension | None = None
    has_trailer_hook: bool = False

    def group_key(self) -> GroupKey:
        return group_key(self.type, self.size, self.suspension, self.has_trailer_hook)


@dataclass(frozen=True, slots=True)
class BookingRecord:
    """The parts of a booking that decide whether it holds inventory."""

    id: str
    booking_date: date
    start_time: str
    end_time: str
    category: RentalCategory
    status: BookingStatus
    bikes: tuple[BikeLineItem, ...] = field(default_factory=tuple)


@dataclass(slots=True)
class BikeGroup:
    type: BikeType
    size: BikeSize | None
    suspension: Suspension | None
    has_trailer_hook: bool
    count: int

    def group_key(self) -> GroupKey:
        return group_key(self.type, self.size, self.suspension, self.has_trailer_hook)


def _text(value: object) -> str:
    raw = getattr(value, "value", value)
    return str(raw) if raw is not None else NO_VALUE


def group_key(
    bike_type: BikeType | str,
    size: BikeSize | str | None,
    suspension: Suspension | str | None,
    has_trailer_hook: bool | None,
) -> GroupKey:
    """Return the aggregation key shared by inventory units and booking line items."""

    return (
        _text(bike_type),
        _text(size) if size else NO_VALUE,
        _text(suspension) if suspension else NO_VALUE,
        bool(has_trailer_hook),
    )


def windows_overlap(
    requested_start: str,
    requested_end: str,
    requested_category: RentalCategory | str,
    existing_start: str,
    existing_end: str,
    existing_category: RentalCategory | str,
) -> bool:
    """Decide whether two same-day rental windows collide.

    A full-day rental on either side occupies the bike all day. The clock checks are
    kept as three separate clauses; touching endpoints (09-11 and 11-13) do not collide.
    """

    if requested_category == RentalCategory.FULL_DAY or existing_category == RentalCategory.FULL_DAY:
        return True
    return (
        (existing_start <= requested_start < existing_end)
        or (existing_start < requested_end <= existing_end)
        or (requested_start <= existing_start and requested_end >= existing_end)
    )


def conflicts_with(
    booking: BookingRecord,
    day: date,
    start_time: str,
    end_time: str,
    category: RentalCategory | str,
) -> bool:
    """Return True when the booking holds bikes during the requested window."""

    if booking.booking_date != day or booking.status != BookingStatus.CONFIRMED:
        return False
    return windows_overlap(
        start_time, end_time, category, booking.start_time, booking.end_time, booking.category
    )


def find_conflicts(
    day: date,
    start_time: str,
    end_time: str,
    category: RentalCategory | str,
    bookings: Iterable[BookingRecord],
) -> list[BookingRecord]:
    """Return the bookings that overlap the requested window."""

    return [booking for booking in bookings if conflicts_with(booking, day, start_time, end_time, category)]


def build_inventory_index(units: Iterable[BikeUnit]) -> dict[GroupKey, BikeGroup]:
    """Group active units by type, size, suspension and trailer hook."""

    index: dict[GroupKey, BikeGroup] = {}
    for unit in units:
        if not unit.is_active:
            continue
        key = unit.group_key()
        group = index.get(key)
        if group is None:
            index[key] = BikeGroup(
                type=unit.type,
                size=unit.size,
                suspension=unit.suspension,
                has_trailer_hook=bool(unit.has_trailer_hook),
                count=1,
            )
        else:
            group.count += 1
    return index


def compute_booked_counts(
    day: date,
    start_time: str,
    end_time: str,
    category: RentalCategory | str,
    bookings: Iterable[BookingRecord],
) -> Counter[GroupKey]:
    """Sum the bikes held by overlapping confirmed bookings, per group key."""

    booked: Counter[GroupKey] = Counter()
    for booking in find_conflicts(day, start_time, end_time, category, bookings):
        for item in booking.bikes:
            booked[item.group_key()] += item.count
    return booked


def compute_availability(
    day: date,
    start_time: str,
    end_time: str,
    category: RentalCategory | str,
    bookings: Iterable[BookingRecord],
    units: Iterable[BikeUnit],
) -> list[BikeGroup]:
    """Return the bike groups still free for the window, with their remaining counts.

    Groups with nothing left are omitted, as are keys that only appear on bookings.
    """

    booked = compute_booked_counts(day, start_time, end_time, category, bookings)
    inventory = build_inventory_index(units)

    available: list[BikeGroup] = []
    for key in sorted(inventory):
        group = inventory[key]
        remaining = max(0, group.count - booked.get(key, 0))
        if remaining == 0:
            continue
        available.append(
            BikeGroup(
                type=group.type,
                size=group.size,
                suspension=group.suspension,
                has_trailer_hook=group.has_trailer_hook,
                count=remaining,
            )
        )
    return available


def find_shortages(
    requested: Iterable[BikeLineItem],
    available: Iterable[BikeGroup],
) -> dict[GroupKey, tuple[int, int]]:
    """Map each over-requested group key to ``(requested, available)``."""

    free = {group.group_key(): group.count for group in available}
    wanted: Counter[GroupKey] = Counter()
    for item in requested:
        wanted[item.group_key()] += item.count
    return {key: (count, free.get(key, 0)) for key, count in wanted.items() if count > free.get(key, 0)}
