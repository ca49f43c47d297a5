from dataclasses import dataclass
from datetime import date

DEFAULT_MAX_CAPACITY = 50


@dataclass(frozen=True)
class AvailabilitySnapshot:
    date: date
    occupied_seats: int
    max_capacity: int
    remaining: int
    available: bool
    message: str


def past_date_snapshot(day: date, *, max_capacity: int = DEFAULT_MAX_CAPACITY) -> AvailabilitySnapshot:
    return AvailabilitySnapshot(
        date=day,
        occupied_seats=0,
        max_capacity=max_capacity,
        remaining=0,
        available=False,
        message="date in the past",
    )


def compute_availability(
    day: date,
    *,
    occupied_seats: int,
    max_capacity: int = DEFAULT_MAX_CAPACITY,
) -> AvailabilitySnapshot:
    """
    Pure derivation: a date is available while booked seats stay strictly below capacity.
    Remaining may go negative when concurrent submissions overbooked the date.
    """
    available = occupied_seats < max_capacity
    return AvailabilitySnapshot(
        date=day,
        occupied_seats=occupied_seats,
        max_capacity=max_capacity,
        remaining=max_capacity - occupied_seats,
        available=available,
        message="date available" if available else "date fully booked",
    )
