from datetime import date
from typing import Any, List, Mapping, Optional

from ..domain.errors import PersistenceError, ValidationError
from ..domain.repositories import ReservationRepository
from ..domain.results import Err, Ok, Result
from ..domain.services import (
    DEFAULT_MAX_CAPACITY,
    AvailabilitySnapshot,
    compute_availability,
    past_date_snapshot,
)
from ..domain.validation import MAX_PARTY_SIZE, validate_reservation_input
from ..models import Reservation, ReservationStatus


async def submit_reservation(
    res_repo: ReservationRepository,
    data: Mapping[str, Any],
    *,
    today: date,
    max_party_size: int = MAX_PARTY_SIZE,
) -> Result[Reservation]:
    try:
        candidate = validate_reservation_input(data, today=today, max_party_size=max_party_size)
    except ValidationError as exc:
        return Err(exc)

    # Client-supplied status is never trusted.
    try:
        reservation = await res_repo.create(candidate, ReservationStatus.PENDING)
    except PersistenceError as exc:
        return Err(exc)
    return Ok(reservation)


async def check_availability(
    res_repo: ReservationRepository,
    *,
    day: date,
    today: date,
    max_capacity: int = DEFAULT_MAX_CAPACITY,
) -> Result[AvailabilitySnapshot]:
    if day < today:
        return Ok(past_date_snapshot(day, max_capacity=max_capacity))
    try:
        occupied = await res_repo.sum_reserved(day)
    except PersistenceError as exc:
        return Err(exc)
    return Ok(compute_availability(day, occupied_seats=occupied, max_capacity=max_capacity))


async def list_reservations(
    res_repo: ReservationRepository,
    *,
    status: Optional[str] = None,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
) -> Result[List[Reservation]]:
    status_value: ReservationStatus | None = None
    if status:
        try:
            status_value = ReservationStatus(status)
        except ValueError:
            allowed = ", ".join(s.value for s in ReservationStatus)
            return Err(ValidationError(f"status must be one of: {allowed}"))
    try:
        rows = await res_repo.list_filtered(status=status_value, date_from=date_from, date_to=date_to)
    except PersistenceError as exc:
        return Err(exc)
    return Ok(list(rows))
