from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from ..config import Settings
from ..deps import get_app_settings, get_reservation_repo
from ..domain.errors import ValidationError
from ..domain.repositories import ReservationRepository
from ..domain.results import Err
from ..domain.validation import parse_date
from ..schemas import AvailabilityRead, ReservationConfirmation, ReservationList, ReservationRead, ReservationSubmit
from ..usecases import reservations as reservation_usecase
from ..utils.audit_log import emit_audit_log
from ..utils.time import local_today
from .errors import http_error

router = APIRouter(prefix="/reservations", tags=["reservations"])

CONFIRMATION_MESSAGE = "Reservation created successfully. We will contact you soon."


@router.post("", response_model=ReservationConfirmation, status_code=status.HTTP_201_CREATED)
async def create_reservation(
    payload: ReservationSubmit,
    res_repo: ReservationRepository = Depends(get_reservation_repo),
    settings: Settings = Depends(get_app_settings),
) -> ReservationConfirmation:
    result = await reservation_usecase.submit_reservation(
        res_repo,
        payload.as_input(),
        today=local_today(settings.timezone),
        max_party_size=settings.max_party_size,
    )
    if isinstance(result, Err):
        raise http_error(result.error)

    reservation = result.value
    emit_audit_log(
        action="reservation.created",
        record_id=reservation.id,
        simulated=reservation.id is None,
        email=reservation.email,
        party_size=reservation.party_size,
        reservation_date=reservation.date,
        status=reservation.status,
    )
    return ReservationConfirmation(
        message=CONFIRMATION_MESSAGE,
        reservation=ReservationRead.from_db(reservation=reservation),
    )


@router.get("", response_model=ReservationList)
async def list_reservations(
    status_filter: Optional[str] = Query(default=None, alias="status"),
    date_from: Optional[date] = Query(default=None),
    date_to: Optional[date] = Query(default=None),
    res_repo: ReservationRepository = Depends(get_reservation_repo),
) -> ReservationList:
    result = await reservation_usecase.list_reservations(
        res_repo,
        status=status_filter,
        date_from=date_from,
        date_to=date_to,
    )
    if isinstance(result, Err):
        raise http_error(result.error)
    rows = [ReservationRead.from_db(reservation=reservation) for reservation in result.value]
    return ReservationList(reservations=rows, total=len(rows))


@router.get("/availability/{day}", response_model=AvailabilityRead)
async def check_availability(
    day: str,
    res_repo: ReservationRepository = Depends(get_reservation_repo),
    settings: Settings = Depends(get_app_settings),
) -> AvailabilityRead:
    try:
        parsed = parse_date(day)
    except ValidationError as exc:
        raise http_error(exc) from exc
    result = await reservation_usecase.check_availability(
        res_repo,
        day=parsed,
        today=local_today(settings.timezone),
        max_capacity=settings.max_capacity,
    )
    if isinstance(result, Err):
        raise http_error(result.error)
    return AvailabilityRead.from_snapshot(result.value)
