from datetime import date, datetime, timedelta
from typing import Any, List

import pytest
from fastapi import HTTPException
from sabores.config import Settings
from sabores.domain.errors import PersistenceError
from sabores.domain.results import Err, Ok
from sabores.domain.services import compute_availability
from sabores.models import Reservation, ReservationStatus, Subscriber
from sabores.routers import newsletter as newsletter_router
from sabores.routers import reservations as router
from sabores.schemas import NewsletterSubscribe, ReservationSubmit


def _reservation(reservation_id: int | None = 100) -> Reservation:
    return Reservation(
        id=reservation_id,
        full_name="Ana Torres",
        phone="600000000",
        email="ana@example.com",
        party_size=2,
        date=date.today() + timedelta(days=1),
        status=ReservationStatus.PENDING,
        created_at=datetime(2026, 1, 1, 12, 0),
    )


@pytest.mark.asyncio
async def test_create_reservation_emits_audit(monkeypatch: pytest.MonkeyPatch) -> None:
    reservation = _reservation()

    async def fake_submit(*args: object, **kwargs: object) -> Ok[Reservation]:
        return Ok(reservation)

    calls: List[dict[str, Any]] = []

    def fake_emit(**kwargs: Any) -> None:
        calls.append(kwargs)

    monkeypatch.setattr(router.reservation_usecase, "submit_reservation", fake_submit)
    monkeypatch.setattr(router, "emit_audit_log", fake_emit)

    result = await router.create_reservation(
        payload=ReservationSubmit(full_name="Ana Torres"),
        res_repo=object(),  # type: ignore[arg-type]
        settings=Settings(),
    )

    assert result.success is True
    assert result.reservation.id == reservation.id
    assert result.reservation.status == ReservationStatus.PENDING
    assert len(calls) == 1
    assert calls[0]["action"] == "reservation.created"
    assert calls[0]["simulated"] is False


@pytest.mark.asyncio
async def test_create_reservation_passes_raw_fields_and_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    seen: dict[str, Any] = {}

    async def fake_submit(res_repo: object, data: dict[str, Any], **kwargs: Any) -> Ok[Reservation]:
        seen["data"] = data
        seen.update(kwargs)
        return Ok(_reservation())

    monkeypatch.setattr(router.reservation_usecase, "submit_reservation", fake_submit)
    monkeypatch.setattr(router, "emit_audit_log", lambda **kwargs: None)

    payload = ReservationSubmit.model_validate({"full_name": "Ana", "party_size": "3", "status": "confirmed"})
    await router.create_reservation(payload=payload, res_repo=object(), settings=Settings(max_party_size=8))  # type: ignore[arg-type]

    assert seen["data"]["party_size"] == "3"
    assert seen["data"]["status"] == "confirmed"
    assert seen["max_party_size"] == 8
    assert seen["today"] == date.today()


@pytest.mark.asyncio
async def test_create_reservation_store_failure_returns_500(monkeypatch: pytest.MonkeyPatch) -> None:
    async def fake_submit(*args: object, **kwargs: object) -> Err:
        return Err(PersistenceError("connection reset"))

    monkeypatch.setattr(router.reservation_usecase, "submit_reservation", fake_submit)

    with pytest.raises(HTTPException) as excinfo:
        await router.create_reservation(
            payload=ReservationSubmit(),
            res_repo=object(),  # type: ignore[arg-type]
            settings=Settings(),
        )
    assert excinfo.value.status_code == 500
    assert excinfo.value.detail["message"] == "connection reset"  # type: ignore[index]


@pytest.mark.asyncio
async def test_availability_rejects_unparseable_date() -> None:
    with pytest.raises(HTTPException) as excinfo:
        await router.check_availability(day="31-31-2030", res_repo=object(), settings=Settings())  # type: ignore[arg-type]
    assert excinfo.value.status_code == 400


@pytest.mark.asyncio
async def test_availability_uses_configured_capacity(monkeypatch: pytest.MonkeyPatch) -> None:
    seen: dict[str, Any] = {}

    async def fake_check(res_repo: object, **kwargs: Any) -> Ok[Any]:
        seen.update(kwargs)
        return Ok(compute_availability(kwargs["day"], occupied_seats=10, max_capacity=kwargs["max_capacity"]))

    monkeypatch.setattr(router.reservation_usecase, "check_availability", fake_check)

    result = await router.check_availability(
        day="2030-02-01",
        res_repo=object(),  # type: ignore[arg-type]
        settings=Settings(max_capacity=80),
    )
    assert seen["day"] == date(2030, 2, 1)
    assert result.max_capacity == 80
    assert result.remaining == 70


@pytest.mark.asyncio
async def test_subscribe_emits_audit(monkeypatch: pytest.MonkeyPatch) -> None:
    subscriber = Subscriber(id=7, email="x@y.com", name="B", active=True, created_at=datetime(2026, 1, 1))

    async def fake_subscribe(*args: object, **kwargs: object) -> Ok[Subscriber]:
        return Ok(subscriber)

    calls: List[dict[str, Any]] = []
    monkeypatch.setattr(newsletter_router.newsletter_usecase, "subscribe", fake_subscribe)
    monkeypatch.setattr(newsletter_router, "emit_audit_log", lambda **kwargs: calls.append(kwargs))

    result = await newsletter_router.subscribe(
        payload=NewsletterSubscribe(email="x@y.com", name="B"),
        sub_repo=object(),  # type: ignore[arg-type]
    )
    assert result.subscriber.id == 7
    assert calls[0]["action"] == "subscriber.upserted"
