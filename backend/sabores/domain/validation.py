"""Validation rules for reservation and newsletter input.

Every rule is a pure function that either returns a normalized value or
raises :class:`ValidationError`. ``validate_reservation_input`` runs the
rules in a fixed order and stops at the first failure.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Mapping, Optional

from .errors import ValidationError

REQUIRED_RESERVATION_FIELDS = ("full_name", "phone", "email", "party_size", "date")
MIN_PARTY_SIZE = 1
MAX_PARTY_SIZE = 12

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


@dataclass(frozen=True)
class ReservationInput:
    full_name: str
    phone: str
    email: str
    party_size: int
    date: date
    country_context: Optional[str] = None
    occasion: Optional[str] = None


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def _optional_text(value: Any) -> Optional[str]:
    if _is_missing(value):
        return None
    return str(value).strip()


def check_required(data: Mapping[str, Any], fields: tuple[str, ...] = REQUIRED_RESERVATION_FIELDS) -> None:
    missing = [name for name in fields if _is_missing(data.get(name))]
    if missing:
        raise ValidationError("missing required fields", missing_fields=missing)


def parse_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date()
    except ValueError as exc:
        raise ValidationError(f"invalid date: {text!r}") from exc


def check_not_past(day: date, *, today: date) -> date:
    # Day granularity: a reservation for today is still accepted.
    if day < today:
        raise ValidationError("reservation date cannot be in the past")
    return day


def parse_party_size(
    value: Any,
    *,
    minimum: int = MIN_PARTY_SIZE,
    maximum: int = MAX_PARTY_SIZE,
) -> int:
    bounds_error = ValidationError(f"party_size must be between {minimum} and {maximum}")
    if isinstance(value, bool):
        raise bounds_error
    if isinstance(value, int):
        size = value
    elif isinstance(value, float) and value.is_integer():
        size = int(value)
    else:
        try:
            size = int(str(value).strip())
        except ValueError as exc:
            raise bounds_error from exc
    if size < minimum or size > maximum:
        raise bounds_error
    return size


def check_email(value: Any) -> str:
    email = str(value).strip()
    if not EMAIL_RE.match(email):
        raise ValidationError("invalid email format")
    return email


def validate_reservation_input(
    data: Mapping[str, Any],
    *,
    today: date,
    max_party_size: int = MAX_PARTY_SIZE,
) -> ReservationInput:
    """Normalize raw reservation input or raise the first failing rule.

    Order: presence, date, party size, email. Any ``status`` key in ``data``
    is ignored.
    """
    check_required(data)
    day = check_not_past(parse_date(data["date"]), today=today)
    party_size = parse_party_size(data["party_size"], maximum=max_party_size)
    email = check_email(data["email"])
    return ReservationInput(
        full_name=str(data["full_name"]).strip(),
        phone=str(data["phone"]).strip(),
        email=email,
        party_size=party_size,
        date=day,
        country_context=_optional_text(data.get("country_context")),
        occasion=_optional_text(data.get("occasion")),
    )
