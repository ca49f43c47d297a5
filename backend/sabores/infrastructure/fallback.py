"""Repositories used when no store is configured.

Reads return static data and writes echo back an unsaved record, so the
marketing site keeps rendering while the database is unavailable.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import List, Tuple

from ..domain.errors import ConfigurationError
from ..domain.validation import ReservationInput
from ..models import Content, ContentCategory, Country, Reservation, ReservationStatus, Subscriber

logger = logging.getLogger(__name__)

# (name, country_code, flag_emoji), kept sorted by name
FALLBACK_COUNTRIES: Tuple[Tuple[str, str, str], ...] = (
    ("Argentina", "AR", "🇦🇷"),
    ("España", "ES", "🇪🇸"),
    ("India", "IN", "🇮🇳"),
    ("Italia", "IT", "🇮🇹"),
    ("Japón", "JP", "🇯🇵"),
    ("México", "MX", "🇲🇽"),
    ("Perú", "PE", "🇵🇪"),
    ("Tailandia", "TH", "🇹🇭"),
)


def fallback_countries() -> List[Country]:
    return [
        Country(id=index, name=name, country_code=code, flag_emoji=flag, active=True)
        for index, (name, code, flag) in enumerate(FALLBACK_COUNTRIES, start=1)
    ]


def _utc_now_naive() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class StaticCountryRepository:
    async def list_active(self) -> List[Country]:
        return fallback_countries()

    async def ping(self) -> None:
        raise ConfigurationError("store is not configured")


class EmptyContentRepository:
    async def list_featured(self, limit: int) -> List[Content]:
        return []

    async def list_by_type(
        self,
        content_type: str,
        *,
        offset: int,
        limit: int,
        country_id: int | None = None,
    ) -> Tuple[List[Content], int]:
        return [], 0

    async def search(self, term: str, *, offset: int, limit: int) -> List[Content]:
        return []

    async def get_published_by_slug(self, slug: str) -> Content | None:
        return None

    async def increment_views(self, content: Content) -> Content:
        return content

    async def list_categories(self) -> List[ContentCategory]:
        return []


class SimulatedReservationRepository:
    async def sum_reserved(self, day: date) -> int:
        return 0

    async def create(self, data: ReservationInput, status: ReservationStatus) -> Reservation:
        logger.warning("store not configured; reservation for %s not persisted", data.date.isoformat())
        return Reservation(
            id=None,
            full_name=data.full_name,
            phone=data.phone,
            email=data.email,
            party_size=data.party_size,
            date=data.date,
            country_context=data.country_context,
            occasion=data.occasion,
            status=status,
            created_at=_utc_now_naive(),
        )

    async def list_filtered(
        self,
        *,
        status: ReservationStatus | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> List[Reservation]:
        return []


class SimulatedSubscriberRepository:
    async def upsert(self, email: str, name: str | None) -> Subscriber:
        logger.warning("store not configured; subscriber not persisted")
        return Subscriber(id=None, email=email, name=name, active=True, created_at=_utc_now_naive())
