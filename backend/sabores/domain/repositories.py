from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from ..models import Content, ContentCategory, Country, Reservation, ReservationStatus, Subscriber
from .validation import ReservationInput


class CountryRepository(Protocol):
    async def list_active(self) -> Sequence[Country]: ...

    async def ping(self) -> None: ...


class ContentRepository(Protocol):
    async def list_featured(self, limit: int) -> Sequence[Content]: ...

    async def list_by_type(
        self,
        content_type: str,
        *,
        offset: int,
        limit: int,
        country_id: int | None = None,
    ) -> tuple[Sequence[Content], int]: ...

    async def search(self, term: str, *, offset: int, limit: int) -> Sequence[Content]: ...

    async def get_published_by_slug(self, slug: str) -> Content | None: ...

    async def increment_views(self, content: Content) -> Content: ...

    async def list_categories(self) -> Sequence[ContentCategory]: ...


class ReservationRepository(Protocol):
    async def sum_reserved(self, day: date) -> int: ...

    async def create(self, data: ReservationInput, status: ReservationStatus) -> Reservation: ...

    async def list_filtered(
        self,
        *,
        status: ReservationStatus | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> Sequence[Reservation]: ...


class SubscriberRepository(Protocol):
    async def upsert(self, email: str, name: str | None) -> Subscriber: ...
