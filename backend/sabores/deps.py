from typing import AsyncIterator, Optional

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from .config import Settings
from .domain.repositories import (
    ContentRepository,
    CountryRepository,
    ReservationRepository,
    SubscriberRepository,
)
from .infrastructure.fallback import (
    EmptyContentRepository,
    SimulatedReservationRepository,
    SimulatedSubscriberRepository,
    StaticCountryRepository,
)
from .infrastructure.repositories import (
    SqlAlchemyContentRepository,
    SqlAlchemyCountryRepository,
    SqlAlchemyReservationRepository,
    SqlAlchemySubscriberRepository,
)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_session_factory(request: Request) -> Optional[async_sessionmaker[AsyncSession]]:
    return getattr(request.app.state, "session_factory", None)


async def get_session(
    factory: Optional[async_sessionmaker[AsyncSession]] = Depends(get_session_factory),
) -> AsyncIterator[Optional[AsyncSession]]:
    if factory is None:
        yield None
        return
    async with factory() as session:
        yield session


async def get_country_repo(session: Optional[AsyncSession] = Depends(get_session)) -> CountryRepository:
    if session is None:
        return StaticCountryRepository()
    return SqlAlchemyCountryRepository(session)


async def get_content_repo(session: Optional[AsyncSession] = Depends(get_session)) -> ContentRepository:
    if session is None:
        return EmptyContentRepository()
    return SqlAlchemyContentRepository(session)


async def get_reservation_repo(session: Optional[AsyncSession] = Depends(get_session)) -> ReservationRepository:
    if session is None:
        return SimulatedReservationRepository()
    return SqlAlchemyReservationRepository(session)


async def get_subscriber_repo(session: Optional[AsyncSession] = Depends(get_session)) -> SubscriberRepository:
    if session is None:
        return SimulatedSubscriberRepository()
    return SqlAlchemySubscriberRepository(session)
