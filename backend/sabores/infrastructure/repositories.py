from __future__ import annotations

from contextlib import contextmanager
from datetime import date, datetime, timezone
from typing import Iterator, List, Optional, Tuple

from sqlalchemy import Select, func, or_, select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from ..domain.errors import PersistenceError
from ..domain.repositories import (
    ContentRepository,
    CountryRepository,
    ReservationRepository,
    SubscriberRepository,
)
from ..domain.validation import ReservationInput
from ..models import (
    Content,
    ContentCategory,
    ContentStatus,
    Country,
    Reservation,
    ReservationStatus,
    Subscriber,
)

ACTIVE_RESERVATION_STATUSES = (ReservationStatus.PENDING, ReservationStatus.CONFIRMED)


def _utc_now_naive() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


@contextmanager
def _store_errors() -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError as exc:
        raise PersistenceError(str(exc.orig) if getattr(exc, "orig", None) else str(exc)) from exc
    except OSError as exc:
        # Drivers raise connection failures unwrapped.
        raise PersistenceError(str(exc) or exc.__class__.__name__) from exc


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _published_content() -> Select[Tuple[Content]]:
    return (
        select(Content)
        .options(joinedload(Content.country), joinedload(Content.category))
        .where(Content.status == ContentStatus.PUBLISHED)
    )


class SqlAlchemyCountryRepository(CountryRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def list_active(self) -> List[Country]:
        stmt = select(Country).where(Country.active.is_(True)).order_by(Country.name)
        with _store_errors():
            rows = await self.session.scalars(stmt)
            return list(rows.all())

    async def ping(self) -> None:
        with _store_errors():
            await self.session.scalar(select(func.count(Country.id)))


class SqlAlchemyContentRepository(ContentRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def list_featured(self, limit: int) -> List[Content]:
        stmt = (
            _published_content()
            .where(Content.featured.is_(True))
            .order_by(Content.published_at.desc())
            .limit(limit)
        )
        with _store_errors():
            rows = await self.session.scalars(stmt)
            return list(rows.all())

    async def list_by_type(
        self,
        content_type: str,
        *,
        offset: int,
        limit: int,
        country_id: int | None = None,
    ) -> Tuple[List[Content], int]:
        stmt = _published_content().where(Content.content_type == content_type)
        count_stmt = select(func.count(Content.id)).where(
            Content.content_type == content_type,
            Content.status == ContentStatus.PUBLISHED,
        )
        if country_id is not None:
            stmt = stmt.where(Content.country_id == country_id)
            count_stmt = count_stmt.where(Content.country_id == country_id)
        stmt = stmt.order_by(Content.published_at.desc()).offset(offset).limit(limit)
        with _store_errors():
            total = int(await self.session.scalar(count_stmt) or 0)
            rows = await self.session.scalars(stmt)
            return list(rows.all()), total

    async def search(self, term: str, *, offset: int, limit: int) -> List[Content]:
        pattern = f"%{_escape_like(term)}%"
        stmt = (
            _published_content()
            .where(
                or_(
                    Content.title.ilike(pattern, escape="\\"),
                    Content.description.ilike(pattern, escape="\\"),
                )
            )
            .order_by(Content.published_at.desc())
            .offset(offset)
            .limit(limit)
        )
        with _store_errors():
            rows = await self.session.scalars(stmt)
            return list(rows.all())

    async def get_published_by_slug(self, slug: str) -> Optional[Content]:
        stmt = _published_content().where(Content.slug == slug)
        with _store_errors():
            return await self.session.scalar(stmt)

    async def increment_views(self, content: Content) -> Content:
        stmt = (
            update(Content)
            .where(Content.id == content.id)
            .values(views=Content.views + 1)
            .execution_options(synchronize_session=False)
        )
        with _store_errors():
            await self.session.execute(stmt)
            await self.session.commit()
            views = await self.session.scalar(select(Content.views).where(Content.id == content.id))
        content.views = int(views if views is not None else content.views + 1)
        return content

    async def list_categories(self) -> List[ContentCategory]:
        stmt = (
            select(ContentCategory)
            .where(ContentCategory.active.is_(True))
            .order_by(ContentCategory.content_type, ContentCategory.name)
        )
        with _store_errors():
            rows = await self.session.scalars(stmt)
            return list(rows.all())


class SqlAlchemyReservationRepository(ReservationRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def sum_reserved(self, day: date) -> int:
        stmt = select(func.coalesce(func.sum(Reservation.party_size), 0)).where(
            Reservation.date == day,
            Reservation.status.in_(ACTIVE_RESERVATION_STATUSES),
        )
        with _store_errors():
            return int(await self.session.scalar(stmt) or 0)

    async def create(self, data: ReservationInput, status: ReservationStatus) -> Reservation:
        reservation = Reservation(
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
        with _store_errors():
            self.session.add(reservation)
            try:
                await self.session.commit()
            except (SQLAlchemyError, OSError):
                await self.session.rollback()
                raise
        return reservation

    async def list_filtered(
        self,
        *,
        status: ReservationStatus | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> List[Reservation]:
        stmt = select(Reservation).order_by(Reservation.created_at.desc())
        if status is not None:
            stmt = stmt.where(Reservation.status == status)
        if date_from is not None:
            stmt = stmt.where(Reservation.date >= date_from)
        if date_to is not None:
            stmt = stmt.where(Reservation.date <= date_to)
        with _store_errors():
            rows = await self.session.scalars(stmt)
            return list(rows.all())


class SqlAlchemySubscriberRepository(SubscriberRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _insert(self) -> postgresql.Insert | sqlite.Insert:
        dialect = self.session.get_bind().dialect.name
        if dialect == "postgresql":
            return postgresql.insert(Subscriber)
        if dialect == "sqlite":
            return sqlite.insert(Subscriber)
        raise PersistenceError(f"upsert is not supported for dialect {dialect!r}")

    async def upsert(self, email: str, name: str | None) -> Subscriber:
        stmt = self._insert().values(email=email, name=name, active=True, created_at=_utc_now_naive())
        stmt = stmt.on_conflict_do_update(
            index_elements=[Subscriber.email],
            set_={"name": stmt.excluded.name, "active": stmt.excluded.active},
        )
        with _store_errors():
            try:
                await self.session.execute(stmt)
                await self.session.commit()
            except (SQLAlchemyError, OSError):
                await self.session.rollback()
                raise
            subscriber = await self.session.scalar(
                select(Subscriber)
                .where(Subscriber.email == email)
                .execution_options(populate_existing=True)
            )
        if subscriber is None:
            raise PersistenceError("upserted subscriber could not be read back")
        return subscriber
