from datetime import date, datetime, timedelta
from typing import AsyncIterator

import pytest
import pytest_asyncio
from sabores.domain.errors import PersistenceError
from sabores.domain.validation import ReservationInput
from sabores.infrastructure.repositories import (
    SqlAlchemyContentRepository,
    SqlAlchemyCountryRepository,
    SqlAlchemyReservationRepository,
    SqlAlchemySubscriberRepository,
)
from sabores.models import (
    Base,
    Content,
    ContentCategory,
    ContentStatus,
    Country,
    Reservation,
    ReservationStatus,
    Subscriber,
)
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

DAY = date(2030, 3, 14)


@pytest_asyncio.fixture
async def session() -> AsyncIterator[AsyncSession]:
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    factory = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)
    async with factory() as db:
        yield db
    await engine.dispose()


def _input(party_size: int, day: date = DAY) -> ReservationInput:
    return ReservationInput(
        full_name="Luis Pérez",
        phone="555-0100",
        email="luis@example.com",
        party_size=party_size,
        date=day,
    )


@pytest.mark.asyncio
async def test_reservation_create_returns_generated_fields(session: AsyncSession) -> None:
    repo = SqlAlchemyReservationRepository(session)
    created = await repo.create(_input(4), ReservationStatus.PENDING)
    assert created.id is not None
    assert created.created_at is not None
    assert created.status == ReservationStatus.PENDING


@pytest.mark.asyncio
async def test_sum_reserved_ignores_cancelled_and_other_dates(session: AsyncSession) -> None:
    repo = SqlAlchemyReservationRepository(session)
    for size in (12, 12, 12, 12):
        await repo.create(_input(size), ReservationStatus.PENDING)
    await repo.create(_input(8), ReservationStatus.CANCELLED)
    await repo.create(_input(6), ReservationStatus.CONFIRMED)
    await repo.create(_input(10, DAY + timedelta(days=1)), ReservationStatus.PENDING)
    # four pending parties of 12 plus one confirmed party of 6
    assert await repo.sum_reserved(DAY) == 54
    assert await repo.sum_reserved(DAY + timedelta(days=2)) == 0


@pytest.mark.asyncio
async def test_list_filtered_by_status_and_range(session: AsyncSession) -> None:
    repo = SqlAlchemyReservationRepository(session)
    await repo.create(_input(2), ReservationStatus.PENDING)
    await repo.create(_input(3, DAY + timedelta(days=5)), ReservationStatus.CONFIRMED)
    pending = await repo.list_filtered(status=ReservationStatus.PENDING)
    assert [r.party_size for r in pending] == [2]
    later = await repo.list_filtered(date_from=DAY + timedelta(days=1))
    assert [r.party_size for r in later] == [3]


@pytest.mark.asyncio
async def test_subscriber_upsert_last_write_wins(session: AsyncSession) -> None:
    repo = SqlAlchemySubscriberRepository(session)
    first = await repo.upsert("x@y.com", "A")
    second = await repo.upsert("x@y.com", "B")
    count = await session.scalar(select(func.count(Subscriber.id)).where(Subscriber.email == "x@y.com"))
    assert count == 1
    assert second.id == first.id
    assert second.name == "B"
    assert second.active is True


@pytest.mark.asyncio
async def test_subscriber_upsert_reactivates(session: AsyncSession) -> None:
    repo = SqlAlchemySubscriberRepository(session)
    created = await repo.upsert("old@y.com", None)
    created.active = False
    await session.commit()
    refreshed = await repo.upsert("old@y.com", "Back")
    assert refreshed.active is True
    assert refreshed.name == "Back"


async def _seed_content(session: AsyncSession) -> None:
    peru = Country(name="Perú", country_code="PE", flag_emoji="🇵🇪", active=True)
    hidden = Country(name="Atlantis", country_code="AT", flag_emoji=None, active=False)
    recipes = ContentCategory(name="Recetas", icon="utensils", content_type="recipe", active=True)
    session.add_all([peru, hidden, recipes])
    await session.flush()
    base = datetime(2026, 1, 1)
    session.add_all(
        [
            Content(
                slug=f"recipe-{i}",
                title=f"Recipe {i}",
                description="Ceviche 100% fresco" if i == 0 else "Slow cooked",
                content_type="recipe",
                status=ContentStatus.PUBLISHED,
                featured=i < 8,
                views=0,
                published_at=base + timedelta(days=i),
                country_id=peru.id,
                category_id=recipes.id,
            )
            for i in range(9)
        ]
        + [
            Content(
                slug="draft-ceviche",
                title="Ceviche draft",
                content_type="recipe",
                status=ContentStatus.DRAFT,
                featured=True,
                views=0,
                published_at=base + timedelta(days=30),
            )
        ]
    )
    await session.commit()


@pytest.mark.asyncio
async def test_countries_only_active_sorted(session: AsyncSession) -> None:
    await _seed_content(session)
    countries = await SqlAlchemyCountryRepository(session).list_active()
    assert [c.country_code for c in countries] == ["PE"]


@pytest.mark.asyncio
async def test_featured_limited_newest_first_with_joins(session: AsyncSession) -> None:
    await _seed_content(session)
    items = await SqlAlchemyContentRepository(session).list_featured(6)
    assert [c.slug for c in items] == [f"recipe-{i}" for i in (7, 6, 5, 4, 3, 2)]
    assert items[0].country is not None and items[0].country.country_code == "PE"
    assert items[0].category is not None and items[0].category.name == "Recetas"


@pytest.mark.asyncio
async def test_list_by_type_paginates_published_only(session: AsyncSession) -> None:
    await _seed_content(session)
    items, total = await SqlAlchemyContentRepository(session).list_by_type("recipe", offset=5, limit=5)
    assert total == 9
    assert [c.slug for c in items] == [f"recipe-{i}" for i in (3, 2, 1, 0)]


@pytest.mark.asyncio
async def test_search_is_case_insensitive_and_escapes_wildcards(session: AsyncSession) -> None:
    await _seed_content(session)
    repo = SqlAlchemyContentRepository(session)
    found = await repo.search("CEVICHE", offset=0, limit=10)
    assert [c.slug for c in found] == ["recipe-0"]
    assert [c.slug for c in await repo.search("100%", offset=0, limit=10)] == ["recipe-0"]
    assert await repo.search("%", offset=0, limit=10) == found


@pytest.mark.asyncio
async def test_get_by_slug_and_increment_views(session: AsyncSession) -> None:
    await _seed_content(session)
    repo = SqlAlchemyContentRepository(session)
    item = await repo.get_published_by_slug("recipe-2")
    assert item is not None
    updated = await repo.increment_views(item)
    assert updated.views == 1
    stored = await session.scalar(select(Content.views).where(Content.slug == "recipe-2"))
    assert stored == 1
    assert await repo.get_published_by_slug("draft-ceviche") is None


@pytest.mark.asyncio
async def test_categories_ordered(session: AsyncSession) -> None:
    await _seed_content(session)
    categories = await SqlAlchemyContentRepository(session).list_categories()
    assert [c.name for c in categories] == ["Recetas"]


@pytest.mark.asyncio
async def test_store_errors_become_persistence_errors() -> None:
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    factory = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)
    async with factory() as db:
        with pytest.raises(PersistenceError) as excinfo:
            await SqlAlchemyReservationRepository(db).sum_reserved(DAY)
    await engine.dispose()
    assert "reservations" in excinfo.value.message


class _RefusingSession:
    async def scalars(self, stmt: object) -> None:
        raise ConnectionRefusedError(111, "Connect call failed ('127.0.0.1', 1)")

    async def scalar(self, stmt: object) -> None:
        raise TimeoutError()


@pytest.mark.asyncio
async def test_connection_failures_become_persistence_errors() -> None:
    repo = SqlAlchemyCountryRepository(_RefusingSession())  # type: ignore[arg-type]
    with pytest.raises(PersistenceError) as refused:
        await repo.list_active()
    assert "Connect call failed" in refused.value.message

    with pytest.raises(PersistenceError) as timed_out:
        await repo.ping()
    assert timed_out.value.message == "TimeoutError"


@pytest.mark.asyncio
async def test_reservation_rows_roundtrip_dates(session: AsyncSession) -> None:
    repo = SqlAlchemyReservationRepository(session)
    await repo.create(_input(5), ReservationStatus.PENDING)
    stored = await session.scalar(select(Reservation.date))
    assert stored == DAY
