import logging
from dataclasses import dataclass
from typing import Generic, List, TypeVar

from ..domain.errors import NotFoundError, PersistenceError
from ..domain.repositories import ContentRepository, CountryRepository
from ..domain.results import Err, Ok, Result
from ..infrastructure.fallback import fallback_countries
from ..models import Content, ContentCategory, Country

logger = logging.getLogger(__name__)

FEATURED_LIMIT = 6

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    items: List[T]
    page: int
    limit: int
    total: int


def _offset(page: int, limit: int) -> int:
    return (page - 1) * limit


async def list_countries(country_repo: CountryRepository) -> List[Country]:
    try:
        return list(await country_repo.list_active())
    except PersistenceError as exc:
        logger.warning("country listing failed, serving fallback list: %s", exc.message)
        return fallback_countries()


async def list_featured(content_repo: ContentRepository) -> Result[List[Content]]:
    try:
        return Ok(list(await content_repo.list_featured(FEATURED_LIMIT)))
    except PersistenceError as exc:
        return Err(exc)


async def list_by_type(
    content_repo: ContentRepository,
    *,
    content_type: str,
    page: int,
    limit: int,
    country_id: int | None = None,
) -> Result[Page[Content]]:
    try:
        items, total = await content_repo.list_by_type(
            content_type,
            offset=_offset(page, limit),
            limit=limit,
            country_id=country_id,
        )
    except PersistenceError as exc:
        return Err(exc)
    return Ok(Page(items=list(items), page=page, limit=limit, total=total))


async def search_content(
    content_repo: ContentRepository,
    *,
    term: str,
    page: int,
    limit: int,
) -> Result[List[Content]]:
    try:
        items = await content_repo.search(term, offset=_offset(page, limit), limit=limit)
    except PersistenceError as exc:
        return Err(exc)
    return Ok(list(items))


async def get_content(content_repo: ContentRepository, *, slug: str) -> Result[Content]:
    try:
        content = await content_repo.get_published_by_slug(slug)
        if content is None:
            return Err(NotFoundError("content not found"))
        return Ok(await content_repo.increment_views(content))
    except PersistenceError as exc:
        return Err(exc)


async def list_categories(content_repo: ContentRepository) -> Result[List[ContentCategory]]:
    try:
        return Ok(list(await content_repo.list_categories()))
    except PersistenceError as exc:
        return Err(exc)
