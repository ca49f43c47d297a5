from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from ..deps import get_content_repo
from ..domain.repositories import ContentRepository
from ..domain.results import Err
from ..schemas import CategoryRead, ContentPage, ContentRead, Pagination
from ..usecases import content as content_usecase
from .errors import http_error

router = APIRouter(prefix="/content", tags=["content"])


@router.get("/featured", response_model=List[ContentRead])
async def list_featured(content_repo: ContentRepository = Depends(get_content_repo)) -> list[ContentRead]:
    result = await content_usecase.list_featured(content_repo)
    if isinstance(result, Err):
        raise http_error(result.error)
    return [ContentRead.from_db(content=item) for item in result.value]


@router.get("/categories", response_model=List[CategoryRead])
async def list_categories(content_repo: ContentRepository = Depends(get_content_repo)) -> list[CategoryRead]:
    result = await content_usecase.list_categories(content_repo)
    if isinstance(result, Err):
        raise http_error(result.error)
    return [CategoryRead.from_db(category=category) for category in result.value]


@router.get("/type/{content_type}", response_model=ContentPage)
async def list_by_type(
    content_type: str,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    country: Optional[int] = Query(default=None, description="country id filter"),
    content_repo: ContentRepository = Depends(get_content_repo),
) -> ContentPage:
    result = await content_usecase.list_by_type(
        content_repo,
        content_type=content_type,
        page=page,
        limit=limit,
        country_id=country,
    )
    if isinstance(result, Err):
        raise http_error(result.error)
    found = result.value
    return ContentPage(
        data=[ContentRead.from_db(content=item) for item in found.items],
        pagination=Pagination(page=found.page, limit=found.limit, total=found.total),
    )


@router.get("/search/{term}", response_model=List[ContentRead])
async def search_content(
    term: str,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    content_repo: ContentRepository = Depends(get_content_repo),
) -> list[ContentRead]:
    result = await content_usecase.search_content(content_repo, term=term, page=page, limit=limit)
    if isinstance(result, Err):
        raise http_error(result.error)
    return [ContentRead.from_db(content=item) for item in result.value]


# Declared last so the fixed paths above take precedence over the slug.
@router.get("/{slug}", response_model=ContentRead)
async def get_content(slug: str, content_repo: ContentRepository = Depends(get_content_repo)) -> ContentRead:
    result = await content_usecase.get_content(content_repo, slug=slug)
    if isinstance(result, Err):
        raise http_error(result.error)
    return ContentRead.from_db(content=result.value)
