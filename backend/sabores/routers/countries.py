from typing import List

from fastapi import APIRouter, Depends

from ..deps import get_country_repo
from ..domain.repositories import CountryRepository
from ..schemas import CountryRead
from ..usecases import content as content_usecase

router = APIRouter(prefix="", tags=["countries"])


@router.get("/countries", response_model=List[CountryRead])
async def list_countries(country_repo: CountryRepository = Depends(get_country_repo)) -> list[CountryRead]:
    countries = await content_usecase.list_countries(country_repo)
    return [CountryRead.from_db(country=country) for country in countries]
