from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from ..config import Settings
from ..deps import get_app_settings, get_country_repo
from ..domain.repositories import CountryRepository
from ..domain.results import Err
from ..schemas import StoreInfo
from ..usecases import store as store_usecase
from ..utils.time import utc_now_iso

router = APIRouter(prefix="/store", tags=["store"])


@router.get("/test")
async def test_connection(
    country_repo: CountryRepository = Depends(get_country_repo),
    settings: Settings = Depends(get_app_settings),
) -> JSONResponse:
    result = await store_usecase.check_connection(country_repo)
    if isinstance(result, Err):
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "status": "error",
                "error": result.error.message,
                "connected": False,
                "configured": settings.store_configured,
            },
        )
    return JSONResponse(content={"status": "success", "connected": True, "timestamp": utc_now_iso()})


@router.get("/info", response_model=StoreInfo)
async def store_info(settings: Settings = Depends(get_app_settings)) -> StoreInfo:
    return StoreInfo(
        configured=settings.store_configured,
        environment=settings.environment,
        timestamp=utc_now_iso(),
    )
