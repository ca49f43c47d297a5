import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Awaitable, Callable, Optional

from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings, get_settings
from .database import build_engine, build_session_factory
from .domain.errors import ConfigurationError
from .routers import content, countries, newsletter, reservations, store
from .schemas import HealthRead
from .utils.request_id import REQUEST_ID_HEADER, resolve_request_id, set_request_id
from .utils.time import utc_now_iso

logger = logging.getLogger(__name__)


async def request_id_middleware(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
    request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
    set_request_id(request_id)
    try:
        response = await call_next(request)
    except Exception as exc:
        response = await unhandled_exception_handler(request, exc)
    finally:
        set_request_id(None)
    response.headers[REQUEST_ID_HEADER] = request_id
    return response


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    content = exc.detail if isinstance(exc.detail, dict) else {"error": exc.detail}
    return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "invalid request", "details": jsonable_errors(exc)},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


def jsonable_errors(exc: RequestValidationError) -> list[dict[str, object]]:
    return [{"loc": list(err.get("loc", ())), "msg": err.get("msg", "")} for err in exc.errors()]


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    logging.getLogger("sabores").setLevel(settings.log_level.upper())

    engine = None
    session_factory = None
    try:
        engine = build_engine(settings)
        session_factory = build_session_factory(engine)
    except ConfigurationError as exc:
        logger.warning("%s; serving fallback data", exc.message)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "starting sabores api (environment=%s, store=%s)",
            settings.environment,
            "configured" if settings.store_configured else "not configured",
        )
        yield
        if engine is not None:
            await engine.dispose()

    app = FastAPI(title="Sabores API", lifespan=lifespan)
    app.state.settings = settings
    app.state.session_factory = session_factory

    app.middleware("http")(request_id_middleware)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    @app.get("/health", response_model=HealthRead)
    async def health() -> HealthRead:
        return HealthRead(
            status="ok",
            timestamp=utc_now_iso(),
            environment=settings.environment,
            store="configured" if settings.store_configured else "not configured",
        )

    app.include_router(countries.router)
    app.include_router(content.router)
    app.include_router(reservations.router)
    app.include_router(newsletter.router)
    app.include_router(store.router)
    return app


app = create_app()
