import uvicorn

from .config import get_settings

if __name__ == "__main__":  # pragma: no cover
    settings = get_settings()
    uvicorn.run(
        "sabores.main:app",
        host="0.0.0.0",
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
