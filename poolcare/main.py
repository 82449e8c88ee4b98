from fastapi import FastAPI

from poolcare import models  # noqa: F401
from poolcare.api.dosing import router as dosing_router
from poolcare.api.health import router as health_router
from poolcare.api.observability import router as observability_router
from poolcare.api.pools import router as pool_router
from poolcare.core.config import settings
from poolcare.core.database import Base, engine
from poolcare.core.observability_middleware import ObservabilityMiddleware, configure_logging


def create_app() -> FastAPI:
    configure_logging(settings.log_level)

    app = FastAPI(title=settings.app_name)
    app.add_middleware(ObservabilityMiddleware)

    if settings.auto_create_tables:
        Base.metadata.create_all(bind=engine)

    app.include_router(health_router, prefix=settings.api_prefix)
    app.include_router(pool_router, prefix=settings.api_prefix)
    app.include_router(observability_router, prefix=settings.api_prefix)
    app.include_router(dosing_router, prefix=settings.api_prefix)
    return app


app = create_app()
