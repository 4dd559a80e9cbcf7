import logging
from fastapi import FastAPI

from prescription_reader.logging import configure_logging
from prescription_reader.config import settings
from prescription_reader.middleware.request_id import RequestIdMiddleware
from prescription_reader.api.error_handlers import register_error_handlers

from prescription_reader.api.health import router as health_router
from prescription_reader.api.routes_analyze import router as analyze_router
from prescription_reader.observability.metrics_route import router as metrics_router


def create_app() -> FastAPI:
    configure_logging()
    logger = logging.getLogger(__name__)

    app = FastAPI(title=settings.app_name)
    app.add_middleware(RequestIdMiddleware)
    register_error_handlers(app)

    app.include_router(health_router)
    app.include_router(analyze_router)
    app.include_router(metrics_router)

    logger.info(
        "App initialized mode=%s provider=%s model=%s",
        settings.analysis_mode,
        settings.model_provider,
        settings.model_id,
    )
    return app


app = create_app()
