import logging

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from heatmap_proxy.api.routes.contributions import router
from heatmap_proxy.core.errors import register_error_handlers
from heatmap_proxy.core.log_config import configure_logging
from heatmap_proxy.core.observability import init_sentry
from heatmap_proxy.settings import Settings


logger = logging.getLogger(__name__)


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """Build the FastAPI application from explicit settings."""

    app_settings = app_settings or Settings()
    configure_logging(app_settings.log_level)
    init_sentry(app_settings)

    if not app_settings.github_token:
        logger.warning("GITHUB_TOKEN is not set; GitHub will reject GraphQL requests")

    app = FastAPI(title="heatmap-proxy")
    app.state.settings = app_settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    register_error_handlers(app)
    app.include_router(router)
    return app


app = create_app()


def run() -> None:
    """Serve the application on the configured port."""

    app_settings: Settings = app.state.settings
    uvicorn.run(app, host="0.0.0.0", port=app_settings.port)


if __name__ == "__main__":
    run()
