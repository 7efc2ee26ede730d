"""
FastAPI application entry point.

The lifespan initializes the platform bootstrap on startup and shuts it down
on exit, so handlers can rely on the shared handles.

Version: 1.0
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import structlog

from platform_services.api.health import router as health_router
from platform_services.bootstrap import ServiceBootstrap, get_default_bootstrap
from platform_services.config.logging_config import configure_logging
from platform_services.config.settings import ConfigurationSource, load_configuration
from platform_services.core.exceptions import BootstrapError, handle_bootstrap_exception

# Configure structured logging
logger = structlog.get_logger(__name__)


def create_application(
    bootstrap: Optional[ServiceBootstrap] = None,
    config: ConfigurationSource = None,
) -> FastAPI:
    """
    Creates and configures the FastAPI application.

    Args:
        bootstrap: Bootstrap to use; defaults to the process-wide one
        config: Configuration for startup initialization; defaults to the environment
    """
    bootstrap = bootstrap or get_default_bootstrap()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owns_client = False
        if bootstrap.is_initialized():
            configuration = bootstrap.get_platform_client().config
        else:
            configuration = load_configuration(config)
            configure_logging(configuration.environment, configuration.log_level)
            bootstrap.initialize(configuration)
            owns_client = True
            logger.info("platform initialized", project_id=configuration.project_id)
        try:
            yield
        finally:
            # Only tear down what this lifespan created
            if owns_client:
                bootstrap.shutdown()
                logger.info("platform shut down", project_id=configuration.project_id)

    app = FastAPI(
        title="Platform Services",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.bootstrap = bootstrap

    @app.exception_handler(BootstrapError)
    async def bootstrap_error_handler(request: Request, exc: BootstrapError) -> JSONResponse:
        """Map bootstrap failures to a consistent JSON error payload."""
        payload = handle_bootstrap_exception(exc)
        return JSONResponse(status_code=payload.pop("status_code"), content=payload)

    app.include_router(health_router)

    return app


# Create FastAPI application instance
app = create_application()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "platform_services.main:app",
        host="0.0.0.0",
        port=8000,
        reload=False,
        log_level="info"
    )
