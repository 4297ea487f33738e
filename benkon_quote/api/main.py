"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.responses import Response

from benkon_quote.api.middleware import MetricsMiddleware, RequestIDMiddleware
from benkon_quote.api.v1 import form_state, quote
from benkon_quote.config import settings
from benkon_quote.infrastructure.observability.logging import setup_logging

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="BenKon Quote Service",
        description="Purchase vs. rental cost comparison and quotation export",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(quote.router, prefix="/v1", tags=["quotes"])
    app.include_router(form_state.router, prefix="/v1", tags=["form-state"])

    return app


app = create_app()
