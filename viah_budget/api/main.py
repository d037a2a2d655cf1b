"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from viah_budget.api.middleware import RequestIDMiddleware, MetricsMiddleware
from viah_budget.api.v1 import ceremonies, dashboard, estimate, forecast, pricing, scenarios
from viah_budget.infrastructure.observability.logging import setup_logging
from viah_budget.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Viah Budget Engine",
        description="Ceremony cost estimation, scenario and cash-flow service",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(ceremonies.router, prefix="/v1", tags=["ceremonies"])
    app.include_router(pricing.router, prefix="/v1", tags=["pricing"])
    app.include_router(estimate.router, prefix="/v1", tags=["estimates"])
    app.include_router(scenarios.router, prefix="/v1", tags=["scenarios"])
    app.include_router(forecast.router, prefix="/v1", tags=["forecast"])
    app.include_router(dashboard.router, prefix="/v1", tags=["dashboard"])

    return app


app = create_app()
