"""FastAPI application factory"""

import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from fintools_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from fintools_gateway.api.v1 import cards, iban, mnemonic, oib, payment_slip
from fintools_gateway.domain.exceptions import PrimitiveUnavailableError
from fintools_gateway.infrastructure.observability.logging import setup_logging
from fintools_gateway.infrastructure.observability.metrics import record_derivation
from fintools_gateway.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Fintools Gateway",
        description="Croatian IBAN/OIB checksums, card validation, HUB3 payloads and mnemonic key derivation",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Crypto backend fails to load inside the dependency provider, before any route code runs
    @app.exception_handler(PrimitiveUnavailableError)
    async def primitive_unavailable_handler(request: Request, exc: PrimitiveUnavailableError):
        record_derivation("unavailable")
        logging.error(
            f"Crypto backend unavailable: {exc}",
            extra={"request_id": getattr(request.state, "request_id", "unknown")},
        )
        return JSONResponse(status_code=503, content={"detail": "Derivation unavailable"})

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(iban.router, prefix="/v1", tags=["iban"])
    app.include_router(oib.router, prefix="/v1", tags=["oib"])
    app.include_router(cards.router, prefix="/v1", tags=["cards"])
    app.include_router(mnemonic.router, prefix="/v1", tags=["mnemonic"])
    app.include_router(payment_slip.router, prefix="/v1", tags=["payment-slip"])

    return app


app = create_app()
