from contextlib import asynccontextmanager
from fastapi import FastAPI
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from common.core.config import settings
from api.v1.routes.router import api_router
from common.db.session import create_engine_from_settings, create_session_factory
from common.providers.rate_limiter.limiter import limiter
from packages.billing.dependencies import build_webhook_handler
from packages.billing.providers.payment.factory import get_payment_provider

# Initialize Axiom OpenTelemetry exporter (must be first)
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from common.core.otel_axiom_exporter import (
    _initialize_telemetry,
    get_logger,
)  # noqa


_initialize_telemetry()

# Get logger
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info("Starting application...")
    engine = create_engine_from_settings(settings)
    session_factory = create_session_factory(engine)
    payment_provider = get_payment_provider(settings)

    app.state.session_factory = session_factory
    app.state.payment_provider = payment_provider
    app.state.webhook_handler = build_webhook_handler(
        settings, session_factory, payment_provider=payment_provider
    )
    logger.info("Webhook handler initialized")
    yield
    # Shutdown
    logger.info("Shutting down application...")
    await engine.dispose()


# Only expose OpenAPI docs in local development
is_local = settings.environment.exposes_api_docs
docs_url = "/docs" if is_local else None
redoc_url = "/redoc" if is_local else None
openapi_url = "/openapi.json" if is_local else None

app = FastAPI(
    title=settings.app_name,
    version=settings.api_version,
    lifespan=lifespan,
    docs_url=docs_url,
    redoc_url=redoc_url,
    openapi_url=openapi_url,
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# Instrument FastAPI with OpenTelemetry
FastAPIInstrumentor.instrument_app(app)

# Webhook path is fixed by the Stripe dashboard configuration, so no version prefix
app.include_router(api_router)


# Internal health endpoint for k8s probes
@app.get("/healthz", include_in_schema=False)
async def healthz():
    return {"status": "ok"}
