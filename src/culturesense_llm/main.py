"""
FastAPI application entry point for the CultureSense LLM Orchestrator.
"""

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator

from culturesense_llm.api.dependencies import get_dispatcher
from culturesense_llm.api.error_handlers import EXCEPTION_HANDLERS
from culturesense_llm.api.middleware import RequestTracingMiddleware
from culturesense_llm.api.routes import router
from culturesense_llm.config import settings
from culturesense_llm.logging_config import configure_logging

# Configure structured logging before anything logs
configure_logging(settings.LOG_LEVEL, settings.ENVIRONMENT)
logger = structlog.get_logger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    description="Resilient multi-provider AI completion and cultural insight service",
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(RequestTracingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

for exc_class, handler in EXCEPTION_HANDLERS.items():
    app.add_exception_handler(exc_class, handler)

app.include_router(router)


@app.on_event("startup")
async def startup():
    """Log the provider setup; missing credentials are reported, not fatal."""
    dispatcher = get_dispatcher()
    services = dispatcher.available_models()
    logger.info(
        "Application startup",
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
        default_provider=dispatcher.default_provider.value,
        providers=services,
    )
    for name, service in services.items():
        if not service["available"]:
            logger.warning("Provider API key not configured", provider=name)


@app.on_event("shutdown")
async def shutdown():
    # Adapters open a client per attempt; nothing to close
    logger.info("Application shutdown")


if settings.PROMETHEUS_ENABLED:
    Instrumentator().instrument(app).expose(app)


@app.get("/")
async def root():
    """Root endpoint with API documentation links."""
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running",
        "docs": "/docs",
        "health": "/health",
        "metrics": "/metrics" if settings.PROMETHEUS_ENABLED else None,
    }


if __name__ == "__main__":
    import uvicorn
    
    uvicorn.run(
        "culturesense_llm.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,  # Only for development
    )
