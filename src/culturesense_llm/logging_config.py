"""Structured logging configuration using structlog.

Every event carries the service name and environment. Provider credentials
never reach the output: values under credential-like keys are masked before
rendering. Production renders JSON lines, development a colored console.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

SERVICE_NAME = "culturesense-llm"

# Keys whose values are replaced before rendering, matched case-insensitively
SENSITIVE_KEYS = frozenset({"api_key", "authorization", "auth_header", "x-api-key"})
MASK = "***"

# Upstream HTTP clients log every request at INFO
NOISY_LOGGERS = ("httpx", "httpcore", "asyncio")


def mask_credentials(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Replace credential values, including inside nested header dicts."""
    return {key: _masked(key, value) for key, value in event_dict.items()}


def _masked(key: str, value: Any) -> Any:
    if key.lower() in SENSITIVE_KEYS and value:
        return MASK
    if isinstance(value, dict):
        return {k: _masked(str(k), v) for k, v in value.items()}
    return value


def app_context(environment: str) -> Processor:
    """Processor adding service name and environment to every event."""
    def add_app_context(
        logger: WrappedLogger, method_name: str, event_dict: EventDict
    ) -> EventDict:
        event_dict.setdefault("service", SERVICE_NAME)
        event_dict.setdefault("environment", environment)
        return event_dict

    return add_app_context


def build_renderer(environment: str) -> Processor:
    if environment.lower() == "production":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())


def configure_logging(log_level: str = "INFO", environment: str = "development") -> None:
    """Route structlog and stdlib logging through one stdout handler.

    Args:
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        environment: "production" selects the JSON renderer
    """
    level = getattr(logging, log_level.upper(), logging.INFO)
    is_production = environment.lower() == "production"

    pre_chain: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        app_context(environment),
        mask_credentials,
    ]
    if is_production:
        pre_chain.append(structlog.processors.format_exc_info)

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=build_renderer(environment),
            foreign_pre_chain=pre_chain,
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers[:] = [handler]
    root_logger.setLevel(level)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.get_logger(__name__).info(
        "Logging configured",
        log_level=logging.getLevelName(level),
        renderer="json" if is_production else "console",
    )
