import logging
import sys

import structlog

SERVICE_NAME = "ff-tourney"


def service_context(app_env: str, version: str):
    """Processor stamping every event with the service, its version and environment."""

    def add_service_context(logger, method_name, event_dict):
        event_dict.setdefault("service", SERVICE_NAME)
        event_dict.setdefault("version", version)
        event_dict.setdefault("env", app_env)
        return event_dict

    return add_service_context


def configure_logging(log_level: str = "INFO", app_env: str = "dev", version: str = "unknown") -> None:
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper(), logging.INFO),
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            service_context(app_env, version),
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
