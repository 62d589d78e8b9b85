import logging
import sys
import structlog

from core.dependencies import get_settings


def get_log_level():
    """Get log level from settings"""
    return get_settings().LOG_LEVEL.upper()


def get_log_renderer():
    """Get log renderer based on environment"""
    env = get_settings().ENVIRONMENT
    # Use JSON format for tests and production
    if env in ["test", "production"]:
        return structlog.processors.JSONRenderer()
    # Pretty printing for local development
    return structlog.dev.ConsoleRenderer(colors=True, sort_keys=False)


def configure_logging():
    """Set up structlog on top of stdlib logging."""
    shared_processors = [
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.ExceptionPrettyPrinter(),
    ]

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared_processors,
            get_log_renderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    if get_settings().ENVIRONMENT == "test":
        # In test mode, write to stdout for easier capture
        handler = logging.StreamHandler(sys.stdout)
    else:
        handler = logging.StreamHandler()

    handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(get_log_level())


# Business Event Log Names
class BusinessEvents:
    """Standard names for business event logs"""

    VERIFICATION_STARTED = "verification.started"
    VERIFICATION_PASSED = "verification.passed"
    VERIFICATION_FAILED = "verification.failed"
    EXTRACTION_FAILED = "verification.extraction_failed"
    ADDRESS_REJECTED = "verification.address_rejected"


# Configure logging when module is imported
configure_logging()
