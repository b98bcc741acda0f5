import logging

import structlog

LOGGER_NAME = "sendly"


def configure_structlog():
    """Configure structlog if it has not been configured by the user; levels follow the stdlib loggers"""
    if not structlog.is_configured():
        structlog.configure(
            processors=[
                structlog.stdlib.filter_by_level,
                structlog.stdlib.add_logger_name,
                structlog.processors.add_log_level,
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.JSONRenderer()
            ],
            wrapper_class=structlog.stdlib.BoundLogger,
        )


def enable_debug_logging():
    """Let request lifecycle logs through for clients created with debug=True"""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    # Without any handler, stdlib's last-resort handler would still drop debug records
    if not logger.handlers and not logging.getLogger().handlers:
        logger.addHandler(logging.StreamHandler())
