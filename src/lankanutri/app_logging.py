"""Logging configuration helpers."""

import logging

APP_LOGGER = "lankanutri"
HTTP_CLIENT_LOGGERS = ("httpx", "httpcore", "hpack")


def configure_logging(level: int | str = logging.INFO) -> None:
    """Configure the application logger with a single stream handler.

    The Supabase and LLM SDKs log each HTTP request at INFO; their transport
    loggers are held at WARNING.
    """
    logger = logging.getLogger(APP_LOGGER)
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    for name in HTTP_CLIENT_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s: %(name)s: %(message)s")
    )
    logger.addHandler(handler)
    logger.propagate = False
