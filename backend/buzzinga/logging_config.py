import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(app):
    """
    Attach one stream handler to the ``buzzinga`` logger tree and align
    Flask's own logger with the configured level.
    """
    level = logging.getLevelName(str(app.config.get("LOG_LEVEL", "INFO")).upper())
    if not isinstance(level, int):
        level = logging.INFO

    logger = logging.getLogger("buzzinga")
    logger.setLevel(level)

    if not any(getattr(h, "_buzzinga", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._buzzinga = True
        logger.addHandler(handler)

    app.logger.setLevel(level)
