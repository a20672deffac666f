import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

def configure_logging(level: str = "INFO") -> None:
    """
    Configures the `prakritipath` logger hierarchy once per process.
    """
    logger = logging.getLogger("prakritipath")
    logger.setLevel(level.upper())
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
