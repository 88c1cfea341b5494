import logging

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Root logger setup for the server process. Safe to call more than once."""
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger().setLevel(level)

    # uvicorn's access log is noisy next to our own request logging
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
