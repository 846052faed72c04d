import logging

_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

# Libraries that are chatty at INFO and drown out application logs.
_NOISY_LOGGERS = ("sqlalchemy.engine", "aiosqlite", "asyncio")


def configure_logging(level: str = "INFO") -> None:
    """
    Attach a single stream handler to the root logger.

    Safe to call more than once (the lifespan runs on every test client
    startup); an existing handler is reused rather than duplicated.
    """
    root = logging.getLogger()
    root.setLevel(level.upper())

    if not any(getattr(h, "_coffee_api", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler._coffee_api = True  # type: ignore[attr-defined]
        root.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
