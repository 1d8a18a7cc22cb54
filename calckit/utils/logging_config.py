import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "[%(levelname)s] %(name)s - %(message)s"
PACKAGE_LOGGER = "calckit"


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> logging.Logger:
    """
    Route calckit's log records to stderr or a file.

    Only the ``calckit`` logger is configured, so an application embedding the
    library keeps its own root logger setup. Calling this again (the CLI does
    so on every ``main()``) replaces the previous handler instead of stacking
    another one.

    Parameters
    ----------
    level:
        Logging level name (e.g., "INFO", "DEBUG"). Unknown names fall back
        to INFO; ``Settings`` validates the name before it gets here.
    log_file:
        Optional path to log output. Missing parent directories are created.
    """
    reset_logging()
    logger = logging.getLogger(PACKAGE_LOGGER)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(log_file, encoding="utf-8")
    else:
        handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    return logger


def reset_logging() -> None:
    """Detach and close the handlers installed by ``setup_logging``."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
