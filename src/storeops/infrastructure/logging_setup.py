from __future__ import annotations

import logging
import logging.handlers

from storeops.infrastructure.settings import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(settings: Settings) -> logging.Logger:
    """Configure the ``storeops`` logger: stderr, plus a rotating file if set.

    Safe to call more than once; handlers are only added the first time.
    """
    logger = logging.getLogger("storeops")
    logger.setLevel(settings.log_level.upper())

    fmt = logging.Formatter(LOG_FORMAT)

    if not any(getattr(h, "_storeops", False) for h in logger.handlers):
        console = logging.StreamHandler()
        console.setFormatter(fmt)
        console._storeops = True  # type: ignore[attr-defined]
        logger.addHandler(console)

        if settings.log_file is not None:
            settings.log_file.parent.mkdir(parents=True, exist_ok=True)
            handler = logging.handlers.RotatingFileHandler(
                settings.log_file, maxBytes=5_000_000, backupCount=3, encoding="utf-8"
            )
            handler.setFormatter(fmt)
            handler._storeops = True  # type: ignore[attr-defined]
            logger.addHandler(handler)

    return logger
