# storefront_cart/utils/logging.py
import logging
import sys

from storefront_cart.utils.settings import LOG_LEVEL

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
_configured = False


def configure_logging(level: str | None = None) -> None:
    """Konfiguracja root loggera, tylko pierwsze wywolanie cos robi."""
    global _configured
    if _configured:
        return
    _configured = True

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(_FORMAT))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel((level or LOG_LEVEL).upper())


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
