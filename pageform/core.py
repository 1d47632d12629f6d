import logging

from anystore.functools import weakref_cache as cache
from anystore.logging import get_logger
from servicelayer.logs import configure_logging
from werkzeug.local import LocalProxy

from pageform.settings import Settings

log = get_logger(__name__)


@cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = LocalProxy(get_settings)


def init_pageform() -> None:
    """Initialize pageform logging."""
    settings = get_settings()
    if settings.debug:
        configure_logging(level=logging.DEBUG)
    else:
        configure_logging(level=logging.INFO)
    log.debug(
        "Initialized pageform",
        default_method=settings.default_method,
        validate_choices=settings.validate_choices,
    )
