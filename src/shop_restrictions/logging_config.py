import logging
import os

LOG_LEVEL_ENV = "SHOP_RESTRICTIONS_LOG_LEVEL"


def configure_logging(default_level: int = logging.INFO) -> None:
    """Configure root logger with the project format.

    Respects SHOP_RESTRICTIONS_LOG_LEVEL env var if present.
    """
    level_name = os.getenv(LOG_LEVEL_ENV)
    level = default_level
    if level_name:
        level = getattr(logging, level_name.upper(), default_level)
    logging.basicConfig(
        level=level,
        format="[%(asctime)s] [%(levelname)s] %(name)s: %(message)s",
    )
