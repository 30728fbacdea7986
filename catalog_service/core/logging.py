"""Настройка логирования."""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """
    Настраивает корневой логгер один раз при старте процесса.
    """
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    # SQL-запросы логируются только при явной отладке
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
