import sys

from loguru import logger

from nattydb.models.config import Config

__all__ = ["LOG_FORMAT", "configure_logging"]

LOG_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - "
    "<level>{message}</level>"
)


def configure_logging(level: str | None = None) -> None:
    """
    Route NattyDB logs to stderr.

    The library only emits records; applications call this once to see them.

    Args:
        level: Logging level name. Defaults to ``NATTYDB_LOG_LEVEL``.
    """
    logger.remove()
    logger.add(sys.stderr, level=(level or Config().log_level).upper(), format=LOG_FORMAT)
