import logging
import sys
from typing import TextIO


class Log:
    """Process-wide facade over the ``privacy_scan`` logger.

    Fragment text never goes through here; callers log origins and counts only.
    """

    _logger: logging.Logger = logging.getLogger("privacy_scan")
    _FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

    @classmethod
    def configure(cls, log_level: str, stream: TextIO | None = None) -> None:
        """Set the level and attach a single stream handler (stdout by default).

        Calling again only changes the level; the first handler is reused.
        """
        cls._logger.setLevel(log_level.upper())
        if cls._logger.handlers:
            return
        handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
        handler.setFormatter(logging.Formatter(cls._FORMAT))
        cls._logger.addHandler(handler)

    @classmethod
    def is_enabled_for(cls, level: int) -> bool:
        return cls._logger.isEnabledFor(level)

    @classmethod
    def debug(cls, message: str, **kwargs: object) -> None:
        cls._logger.debug(message, extra=kwargs)

    @classmethod
    def info(cls, message: str, **kwargs: object) -> None:
        cls._logger.info(message, extra=kwargs)

    @classmethod
    def warning(cls, message: str, **kwargs: object) -> None:
        cls._logger.warning(message, extra=kwargs)

    @classmethod
    def error(cls, message: str, **kwargs: object) -> None:
        cls._logger.error(message, extra=kwargs)

    @classmethod
    def exception(cls, message: str, **kwargs: object) -> None:
        """Log at ERROR level with the active exception's traceback."""
        cls._logger.exception(message, extra=kwargs)
