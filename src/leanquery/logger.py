import logging
from typing import Optional

from leanquery.settings import settings as api_settings

PACKAGE_LOGGER = "leanquery"

_LEVELS = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
}

_configured = False


def setup_global_logging(level: str = "INFO") -> None:
    """Configure logging once for the query client.

    The root logger gets the standard format if the host application has
    not configured it yet. The `leanquery` logger always gets `level`, so
    query and transport verbosity follow `LOG_LEVEL` either way.

    Args:
        level: Log level name (e.g., "DEBUG", "INFO")
    """
    global _configured
    if _configured:
        return
    lvl = _LEVELS.get(level.upper(), logging.INFO)
    logging.basicConfig(
        level=lvl,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logging.getLogger(PACKAGE_LOGGER).setLevel(lvl)
    _configured = True


def get_logger(name: Optional[str] = None) -> "Logger":
    """Return a logger under the `leanquery` namespace.

    Args:
        name: Component name, e.g. "Query" or "HTTPTransport". Names
            already under the namespace are kept as they are.
    """
    if not name:
        return Logger(PACKAGE_LOGGER)
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return Logger(name)


class Logger:
    """Wrapper over standard logging used by queries and transports.

    `.message(text)` is for per-request summaries (rows found, counts): it
    logs at `INFO` when LOG_LEVEL is INFO or unset, at `DEBUG` when LOG_LEVEL
    is DEBUG, otherwise at the configured level.
    """

    def __init__(self, name: Optional[str] = None) -> None:
        if not _configured:
            setup_global_logging(api_settings.LOG_LEVEL)
        self._logger = logging.getLogger(name or PACKAGE_LOGGER)

    @property
    def name(self) -> str:
        return self._logger.name

    def debug(self, msg: str, *args, **kwargs) -> None:
        self._logger.debug(msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs) -> None:
        self._logger.info(msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs) -> None:
        self._logger.warning(msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs) -> None:
        self._logger.error(msg, *args, **kwargs)

    def critical(self, msg: str, *args, **kwargs) -> None:
        self._logger.critical(msg, *args, **kwargs)

    def message(self, msg: str, *args, **kwargs) -> None:
        level = (api_settings.LOG_LEVEL or "").upper()
        if level == "DEBUG":
            self.debug(msg, *args, **kwargs)
        elif level in ("INFO", ""):
            self.info(msg, *args, **kwargs)
        else:
            self._logger.log(_LEVELS.get(level, logging.INFO), msg, *args, **kwargs)
