import logging
import sys
from typing import Final

from injector import inject
from rich.console import Console
from rich.logging import RichHandler

from kubeconf.common.config import Config, Option

CONSOLE_WIDTH: Final = 140
DEFAULT_APP_NAME: Final = "kubeconf"


class LoggerManager:

    _config: Config
    _logger: logging.Logger

    @property
    def logger(self) -> logging.Logger:
        assert self._logger is not None
        return self._logger

    @inject
    def __init__(self, config: Config):
        self._config = config
        self._logger = LoggerManager._get_logger(config)

    @staticmethod
    def _get_logger(config: Config) -> logging.Logger:
        log_level = logging.getLevelName(str(config.get(Option.LOG_LEVEL, "INFO")).upper())
        log_rich_enabled = (
            str(config.get(Option.LOG_RICH_ENABLED, "False")).lower() == "true"
        )  # pylint: disable=invalid-name

        if log_rich_enabled:
            # https://rich.readthedocs.io/en/stable/logging.html#logging-handler
            _stdout_handler: logging.Handler = RichHandler(console=Console(width=CONSOLE_WIDTH, stderr=True))
        else:
            _stdout_handler = logging.StreamHandler(sys.stderr)
            _stdout_handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)-8s %(name)s: %(message)s"))

        logger: logging.Logger = logging.getLogger(config.get(Option.APP_NAME, DEFAULT_APP_NAME))
        if logger.hasHandlers():
            logger.handlers.clear()
        logger.addHandler(_stdout_handler)
        logger.setLevel(log_level)
        logger.propagate = False

        return logger
