from abc import ABC
from logging import Logger
from typing import Optional

from kubeconf.common.config import Config, Option
from kubeconf.common.error_types import MissingEnvironmentVariableError


class BaseService(ABC):

    config: Config
    logger: Logger

    def __init__(self, config: Config, logger: Logger):
        self.config = config
        self.logger = logger

    def optional_option(self, option: Option) -> Optional[str]:
        """Option value as a string, None if unset"""
        value = self.config.get(option)
        return None if value is None else str(value)

    def required_option(self, option: Option) -> str:
        """Option value as a string, raise `MissingEnvironmentVariableError` if unset"""
        value = self.optional_option(option)
        if value is None:
            raise MissingEnvironmentVariableError(env_var=option.env_var())
        return value
