import os
from configparser import ConfigParser
from enum import Enum
from pathlib import Path
from typing import Any, ClassVar, Dict, Final

import pydash as _

_CONFIG_FILE_PATH: Final = "private/config.ini"
_APP_ROOT_PATH: Final = Path(__file__).parent.parent.parent


class Option(Enum):
    """Enum of (section, property_key[, env_var]) options.

    Look up property in `os.environ`, fallback to config file file if missing.
    The environment variable defaults to `SECTION_KEY` unless given explicitly.
    """

    APP_NAME = ("app", "name")

    LOG_LEVEL = ("log", "level")
    LOG_RICH_ENABLED = ("log", "rich_enabled")

    KUBECONF_URL = ("kubeconf", "url")
    KUBECONF_CONFIG = ("kubeconf", "config")
    KUBECONFIG_PATH = ("kubeconfig", "path", "KUBECONFIG")

    KUBERNETES_SERVICE_HOST = ("kubernetes", "service_host")
    KUBERNETES_SERVICE_PORT = ("kubernetes", "service_port")
    KUBERNETES_SERVICE_ACCOUNT_DIR = ("kubernetes", "service_account_dir")

    def __str__(self) -> str:
        return f"{self.section}.{self.key}"

    def env_var(self) -> str:
        if len(self.value) > 2:
            return self.value[2]
        return str(self).upper().replace(".", "_")

    @property
    def section(self) -> str:
        """Get this option's section"""
        return self.value[0]

    @property
    def key(self) -> str:
        """Get this option's key"""
        return self.value[1]


class Config:
    """Centrally manage application configuration properties"""

    _config_parser: ClassVar[ConfigParser | None] = None
    _overrides: ClassVar[Dict[str, Dict[str, Any]]] = {}

    @staticmethod
    def __new__(cls):
        """Handle a singleton instance of ConfigParser"""
        if cls._config_parser is None:
            cls._config_parser = ConfigParser()
            cls._config_parser.read(_APP_ROOT_PATH / _CONFIG_FILE_PATH, encoding="utf8")
        return super(Config, cls).__new__(cls)

    def set(self, option: Option, value: Any) -> None:
        """Set option value"""
        if option.section not in Config._overrides:
            Config._overrides[option.section] = {}
        Config._overrides[option.section][option.key] = value

    def unset(self, option: Option) -> None:
        """Drop a value set programmatically"""
        Config._overrides.get(option.section, {}).pop(option.key, None)

    def get(self, option: Option, default: Any = None) -> Any:
        """Get option value"""
        # Value set programmatically
        override = _.get(Config._overrides, [option.section, option.key])
        if override is not None:
            return override
        # Value provided by environment variable
        from_env = os.environ.get(option.env_var())
        if from_env is not None:
            return from_env
        # Lookup property in config file
        assert Config._config_parser
        return Config._config_parser.get(option.section, option.key, fallback=default)
