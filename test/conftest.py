# pylint: disable=redefined-outer-name
import logging
from configparser import ConfigParser
from pathlib import Path
from typing import Callable

import pytest
from injector import Injector

from kubeconf.common.config import Config, Option
from kubeconf.dependencies import InjectorModule
from kubeconf.services.kubeconfig_parser_service import KubeconfigParserService


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch) -> Config:
    """No option leaks in from the environment, the config file or a previous test"""
    for option in Option:
        monkeypatch.delenv(option.env_var(), raising=False)
    monkeypatch.setattr(Config, "_overrides", {})
    monkeypatch.setattr(Config, "_config_parser", ConfigParser())
    return Config()


@pytest.fixture()
def logger() -> logging.Logger:
    return logging.getLogger("kubeconf.test")


@pytest.fixture()
def home_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    return home


@pytest.fixture()
def injector(isolated_config: Config) -> Injector:
    # Fresh singletons for every test
    return Injector([InjectorModule()])


@pytest.fixture()
def parser(isolated_config: Config, logger: logging.Logger) -> KubeconfigParserService:
    return KubeconfigParserService(isolated_config, logger)


@pytest.fixture()
def service_account_dir(tmp_path: Path, isolated_config: Config) -> Path:
    sa_dir = tmp_path / "serviceaccount"
    sa_dir.mkdir()
    (sa_dir / "token").write_text("sa-token", encoding="utf-8")
    (sa_dir / "namespace").write_text("team-a", encoding="utf-8")
    (sa_dir / "ca.crt").write_text("-----BEGIN CERTIFICATE-----\n", encoding="utf-8")
    isolated_config.set(Option.KUBERNETES_SERVICE_ACCOUNT_DIR, str(sa_dir))
    return sa_dir


@pytest.fixture()
def write_kubeconfig() -> Callable[[Path, str], Path]:
    def write(path: Path, content: str) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return write
