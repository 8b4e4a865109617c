# pylint: disable=redefined-outer-name
from pathlib import Path

import pytest
from injector import Injector

from kubeconf.common.config import Config, Option
from kubeconf.common.error_types import (
    ConfigFileNotFoundError,
    FileReadError,
    MalformedDocumentError,
    MissingEnvironmentVariableError,
    ValidationError,
)
from kubeconf.entities.auth_info import NoAuth, TokenAuth
from kubeconf.entities.configuration import Cluster, Configuration
from kubeconf.entities.process_configurations import InClusterAttempt, LocalProxyDefault
from kubeconf.services.default_resolution_service import DefaultResolutionService, first_resolved, recover

_HOME_KUBECONFIG = """
clusters:
- name: home
  cluster:
    server: https://home.example.com
contexts:
- name: home
  context:
    cluster: home
current-context: home
"""

_OTHER_KUBECONFIG = _HOME_KUBECONFIG.replace("home", "other")


@pytest.fixture()
def service(injector: Injector) -> DefaultResolutionService:
    return injector.get(DefaultResolutionService)


@pytest.fixture()
def home_kubeconfig(home_dir: Path, write_kubeconfig) -> Path:
    return write_kubeconfig(home_dir / ".kube" / "config", _HOME_KUBECONFIG)


@pytest.fixture()
def other_kubeconfig(tmp_path: Path, write_kubeconfig) -> Path:
    return write_kubeconfig(tmp_path / "other" / "kubeconfig", _OTHER_KUBECONFIG)


@pytest.fixture()
def in_pod(monkeypatch: pytest.MonkeyPatch, service_account_dir: Path) -> Path:
    monkeypatch.setenv("KUBERNETES_SERVICE_HOST", "10.96.0.1")
    monkeypatch.setenv("KUBERNETES_SERVICE_PORT", "443")
    return service_account_dir


# region Combinators
def test_first_resolved_returns_first_configuration():
    calls = []

    def skip():
        calls.append("skip")
        return None

    def hit():
        calls.append("hit")
        return Configuration.use_local_proxy_on_port(1)

    def never():
        calls.append("never")
        return Configuration.use_local_proxy_on_port(2)

    assert first_resolved([skip, hit, never]) == Configuration.use_local_proxy_on_port(1)
    assert calls == ["skip", "hit"]
    assert first_resolved([skip]) is None


def test_recover_only_catches_named_errors():
    def primary():
        raise MissingEnvironmentVariableError(env_var="X")

    def fallback(error):
        return Configuration.use_proxy_at(error.kwargs["env_var"])

    assert recover(primary, fallback).current_context.cluster.server == "X"
    with pytest.raises(MissingEnvironmentVariableError):
        recover(primary, fallback, (MalformedDocumentError,))


# endregion / Combinators


@pytest.mark.usefixtures("home_kubeconfig", "in_pod")
def test_proxy_url_wins(service: DefaultResolutionService, monkeypatch: pytest.MonkeyPatch, other_kubeconfig: Path):
    monkeypatch.setenv("KUBECONF_URL", "http://proxy:8001")
    monkeypatch.setenv("KUBECONF_CONFIG", "file")
    monkeypatch.setenv("KUBECONFIG", str(other_kubeconfig))

    configuration = service.resolve()
    assert configuration == Configuration.use_proxy_at("http://proxy:8001")
    assert configuration.current_context.auth_info == NoAuth()


@pytest.mark.usefixtures("home_kubeconfig")
def test_config_mode_file(service: DefaultResolutionService, monkeypatch: pytest.MonkeyPatch, other_kubeconfig: Path):
    monkeypatch.setenv("KUBECONF_CONFIG", "file")
    monkeypatch.setenv("KUBECONFIG", str(other_kubeconfig))
    assert service.resolve().current_context.cluster.server == "https://home.example.com"


def test_config_mode_proxy(service: DefaultResolutionService, injector: Injector, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("KUBECONF_CONFIG", "proxy")
    configuration = service.resolve()
    assert configuration.current_context.cluster == Cluster()
    assert configuration is injector.get(LocalProxyDefault).configuration
    with pytest.raises(TypeError):
        configuration.clusters["default"] = Cluster(server="http://evil")  # type: ignore[index]
    assert injector.get(LocalProxyDefault).configuration.clusters["default"] == Cluster()


def test_config_mode_file_url(service: DefaultResolutionService, monkeypatch: pytest.MonkeyPatch, other_kubeconfig: Path):
    monkeypatch.setenv("KUBECONF_CONFIG", other_kubeconfig.as_uri())
    assert service.resolve().current_context.cluster.server == "https://other.example.com"


def test_config_mode_non_file_url_fails(service: DefaultResolutionService, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("KUBECONF_CONFIG", "https://example.com/kubeconfig")
    with pytest.raises(ValidationError):
        service.resolve()


@pytest.mark.usefixtures("home_kubeconfig", "in_pod")
def test_kubeconfig_env(service: DefaultResolutionService, monkeypatch: pytest.MonkeyPatch, other_kubeconfig: Path):
    monkeypatch.setenv("KUBECONFIG", str(other_kubeconfig))
    assert service.resolve().current_context.cluster.server == "https://other.example.com"


@pytest.mark.usefixtures("home_kubeconfig", "in_pod")
def test_kubeconfig_env_missing_file_propagates(
    service: DefaultResolutionService, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
):
    monkeypatch.setenv("KUBECONFIG", str(tmp_path / "missing"))
    with pytest.raises(ConfigFileNotFoundError):
        service.resolve()


@pytest.mark.usefixtures("home_kubeconfig", "in_pod")
def test_in_cluster_wins_over_default_file(service: DefaultResolutionService):
    configuration = service.resolve()
    assert configuration.current_context.cluster.server == "https://10.96.0.1:443"
    assert configuration.current_context.auth_info == TokenAuth(token="sa-token")


@pytest.mark.usefixtures("home_kubeconfig")
def test_falls_back_to_default_file_outside_a_pod(service: DefaultResolutionService):
    assert service.resolve().current_context.cluster.server == "https://home.example.com"


@pytest.mark.usefixtures("home_kubeconfig")
def test_falls_back_when_token_file_is_missing(service: DefaultResolutionService, in_pod: Path):
    (in_pod / "token").unlink()
    assert service.resolve().current_context.cluster.server == "https://home.example.com"


@pytest.mark.usefixtures("home_kubeconfig")
def test_falls_back_when_token_file_is_not_utf8(service: DefaultResolutionService, injector: Injector, in_pod: Path):
    (in_pod / "token").write_bytes(b"\xff\xfe-token")
    assert service.resolve().current_context.cluster.server == "https://home.example.com"
    assert isinstance(injector.get(InClusterAttempt).error, FileReadError)


@pytest.mark.usefixtures("home_dir")
def test_fallback_failure_propagates(service: DefaultResolutionService):
    with pytest.raises(ConfigFileNotFoundError) as exc_info:
        service.resolve()
    assert exc_info.value.kwargs["path"].endswith(str(Path(".kube") / "config"))


@pytest.mark.usefixtures("home_kubeconfig")
def test_options_set_programmatically(service: DefaultResolutionService, isolated_config: Config):
    isolated_config.set(Option.KUBECONF_URL, "http://localhost:9999")
    assert service.resolve().current_context.cluster.server == "http://localhost:9999"


@pytest.mark.usefixtures("home_kubeconfig")
def test_empty_variables_are_ignored(service: DefaultResolutionService, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("KUBECONF_URL", "")
    monkeypatch.setenv("KUBECONF_CONFIG", "")
    monkeypatch.setenv("KUBECONFIG", "")
    assert service.resolve().current_context.cluster.server == "https://home.example.com"
