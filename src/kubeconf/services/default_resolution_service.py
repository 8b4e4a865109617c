from logging import Logger
from typing import Callable, Final, Iterable, Optional, Tuple, Type

from injector import ProviderOf, inject

from kubeconf.common.config import Config, Option
from kubeconf.common.error_types import ApplicationError
from kubeconf.entities.configuration import Configuration
from kubeconf.entities.process_configurations import InClusterAttempt, LocalProxyDefault
from kubeconf.utilities.file_utilities import file_url_to_path

from .base_service import BaseService
from .kubeconfig_parser_service import KubeconfigParserService

Resolver = Callable[[], Optional[Configuration]]
"""Returns None when its source does not apply, raises when the source applies but fails"""

_MODE_FILE: Final = "file"
_MODE_PROXY: Final = "proxy"


def first_resolved(resolvers: Iterable[Resolver]) -> Optional[Configuration]:
    """Run `resolvers` in order, return the first configuration produced"""
    for resolver in resolvers:
        configuration = resolver()
        if configuration is not None:
            return configuration
    return None


def recover(
    primary: Callable[[], Configuration],
    fallback: Callable[[ApplicationError], Configuration],
    errors: Tuple[Type[ApplicationError], ...] = (ApplicationError,),
) -> Configuration:
    """Return `primary()`, or `fallback(error)` if it raised one of `errors`"""
    try:
        return primary()
    except errors as error:
        return fallback(error)


class DefaultResolutionService(BaseService):
    """
    Resolve the process configuration from the environment, in order:

    1. `KUBECONF_URL`: use the proxy at that URL.
    2. `KUBECONF_CONFIG`: `file` parses `~/.kube/config`, `proxy` uses the local proxy default,
       any other value is a `file:` URL of the kubeconfig to parse.
    3. `KUBECONFIG`: parse the file at that path.
    4. In-cluster service account, falling back to `~/.kube/config` if unavailable.

    Failures propagate, except for the in-cluster attempt which only triggers the fallback.
    """

    _parser: KubeconfigParserService
    _in_cluster_attempt: ProviderOf[InClusterAttempt]
    _local_proxy_default: ProviderOf[LocalProxyDefault]

    @inject
    def __init__(
        self,
        config: Config,
        logger: Logger,
        parser: KubeconfigParserService,
        in_cluster_attempt: ProviderOf[InClusterAttempt],
        local_proxy_default: ProviderOf[LocalProxyDefault],
    ):
        super().__init__(config, logger)
        self._parser = parser
        self._in_cluster_attempt = in_cluster_attempt
        self._local_proxy_default = local_proxy_default

    @property
    def resolvers(self) -> list[Resolver]:
        return [self._from_proxy_url, self._from_config_mode, self._from_kubeconfig_env, self._from_in_cluster]

    def resolve(self) -> Configuration:
        configuration = first_resolved(self.resolvers)
        assert configuration is not None, "the in-cluster resolver always produces a configuration"
        return configuration

    def _from_proxy_url(self) -> Optional[Configuration]:
        url = self.optional_option(Option.KUBECONF_URL)
        if not url:
            return None
        self.logger.info(f"Using proxy at {url} ({Option.KUBECONF_URL.env_var()})")
        return Configuration.use_proxy_at(url)

    def _from_config_mode(self) -> Optional[Configuration]:
        mode = self.optional_option(Option.KUBECONF_CONFIG)
        if not mode:
            return None
        if mode == _MODE_FILE:
            self.logger.info("Using default kubeconfig file")
            return self._parser.parse_file()
        if mode == _MODE_PROXY:
            self.logger.info("Using local proxy default configuration")
            return self._local_proxy_default.get().configuration
        path = file_url_to_path(mode)
        self.logger.info(f"Using kubeconfig file {path} ({Option.KUBECONF_CONFIG.env_var()})")
        return self._parser.parse_file(path)

    def _from_kubeconfig_env(self) -> Optional[Configuration]:
        path = self.optional_option(Option.KUBECONFIG_PATH)
        if not path:
            return None
        self.logger.info(f"Using kubeconfig file {path} ({Option.KUBECONFIG_PATH.env_var()})")
        return self._parser.parse_file(path)

    def _from_in_cluster(self) -> Configuration:
        return recover(self._in_cluster, self._from_default_file)

    def _in_cluster(self) -> Configuration:
        configuration = self._in_cluster_attempt.get().unwrap()
        self.logger.info("Using in-cluster configuration")
        return configuration

    def _from_default_file(self, error: ApplicationError) -> Configuration:
        self.logger.debug(f"In-cluster configuration unavailable, using default kubeconfig file: {error}")
        return self._parser.parse_file()
