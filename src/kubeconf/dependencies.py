"""
Configure Dependency Injection
"""

import logging
from typing import Optional

from injector import Injector, Module, provider, singleton

from kubeconf.common.config import Config
from kubeconf.common.error_types import ApplicationError
from kubeconf.common.logger_manager import LoggerManager
from kubeconf.entities.configuration import Configuration
from kubeconf.entities.process_configurations import InClusterAttempt, LocalProxyDefault
from kubeconf.services.default_resolution_service import DefaultResolutionService
from kubeconf.services.in_cluster_resolver_service import InClusterResolverService
from kubeconf.services.kubeconfig_parser_service import KubeconfigParserService
from kubeconf.utilities.file_utilities import StrPath


# region Configure Injector Module
class InjectorModule(Module):
    """Configure Injector bindings, i.e. how dependencies are provided.

    Note: bindings provide instances when invoking `Injector.get(MyClass)`.
    Bindings are required to provide instances within a given scope (e.g. singleton).
    If no binding is defined for `MyClass` then a fresh new instance is created
    (resolving constructor injected dependencies) and returned.

    Singleton providers run at most once per injector, under the scope's lock,
    so concurrent first access computes a single instance.

    See https://github.com/python-injector/injector/blob/master/docs/terminology.rst.
    """

    def configure(self, binder):
        binder.bind(Config, to=Config(), scope=singleton)

    @singleton
    @provider
    def provide_logger(self, config: Config) -> logging.Logger:
        return LoggerManager(config).logger

    @singleton
    @provider
    def provide_local_proxy_default(self) -> LocalProxyDefault:
        return LocalProxyDefault(configuration=Configuration.use_local_proxy_default())

    @singleton
    @provider
    def provide_in_cluster_attempt(
        self, logger: logging.Logger, in_cluster_resolver: InClusterResolverService
    ) -> InClusterAttempt:
        # Failures are cached too: the attempt is made once per process
        try:
            return InClusterAttempt(configuration=in_cluster_resolver.resolve())
        except ApplicationError as error:
            logger.debug(f"In-cluster configuration unavailable: {error}")
            return InClusterAttempt(error=error)


_injector = Injector([InjectorModule()])
# endregion / Configure Injector Module


# region Public Injector instances
def get_config() -> Config:
    return _injector.get(Config)


def get_logger() -> logging.Logger:
    return _injector.get(logging.Logger)


def get_kubeconfig_parser_service() -> KubeconfigParserService:
    return _injector.get(KubeconfigParserService)


def get_default_resolution_service() -> DefaultResolutionService:
    return _injector.get(DefaultResolutionService)


def get_in_cluster_attempt() -> InClusterAttempt:
    return _injector.get(InClusterAttempt)


# endregion / Public Injector instances


# region Entry points
def default_configuration() -> Configuration:
    """The configuration of this process, see `DefaultResolutionService`"""
    return get_default_resolution_service().resolve()


def in_cluster_configuration() -> Configuration:
    """The in-cluster configuration, raise the cached error if it is unavailable"""
    return get_in_cluster_attempt().unwrap()


def local_proxy_default_configuration() -> Configuration:
    return _injector.get(LocalProxyDefault).configuration


def parse_kubeconfig_file(path: Optional[StrPath] = None) -> Configuration:
    return get_kubeconfig_parser_service().parse_file(path)


# endregion / Entry points
