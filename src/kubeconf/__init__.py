"""Resolve the connection and credential configuration of a Kubernetes API client."""

from kubeconf.common.error_types import (
    ApplicationError,
    ConfigFileNotFoundError,
    DateParseError,
    FileReadError,
    MalformedDocumentError,
    MissingEnvironmentVariableError,
    MissingRequiredFieldError,
    UnresolvableReferenceError,
    ValidationError,
)
from kubeconf.dependencies import (
    default_configuration,
    in_cluster_configuration,
    local_proxy_default_configuration,
    parse_kubeconfig_file,
)
from kubeconf.entities.auth_info import AuthInfo, BasicAuth, CertAuth, GcpAuth, NoAuth, OidcAuth, TokenAuth
from kubeconf.entities.configuration import DEFAULT_NAMESPACE, Cluster, Configuration, Context
from kubeconf.entities.mappers import map_to_client_configuration
from kubeconf.entities.path_or_data import PathOrData, PathRef, RawData

__all__ = [
    "ApplicationError",
    "AuthInfo",
    "BasicAuth",
    "CertAuth",
    "Cluster",
    "ConfigFileNotFoundError",
    "Configuration",
    "Context",
    "DEFAULT_NAMESPACE",
    "DateParseError",
    "FileReadError",
    "GcpAuth",
    "MalformedDocumentError",
    "MissingEnvironmentVariableError",
    "MissingRequiredFieldError",
    "NoAuth",
    "OidcAuth",
    "PathOrData",
    "PathRef",
    "RawData",
    "TokenAuth",
    "UnresolvableReferenceError",
    "ValidationError",
    "default_configuration",
    "in_cluster_configuration",
    "local_proxy_default_configuration",
    "map_to_client_configuration",
    "parse_kubeconfig_file",
]
