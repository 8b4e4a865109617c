from types import MappingProxyType
from typing import Final, Mapping, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

from kubeconf.common.error_types import UnresolvableReferenceError
from kubeconf.entities.auth_info import AuthInfo, NoAuth
from kubeconf.entities.path_or_data import PathOrData

DEFAULT_NAMESPACE: Final = "default"
DEFAULT_NAME: Final = "default"

V = TypeVar("V")


def _read_only(entries: Mapping[str, V]) -> Mapping[str, V]:
    return MappingProxyType(dict(entries))


class Cluster(BaseModel):
    api_version: str = "v1"
    server: str = "localhost:6443"
    insecure_skip_tls_verify: bool = False
    certificate_authority: Optional[PathOrData] = None

    model_config = ConfigDict(frozen=True)


class Context(BaseModel):
    """A fully resolved context: cluster and credentials are embedded values, not names."""

    cluster: Cluster = Field(default_factory=Cluster)
    auth_info: AuthInfo = Field(default_factory=NoAuth)
    namespace: str = DEFAULT_NAMESPACE

    model_config = ConfigDict(frozen=True)


class Configuration(BaseModel):
    """
    Named clusters, contexts and users plus the selected context.

    `current_context` is a copy taken when the configuration was built; it does not
    need to appear in `contexts`. Every mutator returns a new Configuration, and the named
    entries are read-only mappings.
    """

    clusters: Mapping[str, Cluster] = Field(default_factory=dict)
    contexts: Mapping[str, Context] = Field(default_factory=dict)
    current_context: Context = Field(default_factory=Context)
    users: Mapping[str, AuthInfo] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True, validate_default=True)

    @field_validator("clusters", "contexts", "users", mode="after")
    @classmethod
    def _freeze_entries(cls, entries: Mapping) -> Mapping:
        return _read_only(entries)

    @property
    def current_namespace(self) -> str:
        return self.current_context.namespace

    def with_cluster(self, name: str, cluster: Cluster) -> "Configuration":
        return self.model_copy(update={"clusters": _read_only({**self.clusters, name: cluster})})

    def with_context(self, name: str, context: Context) -> "Configuration":
        return self.model_copy(update={"contexts": _read_only({**self.contexts, name: context})})

    def use_context(self, context: Context) -> "Configuration":
        return self.model_copy(update={"current_context": context})

    def use_context_named(self, name: str) -> "Configuration":
        """Select one of the named contexts, like `kubectl --context`"""
        if name not in self.contexts:
            raise UnresolvableReferenceError(kind="context", name=name)
        return self.use_context(self.contexts[name])

    def set_current_namespace(self, namespace: str) -> "Configuration":
        return self.use_context(self.current_context.model_copy(update={"namespace": namespace}))

    # region Construction helpers
    @classmethod
    def for_single_cluster(cls, cluster: Cluster, context: Optional[Context] = None) -> "Configuration":
        """Build a configuration holding one cluster/context pair, both named "default" """
        if context is None:
            context = Context(cluster=cluster)
        return cls(
            clusters={DEFAULT_NAME: cluster},
            contexts={DEFAULT_NAME: context},
            current_context=context,
        )

    @classmethod
    def use_local_proxy_default(cls) -> "Configuration":
        """Default cluster, for use with a local proxy such as `kubectl proxy`"""
        return cls.for_single_cluster(Cluster())

    @classmethod
    def use_local_proxy_on_port(cls, port: int) -> "Configuration":
        return cls.for_single_cluster(Cluster(server=f"http://localhost:{port}"))

    @classmethod
    def use_proxy_at(cls, proxy_address: str) -> "Configuration":
        return cls.for_single_cluster(Cluster(server=proxy_address))

    # endregion / Construction helpers
