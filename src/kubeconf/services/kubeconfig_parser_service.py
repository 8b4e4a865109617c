from logging import Logger
from pathlib import Path
from typing import IO, Any, Callable, Dict, Final, Optional, TypeVar, Union

import pydantic
import yaml
from injector import inject

from kubeconf.common.config import Config
from kubeconf.common.error_types import MalformedDocumentError, UnresolvableReferenceError
from kubeconf.entities.auth_info import AuthInfo, NoAuth
from kubeconf.entities.configuration import DEFAULT_NAMESPACE, Cluster, Configuration, Context
from kubeconf.services.credential_resolver import resolve_auth_info, resolve_path_or_data
from kubeconf.utilities import dictionary_utilities as d
from kubeconf.utilities.file_utilities import StrPath, read_text_file

from .base_service import BaseService

_DEFAULT_SERVER: Final = "http://localhost:8001"

T = TypeVar("T")


def default_kubeconfig_path() -> Path:
    """`~/.kube/config`"""
    return Path.home() / ".kube" / "config"


class KubeconfigParserService(BaseService):
    """
    Parse kubeconfig documents into a `Configuration`.

    See https://kubernetes.io/docs/concepts/configuration/organize-cluster-access-kubeconfig/
    for the format. Merging several kubeconfig files is not supported.
    """

    @inject
    def __init__(self, config: Config, logger: Logger):
        super().__init__(config, logger)

    def parse_file(self, path: Optional[StrPath] = None) -> Configuration:
        """Parse the kubeconfig file at `path` (default: `~/.kube/config`).
        Relative credential paths are resolved against the file's directory."""
        kubeconfig_path = Path(path) if path is not None else default_kubeconfig_path()
        self.logger.debug(f"Reading kubeconfig file '{kubeconfig_path}'")
        content = read_text_file(kubeconfig_path, "kubeconfig file")
        return self.parse_stream(content, kubeconfig_dir=kubeconfig_path.parent)

    def parse_stream(self, stream: Union[str, bytes, IO], kubeconfig_dir: Optional[StrPath] = None) -> Configuration:
        try:
            document = yaml.safe_load(stream)
        except yaml.YAMLError as exc:
            raise MalformedDocumentError(reason=f"invalid YAML: {exc}") from exc
        return self.parse_dict({} if document is None else document, kubeconfig_dir=kubeconfig_dir)

    def parse_dict(self, document: Any, kubeconfig_dir: Optional[StrPath] = None) -> Configuration:
        """Build a `Configuration` from an already loaded kubeconfig document"""
        main_config = d.as_map(document, "the kubeconfig document")

        try:
            clusters = self._named_entries(main_config, "cluster", self._to_cluster(kubeconfig_dir))
            users = self._named_entries(main_config, "user", self._to_auth_info(kubeconfig_dir))
            contexts = self._named_entries(main_config, "context", self._to_context(clusters, users))
        except pydantic.ValidationError as exc:
            raise MalformedDocumentError(reason=str(exc)) from exc

        current_context_name = d.optional_str_at(main_config, "current-context", "the kubeconfig document")
        if current_context_name and current_context_name in contexts:
            current_context = contexts[current_context_name]
        else:
            if current_context_name:
                self.logger.debug(f"Current context '{current_context_name}' is not defined, using defaults")
            current_context = Context()

        return Configuration(clusters=clusters, contexts=contexts, current_context=current_context, users=users)

    @staticmethod
    def _named_entries(main_config: Dict[str, Any], kind: str, decode: Callable[[Dict[str, Any], str], T]) -> Dict[str, T]:
        """Decode the top-level list `<kind>s` of `{name, <kind>: {...}}` entries into a name mapping"""
        entries = d.optional_value_at(main_config, f"{kind}s") or []
        if not isinstance(entries, list):
            raise MalformedDocumentError(reason=f"expected '{kind}s' to be a list, got {type(entries).__name__}")

        result: Dict[str, T] = {}
        for index, entry in enumerate(entries):
            entry_block = f"{kind}s[{index}]"
            entry = d.as_map(entry, entry_block)
            name = d.str_at(entry, "name", entry_block)
            block = f"{kind} '{name}'"
            result[name] = decode(d.map_at(entry, kind, block), block)
        return result

    @staticmethod
    def _to_cluster(kubeconfig_dir: Optional[StrPath]) -> Callable[[Dict[str, Any], str], Cluster]:
        def decode(cluster: Dict[str, Any], block: str) -> Cluster:
            return Cluster(
                api_version=d.as_type(d.value_at(cluster, "api-version", block, "v1"), str, "api-version", block),
                server=d.as_type(d.value_at(cluster, "server", block, _DEFAULT_SERVER), str, "server", block),
                insecure_skip_tls_verify=d.as_type(
                    d.value_at(cluster, "insecure-skip-tls-verify", block, False), bool, "insecure-skip-tls-verify", block
                ),
                certificate_authority=resolve_path_or_data(
                    cluster, "certificate-authority", "certificate-authority-data", block, kubeconfig_dir
                ),
            )

        return decode

    def _to_auth_info(self, kubeconfig_dir: Optional[StrPath]) -> Callable[[Dict[str, Any], str], AuthInfo]:
        def decode(user: Dict[str, Any], block: str) -> AuthInfo:
            return resolve_auth_info(user, block, self.logger, kubeconfig_dir)

        return decode

    @staticmethod
    def _to_context(
        clusters: Dict[str, Cluster], users: Dict[str, AuthInfo]
    ) -> Callable[[Dict[str, Any], str], Context]:
        def decode(context: Dict[str, Any], block: str) -> Context:
            # An empty string means "not set" for these two references only
            cluster_name = d.optional_str_at(context, "cluster", block)
            if cluster_name:
                if cluster_name not in clusters:
                    raise UnresolvableReferenceError(kind="cluster", name=cluster_name)
                cluster = clusters[cluster_name]
            else:
                cluster = Cluster()

            user_name = d.optional_str_at(context, "user", block)
            if user_name:
                if user_name not in users:
                    raise UnresolvableReferenceError(kind="user", name=user_name)
                auth_info = users[user_name]
            else:
                auth_info = NoAuth()

            namespace = d.as_type(d.value_at(context, "namespace", block, DEFAULT_NAMESPACE), str, "namespace", block)
            return Context(cluster=cluster, auth_info=auth_info, namespace=namespace)

        return decode
