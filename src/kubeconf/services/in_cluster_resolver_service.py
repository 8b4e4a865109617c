import os
from logging import Logger
from pathlib import Path
from typing import Final

from injector import inject

from kubeconf.common.config import Config, Option
from kubeconf.entities.auth_info import TokenAuth
from kubeconf.entities.configuration import Cluster, Configuration, Context
from kubeconf.entities.path_or_data import PathRef
from kubeconf.utilities.file_utilities import read_text_file

from .base_service import BaseService

SERVICE_ACCOUNT_DIR: Final = "/var/run/secrets/kubernetes.io/serviceaccount"
_TOKEN_FILE: Final = "token"
_NAMESPACE_FILE: Final = "namespace"
_CA_CERT_FILE: Final = "ca.crt"


class InClusterResolverService(BaseService):
    """
    Build a `Configuration` from the service account mounted into a running pod.

    Follows the official client logic, see
    https://kubernetes.io/docs/tasks/run-application/access-api-from-pod/ and
    https://github.com/kubernetes/client-go/blob/master/rest/config.go (InClusterConfig).
    """

    @inject
    def __init__(self, config: Config, logger: Logger):
        super().__init__(config, logger)

    @property
    def service_account_dir(self) -> Path:
        return Path(self.config.get(Option.KUBERNETES_SERVICE_ACCOUNT_DIR, SERVICE_ACCOUNT_DIR))

    def resolve(self) -> Configuration:
        """Raise on the first missing environment variable or unreadable service account file"""
        host = self.required_option(Option.KUBERNETES_SERVICE_HOST)
        port = self.required_option(Option.KUBERNETES_SERVICE_PORT)

        sa_dir = self.service_account_dir
        token = read_text_file(sa_dir / _TOKEN_FILE, "service account token")
        namespace = read_text_file(sa_dir / _NAMESPACE_FILE, "service account namespace")

        # Not strictly required: client-go logs the missing root CA and carries on
        ca_path = sa_dir / _CA_CERT_FILE
        certificate_authority = None
        if os.path.exists(ca_path):
            certificate_authority = PathRef(path=str(ca_path))
        else:
            self.logger.warning(f"Expected to load root CA config from {ca_path}, but the file does not exist")

        server = f"https://{host}" + (f":{port}" if port else "")
        cluster = Cluster(server=server, certificate_authority=certificate_authority)
        context = Context(cluster=cluster, auth_info=TokenAuth(token=token), namespace=namespace)
        self.logger.debug(f"Resolved in-cluster configuration for {server} in namespace '{namespace}'")
        return Configuration.for_single_cluster(cluster, context)
