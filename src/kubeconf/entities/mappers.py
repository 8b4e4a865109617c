import atexit
import hashlib
import os
import tempfile
import threading
from typing import Dict, Optional

from kubernetes.client.configuration import Configuration as KClientConfiguration
from urllib3.util import make_headers

from kubeconf.entities.auth_info import AuthInfo, BasicAuth, CertAuth, GcpAuth, NoAuth, OidcAuth, TokenAuth
from kubeconf.entities.configuration import Configuration
from kubeconf.entities.path_or_data import PathOrData, PathRef, RawData

_TEMP_FILES: Dict[str, str] = {}
_TEMP_FILES_LOCK = threading.Lock()


def _cleanup_temp_files() -> None:
    for path in _TEMP_FILES.values():
        try:
            os.remove(path)
        except OSError:
            pass
    _TEMP_FILES.clear()


atexit.register(_cleanup_temp_files)


def path_of(material: Optional[PathOrData]) -> Optional[str]:
    """File path for the given credential material.
    Inline data is written once to a private temporary file, removed at exit."""
    match material:
        case None:
            return None
        case PathRef(path=path):
            return path
        case RawData(data=data):
            digest = hashlib.sha256(data).hexdigest()
            with _TEMP_FILES_LOCK:
                if digest not in _TEMP_FILES:
                    fd, path = tempfile.mkstemp(prefix="kubeconf-")
                    with os.fdopen(fd, "wb") as fp:
                        fp.write(data)
                    _TEMP_FILES[digest] = path
                return _TEMP_FILES[digest]
        case _:
            raise TypeError(f"Unexpected credential material {material!r}")


def _clear_auth_info(client_configuration: KClientConfiguration) -> None:
    client_configuration.api_key.pop("authorization", None)
    client_configuration.username = None
    client_configuration.password = None
    client_configuration.cert_file = None
    client_configuration.key_file = None


def _apply_auth_info(client_configuration: KClientConfiguration, auth_info: AuthInfo) -> None:
    match auth_info:
        case NoAuth():
            pass
        case BasicAuth(username=username, password=password):
            client_configuration.username = username
            client_configuration.password = password
            client_configuration.api_key["authorization"] = make_headers(
                basic_auth=f"{username}:{password}"
            ).get("authorization")
        case TokenAuth(token=token) | OidcAuth(id_token=token):
            client_configuration.api_key["authorization"] = f"Bearer {token.strip()}"
        case GcpAuth(access_token=access_token):
            if access_token:
                client_configuration.api_key["authorization"] = f"Bearer {access_token}"
        case CertAuth(client_certificate=client_certificate, client_key=client_key):
            client_configuration.cert_file = path_of(client_certificate)
            client_configuration.key_file = path_of(client_key)
        case _:
            raise TypeError(f"Unexpected auth info {auth_info!r}")


def map_to_client_configuration(
    configuration: Configuration, client_configuration: Optional[KClientConfiguration] = None
) -> KClientConfiguration:
    """Apply the current context of `configuration` to a Kubernetes client configuration,
    i.e. what the transport layer needs to open connections and attach credentials.
    Credentials left by a previous context are dropped first."""
    if client_configuration is None:
        client_configuration = KClientConfiguration()
    context = configuration.current_context
    cluster = context.cluster

    client_configuration.host = cluster.server
    client_configuration.verify_ssl = not cluster.insecure_skip_tls_verify
    client_configuration.ssl_ca_cert = path_of(cluster.certificate_authority)
    _clear_auth_info(client_configuration)
    _apply_auth_info(client_configuration, context.auth_info)
    return client_configuration
