"""
Decode credential material and authentication settings from kubeconfig blocks.
"""

import base64
import binascii
from datetime import datetime
from logging import Logger
from typing import Any, Dict, Optional

from kubeconf.common.error_types import DateParseError, MalformedDocumentError
from kubeconf.entities.auth_info import (
    AuthInfo,
    AuthProviderAuth,
    BasicAuth,
    CertAuth,
    GcpAuth,
    NoAuth,
    OidcAuth,
    TokenAuth,
)
from kubeconf.entities.path_or_data import PathOrData, PathRef, RawData
from kubeconf.utilities import dictionary_utilities as d
from kubeconf.utilities.datetime_utilities import as_aware, parse_rfc3339
from kubeconf.utilities.file_utilities import StrPath, resolve_relative_path


def resolve_path_or_data(
    dikt: Dict[str, Any], path_key: str, data_key: str, block: str, kubeconfig_dir: Optional[StrPath] = None
) -> Optional[PathOrData]:
    """Read credential material given either inline (`data_key`) or as a file reference (`path_key`).

    Inline data wins when both are set. Relative paths are resolved against `kubeconfig_dir` if given.
    """
    path = d.optional_str_at(dikt, path_key, block)
    data = d.optional_str_at(dikt, data_key, block)

    if data is not None:
        try:
            return RawData(data=base64.b64decode(data, validate=True))
        except binascii.Error as exc:
            raise MalformedDocumentError(reason=f"'{data_key}' in {block} is not valid base64: {exc}") from exc
    if path is not None:
        return PathRef(path=resolve_relative_path(path, kubeconfig_dir))
    return None


def resolve_auth_info(
    user: Dict[str, Any], block: str, logger: Logger, kubeconfig_dir: Optional[StrPath] = None
) -> AuthInfo:
    """Pick the single authentication variant described by a user block.

    An auth provider, when present, takes precedence over every other field.
    Otherwise: username and password, then token, then client certificate and key.
    """
    auth_provider = d.optional_map_at(user, "auth-provider", block)
    if auth_provider is not None:
        return _resolve_auth_provider(auth_provider, f"auth-provider of {block}", logger) or NoAuth()

    username = d.optional_str_at(user, "username", block)
    password = d.optional_str_at(user, "password", block)
    token = d.optional_str_at(user, "token", block)
    client_certificate = resolve_path_or_data(
        user, "client-certificate", "client-certificate-data", block, kubeconfig_dir
    )
    client_key = resolve_path_or_data(user, "client-key", "client-key-data", block, kubeconfig_dir)

    match (username, password, token, client_certificate, client_key):
        case (str(), str(), _, _, _):
            return BasicAuth(username=username, password=password)
        case (_, _, str(), _, _):
            return TokenAuth(token=token)
        case (_, _, _, PathRef() | RawData(), PathRef() | RawData()):
            return CertAuth(client_certificate=client_certificate, client_key=client_key, user=username)
        case _:
            return NoAuth()


def _resolve_auth_provider(auth_provider: Dict[str, Any], block: str, logger: Logger) -> Optional[AuthProviderAuth]:
    name = d.str_at(auth_provider, "name", block)
    config_block = f"config of {block}"

    match name.lower():
        case "oidc":
            config = d.map_at(auth_provider, "config", block)
            return OidcAuth(id_token=d.str_at(config, "id-token", config_block))
        case "gcp":
            config = d.map_at(auth_provider, "config", block)
            return GcpAuth(
                access_token=d.optional_str_at(config, "access-token", config_block),
                expiry=_optional_expiry(config, config_block, logger),
                cmd_path=d.str_at(config, "cmd-path", config_block),
                cmd_args=_cmd_args(d.value_at(config, "cmd-args", config_block)),
            )
        case _:
            logger.debug(f"Ignoring unsupported auth provider '{name}' in {block}")
            return None


def _optional_expiry(config: Dict[str, Any], block: str, logger: Logger) -> Optional[datetime]:
    value = d.optional_value_at(config, "expiry")
    if isinstance(value, datetime):
        return as_aware(value)
    if isinstance(value, str):
        try:
            return parse_rfc3339(value)
        except DateParseError as exc:
            logger.warning(f"Ignoring 'expiry' in {block}: {exc.message}")
    return None


def _cmd_args(value: Any) -> str:
    if isinstance(value, list):
        return " ".join(str(arg) for arg in value)
    return str(value)
