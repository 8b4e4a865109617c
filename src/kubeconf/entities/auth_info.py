"""
Authentication variants of a kubeconfig user entry.

Exactly one variant applies to a user; `kind` discriminates them.
"""

from datetime import datetime
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from kubeconf.entities.path_or_data import PathOrData


class NoAuth(BaseModel):
    kind: Literal["none"] = "none"

    model_config = ConfigDict(frozen=True)


class BasicAuth(BaseModel):
    kind: Literal["basic"] = "basic"
    username: str
    password: str = Field(repr=False)

    model_config = ConfigDict(frozen=True)


class TokenAuth(BaseModel):
    kind: Literal["token"] = "token"
    token: str = Field(repr=False)

    model_config = ConfigDict(frozen=True)


class CertAuth(BaseModel):
    kind: Literal["cert"] = "cert"
    client_certificate: PathOrData
    client_key: PathOrData
    user: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class OidcAuth(BaseModel):
    kind: Literal["oidc"] = "oidc"
    id_token: str = Field(repr=False)

    model_config = ConfigDict(frozen=True)


class GcpAuth(BaseModel):
    """GCP auth-provider settings. `expiry` is carried as is, tokens are never refreshed."""

    kind: Literal["gcp"] = "gcp"
    access_token: Optional[str] = Field(default=None, repr=False)
    expiry: Optional[datetime] = None
    cmd_path: str
    cmd_args: str

    model_config = ConfigDict(frozen=True)


AuthProviderAuth = Union[OidcAuth, GcpAuth]

AuthInfo = Annotated[
    Union[NoAuth, BasicAuth, TokenAuth, CertAuth, OidcAuth, GcpAuth],
    Field(discriminator="kind"),
]
