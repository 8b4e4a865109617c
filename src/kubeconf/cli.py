"""Command line entry point: print the configuration this process would use."""

import argparse
import sys
from typing import Optional, Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from kubeconf.common.error_types import ApplicationError
from kubeconf.dependencies import default_configuration, in_cluster_configuration, parse_kubeconfig_file
from kubeconf.entities.auth_info import AuthInfo, BasicAuth, CertAuth, GcpAuth, NoAuth, OidcAuth, TokenAuth
from kubeconf.entities.configuration import Configuration
from kubeconf.entities.path_or_data import PathOrData, PathRef, RawData


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kubeconf", description="Resolve the Kubernetes API connection and credentials for this process."
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--kubeconfig", metavar="PATH", help="parse this kubeconfig file")
    source.add_argument("--in-cluster", action="store_true", help="use the pod service account only")
    parser.add_argument("--context", metavar="NAME", help="select a named context of the configuration")
    return parser


def describe_material(material: Optional[PathOrData]) -> str:
    match material:
        case None:
            return "-"
        case PathRef(path=path):
            return path
        case RawData(data=data):
            return f"<inline, {len(data)} bytes>"
        case _:
            raise TypeError(f"Unexpected credential material {material!r}")


def describe_auth_info(auth_info: AuthInfo) -> str:
    """Human readable credentials, secrets masked"""
    match auth_info:
        case NoAuth():
            return "none"
        case BasicAuth(username=username):
            return f"basic (user {username})"
        case TokenAuth():
            return "token"
        case CertAuth(client_certificate=certificate, client_key=key, user=user):
            owner = f"user {user}, " if user else ""
            return f"client certificate ({owner}cert {describe_material(certificate)}, key {describe_material(key)})"
        case OidcAuth():
            return "oidc"
        case GcpAuth(expiry=expiry, cmd_path=cmd_path):
            return f"gcp (cmd {cmd_path}, expiry {expiry.isoformat() if expiry else '-'})"
        case _:
            raise TypeError(f"Unexpected auth info {auth_info!r}")


def render(configuration: Configuration) -> Table:
    context = configuration.current_context
    table = Table(title="Current context", show_header=False)
    table.add_column("property", style="bold")
    table.add_column("value")
    table.add_row("server", context.cluster.server)
    table.add_row("api version", context.cluster.api_version)
    table.add_row("skip TLS verify", str(context.cluster.insecure_skip_tls_verify))
    table.add_row("certificate authority", describe_material(context.cluster.certificate_authority))
    table.add_row("auth", describe_auth_info(context.auth_info))
    table.add_row("namespace", context.namespace)
    table.add_row("contexts", ", ".join(sorted(configuration.contexts)) or "-")
    return table


def resolve(args: argparse.Namespace) -> Configuration:
    if args.kubeconfig:
        configuration = parse_kubeconfig_file(args.kubeconfig)
    elif args.in_cluster:
        configuration = in_cluster_configuration()
    else:
        configuration = default_configuration()
    if args.context:
        configuration = configuration.use_context_named(args.context)
    return configuration


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    console = Console()
    try:
        configuration = resolve(args)
    except ApplicationError as error:
        Console(stderr=True).print(f"[red]Error: {escape(error.message)}[/red]")
        return 1
    console.print(render(configuration))
    return 0


if __name__ == "__main__":
    sys.exit(main())
