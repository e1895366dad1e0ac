"""Command-line hook: publish or remove an ACME DNS-01 TXT record on netcup."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from netcup_acme_auth.client import NetcupClient
from netcup_acme_auth.config import AppConfig, load_config
from netcup_acme_auth.exceptions import NetcupError
from netcup_acme_auth.util import relative_hostname

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="netcup-acme-auth",
        description="Set or unset an ACME DNS-01 TXT record through the netcup CCP API.",
    )
    parser.add_argument("-c", "--config", type=Path, help="credentials file (default: config.json beside the executable)")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (("set", "create the TXT record"), ("unset", "delete the TXT record")):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("domain", help="domain managed in the control panel, e.g. example.com")
        sub.add_argument("hostname", help="fully qualified record name, e.g. _acme-challenge.example.com")
        sub.add_argument("content", help="TXT record value")

    return parser


def set_record(config: AppConfig, domain: str, host: str, content: str) -> None:
    creds = config.credentials
    with NetcupClient(endpoint=config.endpoint_url, timeout=config.timeout) as client:
        client.login(creds.customer_number, creds.api_password, creds.api_key)
        client.add_txt_record(domain, host, content)
        logger.info("Created TXT record %s.%s", host, domain)
        client.logout()


def unset_record(config: AppConfig, domain: str, host: str, content: str) -> None:
    creds = config.credentials
    with NetcupClient(endpoint=config.endpoint_url, timeout=config.timeout) as client:
        client.login(creds.customer_number, creds.api_password, creds.api_key)
        record_id = client.find_txt_record_id(domain, host, content)
        client.delete_record(record_id, domain, host, content)
        logger.info("Deleted TXT record %s.%s (id %s)", host, domain, record_id)
        client.logout()


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        domain = args.domain.removesuffix(".")
        host = relative_hostname(args.hostname, domain)
        config = load_config(args.config)
        if args.command == "set":
            set_record(config, domain, host, args.content)
        else:
            unset_record(config, domain, host, args.content)
    except (NetcupError, ValueError) as exc:
        logger.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
