"""Hostname helpers."""

from __future__ import annotations


def relative_hostname(hostname: str, domain: str) -> str:
    """Return the record label of ``hostname`` relative to ``domain``.

    A trailing root dot on either argument is ignored.

    Args:
        hostname: Fully qualified record name (e.g. "_acme-challenge.example.com").
        domain: Domain managed in the control panel (e.g. "example.com").

    Returns:
        The relative label (e.g. "_acme-challenge").

    Raises:
        ValueError: ``hostname`` is not strictly below ``domain``.
    """
    hostname = hostname.removesuffix(".")
    domain = domain.removesuffix(".")
    suffix = f".{domain}"
    if not domain or not hostname.endswith(suffix):
        raise ValueError(f"Hostname '{hostname}' does not belong to domain '{domain}'")
    relative = hostname.removesuffix(suffix)
    if not relative:
        raise ValueError(f"Hostname '{hostname}' has no label below domain '{domain}'")
    return relative
