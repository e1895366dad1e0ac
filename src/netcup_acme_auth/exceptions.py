"""Errors raised by the netcup API client."""

from __future__ import annotations

from netcup_acme_auth.models import ResponseStatus


class NetcupError(Exception):
    """Base class for every failure surfaced by the client."""


class TransportError(NetcupError):
    """The endpoint could not be reached or answered with an HTTP error."""


class ProtocolError(NetcupError):
    """The response is not a valid envelope, or carries the wrong payload shape."""


class AuthError(NetcupError):
    """Login failed, or an operation was attempted without a live session."""


class NotFoundError(NetcupError):
    """No record matched a lookup."""


class MissingIdError(NetcupError):
    """A matching record was returned without a server-assigned id."""


class VerificationError(NetcupError):
    """A created record is missing from the record set echoed by the server."""


class StatusError(NetcupError):
    """The envelope status was not ``success``."""

    def __init__(self, message: str, status: ResponseStatus) -> None:
        super().__init__(message)
        self.status = status
