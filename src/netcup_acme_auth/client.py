"""netcup CCP API client: session lifecycle and DNS record operations."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Self

import httpx

from netcup_acme_auth import envelope
from netcup_acme_auth.exceptions import (
    AuthError,
    MissingIdError,
    NetcupError,
    NotFoundError,
    ProtocolError,
    StatusError,
    TransportError,
    VerificationError,
)
from netcup_acme_auth.models import TXT, DNSRecord, ResponseEnvelope, Session, SessionIdPayload

logger = logging.getLogger(__name__)

NETCUP_ENDPOINT = "https://ccp.netcup.net/run/webservice/servers/endpoint.php?JSON"
DEFAULT_TIMEOUT = 30.0


class SessionState(Enum):
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED = "authenticated"
    TERMINATED = "terminated"


class NetcupClient:
    """Client for the netcup CCP JSON API.

    A client is single-use: it logs in once, performs record operations and
    logs out once. Use it as a context manager so the logout also happens when
    the caller exits early or raises::

        with NetcupClient() as client:
            client.login(customer_number, api_password, api_key)
            client.add_txt_record("example.com", "_acme-challenge", token)

    Not safe for concurrent use; issue one call at a time.
    """

    def __init__(
        self,
        endpoint: str = NETCUP_ENDPOINT,
        timeout: float = DEFAULT_TIMEOUT,
        _http_client: httpx.Client | None = None,
    ) -> None:
        self._endpoint = endpoint
        self._client = _http_client or httpx.Client(
            headers={"Content-Type": "application/json"},
            timeout=timeout,
        )
        self._session: Session | None = None
        self._state = SessionState.UNAUTHENTICATED

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def session(self) -> Session | None:
        return self._session

    def _call(self, action: str, param: dict) -> ResponseEnvelope:
        """Send one request envelope and parse the response envelope."""
        body = envelope.build_request(action, param)
        logger.debug("POST %s action=%s", self._endpoint, action)
        try:
            resp = self._client.post(self._endpoint, content=body)
            resp.raise_for_status()
        except httpx.HTTPError as exc:
            raise TransportError(f"{action} request failed: {exc}") from exc
        return envelope.parse_response(resp.content)

    def _require_session(self) -> Session:
        if self._state is SessionState.TERMINATED:
            raise AuthError("Session has been logged out")
        if self._session is None:
            raise AuthError("Not logged in")
        return self._session

    def login(self, customer_number: str, api_password: str, api_key: str) -> Session:
        """Authenticate and store the session token on this client.

        The response must carry an ``apisessionid`` payload; anything else is
        an ``AuthError`` even when the envelope reports success.
        """
        if self._state is not SessionState.UNAUTHENTICATED:
            raise AuthError(f"Cannot log in from state '{self._state.value}'")

        response = self._call(
            "login",
            {
                "apikey": api_key,
                "apipassword": api_password,
                "customernumber": customer_number,
            },
        )
        if not isinstance(response.response_data, SessionIdPayload):
            raise AuthError(f"Could not log in: {response.describe()}")

        self._session = Session(
            session_id=response.response_data.session_id,
            customer_number=customer_number,
            api_key=api_key,
        )
        self._state = SessionState.AUTHENTICATED
        return self._session

    def logout(self) -> bool:
        """Invalidate the session token. Best effort, never raises.

        Returns True if the server confirmed the logout. The client is
        terminated whatever the outcome, so a second call sends nothing.
        """
        if self._state is not SessionState.AUTHENTICATED:
            return False

        session = self._session
        self._session = None
        self._state = SessionState.TERMINATED
        try:
            response = self._call("logout", session.auth_params())
        except NetcupError as exc:
            logger.warning("Logout failed: %s", exc)
            return False
        if not response.ok:
            logger.warning("Logout failed: %s", response.describe())
            return False
        return True

    def close(self) -> None:
        """Log out if a session is still live, then close the HTTP client."""
        try:
            self.logout()
        finally:
            self._client.close()

    def list_records(self, domain: str) -> list[DNSRecord]:
        """Return all records of ``domain`` in server order."""
        session = self._require_session()
        response = self._call("infoDnsRecords", {**session.auth_params(), "domainname": domain})
        records = response.records
        if records is None:
            raise ProtocolError(f"No records were returned for '{domain}': {response.describe()}")
        return list(records)

    def find_txt_record_id(self, domain: str, hostname: str, content: str) -> str:
        """Return the id of the first TXT record matching ``hostname`` and ``content``."""
        wanted = (hostname, TXT, content)
        for record in self.list_records(domain):
            if record.identity == wanted:
                if record.id is None:
                    raise MissingIdError(f"TXT record {hostname} in '{domain}' has no id")
                return record.id
        raise NotFoundError(f"No TXT record {hostname} with the given content in '{domain}'")

    def _update_records(self, domain: str, record: DNSRecord) -> ResponseEnvelope:
        session = self._require_session()
        return self._call(
            "updateDnsRecords",
            {
                **session.auth_params(),
                "domainname": domain,
                "dnsrecordset": {"dnsrecords": [record]},
            },
        )

    def add_txt_record(self, domain: str, hostname: str, content: str) -> None:
        """Create a TXT record and check it appears in the echoed record set."""
        record = DNSRecord(hostname=hostname, record_type=TXT, destination=content)
        response = self._update_records(domain, record)
        records = response.records
        if records is None:
            raise ProtocolError(f"Could not update records of '{domain}': {response.describe()}")
        if not any(r.identity == record.identity for r in records):
            raise VerificationError(f"Created TXT record {hostname} not found in '{domain}'")

    def delete_record(self, id: str, domain: str, hostname: str, content: str) -> None:
        """Delete a TXT record by id.

        Only the envelope status is checked; the echoed record set is not
        inspected, unlike ``add_txt_record``.
        """
        record = DNSRecord(
            id=id,
            hostname=hostname,
            record_type=TXT,
            destination=content,
            deleterecord=True,
        )
        response = self._update_records(domain, record)
        if not response.ok:
            raise StatusError(f"Could not delete record {id}: {response.describe()}", response.status)
