"""Data classes for the netcup CCP JSON envelope and DNS records."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

TXT = "TXT"


class ResponseStatus(StrEnum):
    """Value of the envelope's ``status`` field."""

    ERROR = "error"
    STARTED = "started"
    PENDING = "pending"
    WARNING = "warning"
    SUCCESS = "success"


def optional_str(data: dict, key: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"'{key}' must be a string or null, got {type(value).__name__}")
    return value


def required_str(data: dict, key: str) -> str:
    if key not in data:
        raise ValueError(f"missing field '{key}'")
    value = data[key]
    if not isinstance(value, str):
        raise ValueError(f"'{key}' must be a string, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class DNSRecord:
    """A DNS record as exchanged with ``infoDnsRecords`` / ``updateDnsRecords``."""

    hostname: str
    record_type: str
    destination: str
    id: str | None = None
    priority: str | None = None
    deleterecord: bool | None = None
    state: str | None = None

    @property
    def identity(self) -> tuple[str, str, str]:
        """(hostname, record_type, destination), used to match records without an id."""
        return (self.hostname, self.record_type, self.destination)

    def to_dict(self) -> dict:
        """Wire representation. Unset optional fields are left out."""
        data: dict = {}
        if self.id is not None:
            data["id"] = self.id
        data["hostname"] = self.hostname
        data["type"] = self.record_type
        if self.priority is not None:
            data["priority"] = self.priority
        data["destination"] = self.destination
        if self.deleterecord is not None:
            data["deleterecord"] = self.deleterecord
        if self.state is not None:
            data["state"] = self.state
        return data

    @classmethod
    def from_dict(cls, data: dict) -> DNSRecord:
        if not isinstance(data, dict):
            raise ValueError(f"record must be an object, got {type(data).__name__}")
        deleterecord = data.get("deleterecord")
        if deleterecord is not None and not isinstance(deleterecord, bool):
            raise ValueError("'deleterecord' must be a boolean or null")
        return cls(
            id=optional_str(data, "id"),
            hostname=required_str(data, "hostname"),
            record_type=required_str(data, "type"),
            priority=optional_str(data, "priority"),
            destination=required_str(data, "destination"),
            deleterecord=deleterecord,
            state=optional_str(data, "state"),
        )


@dataclass(frozen=True)
class RecordsPayload:
    """``responsedata`` holding ``{"dnsrecords": [...]}``."""

    records: tuple[DNSRecord, ...]


@dataclass(frozen=True)
class SessionIdPayload:
    """``responsedata`` holding ``{"apisessionid": "..."}``."""

    session_id: str = field(repr=False)


@dataclass(frozen=True)
class UnknownPayload:
    """Any ``responsedata`` shape not recognised by this client."""

    raw: object


ResponsePayload = RecordsPayload | SessionIdPayload | UnknownPayload


@dataclass(frozen=True)
class ResponseEnvelope:
    """Response wrapper returned by the endpoint for every action.

    ``status`` and ``response_data`` are independent: a successful status does
    not imply a payload of the shape the caller expects.
    """

    server_request_id: str
    action: str
    status: ResponseStatus
    status_code: int
    short_message: str
    client_request_id: str | None = None
    long_message: str | None = None
    response_data: ResponsePayload | None = None

    @property
    def ok(self) -> bool:
        return self.status is ResponseStatus.SUCCESS

    @property
    def records(self) -> tuple[DNSRecord, ...] | None:
        if isinstance(self.response_data, RecordsPayload):
            return self.response_data.records
        return None

    def describe(self) -> str:
        """Short human-readable summary for error messages."""
        text = f"{self.action} returned {self.status} ({self.status_code}): {self.short_message}"
        if self.long_message:
            text = f"{text} - {self.long_message}"
        return text


@dataclass(frozen=True)
class Session:
    """Authenticated handle issued by ``login``. The API password is not kept."""

    session_id: str = field(repr=False)
    customer_number: str
    api_key: str = field(repr=False)

    def auth_params(self) -> dict:
        return {
            "apikey": self.api_key,
            "apisessionid": self.session_id,
            "customernumber": self.customer_number,
        }
