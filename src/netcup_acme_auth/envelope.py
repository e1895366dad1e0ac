"""Request/response envelope codec for the netcup CCP JSON endpoint.

Every action is a single JSON object ``{"action": ..., "param": {...}}`` and
every answer is a response envelope whose ``responsedata`` field is loosely
tagged: netcup returns ``{"dnsrecords": [...]}`` for record actions,
``{"apisessionid": "..."}`` for login and an empty string (or something else
entirely) on failures. The payload variant is decided by structure alone,
never by the envelope's ``action`` or ``status``.
"""

from __future__ import annotations

import json

from netcup_acme_auth.exceptions import ProtocolError
from netcup_acme_auth.models import (
    DNSRecord,
    RecordsPayload,
    ResponseEnvelope,
    ResponsePayload,
    ResponseStatus,
    SessionIdPayload,
    UnknownPayload,
    optional_str,
    required_str,
)


def _encode(value: object) -> object:
    if isinstance(value, DNSRecord):
        return value.to_dict()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def build_request(action: str, param: dict) -> str:
    """Serialize an action and its parameters into a request body.

    ``param`` may contain ``DNSRecord`` instances at any depth, e.g. inside
    ``{"dnsrecordset": {"dnsrecords": [record]}}``.
    """
    return json.dumps({"action": action, "param": param}, default=_encode)


def parse_payload(raw: object) -> ResponsePayload | None:
    """Classify a ``responsedata`` value. Unrecognised shapes never raise."""
    if raw is None:
        return None
    if isinstance(raw, dict):
        records = raw.get("dnsrecords")
        if isinstance(records, list):
            try:
                return RecordsPayload(tuple(DNSRecord.from_dict(r) for r in records))
            except ValueError:
                return UnknownPayload(raw)
        session_id = raw.get("apisessionid")
        if isinstance(session_id, str):
            return SessionIdPayload(session_id)
    return UnknownPayload(raw)


def _status(data: dict) -> ResponseStatus:
    value = required_str(data, "status")
    try:
        return ResponseStatus(value)
    except ValueError:
        raise ValueError(f"unknown status {value!r}") from None


def _status_code(data: dict) -> int:
    if "statuscode" not in data:
        raise ValueError("missing field 'statuscode'")
    value = data["statuscode"]
    # bool is a subclass of int
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"'statuscode' must be a non-negative integer, got {value!r}")
    return value


def parse_response(body: str | bytes) -> ResponseEnvelope:
    """Deserialize a response body into a ``ResponseEnvelope``.

    Raises:
        ProtocolError: the body is not JSON, or any field other than
            ``responsedata`` is missing or of the wrong type.
    """
    try:
        data = json.loads(body)
    except (ValueError, RecursionError) as exc:
        raise ProtocolError(f"Response is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise ProtocolError(f"Response must be a JSON object, got {type(data).__name__}")

    try:
        return ResponseEnvelope(
            server_request_id=required_str(data, "serverrequestid"),
            client_request_id=optional_str(data, "clientrequestid"),
            action=required_str(data, "action"),
            status=_status(data),
            status_code=_status_code(data),
            short_message=required_str(data, "shortmessage"),
            long_message=optional_str(data, "longmessage"),
            response_data=parse_payload(data.get("responsedata")),
        )
    except ValueError as exc:
        raise ProtocolError(f"Malformed response envelope: {exc}") from exc
