"""Shared test fixtures for netcup-acme-auth."""

import json

import httpx
import pytest

from netcup_acme_auth.client import NetcupClient


def make_envelope(action, status="success", responsedata=None, statuscode=2000, shortmessage="ok"):
    """Build a response envelope dict in netcup's wire format."""
    return {
        "serverrequestid": "srv-1",
        "clientrequestid": "",
        "action": action,
        "status": status,
        "statuscode": statuscode,
        "shortmessage": shortmessage,
        "longmessage": "",
        "responsedata": responsedata,
    }


def make_record(hostname, destination, record_type="TXT", id="1", **extra):
    record = {
        "id": id,
        "hostname": hostname,
        "type": record_type,
        "priority": "0",
        "destination": destination,
        "deleterecord": False,
        "state": "yes",
    }
    record.update(extra)
    return record


class FakeNetcup:
    """In-memory stand-in for the CCP endpoint.

    Keeps a record list per domain and answers login, logout,
    infoDnsRecords and updateDnsRecords. ``overrides`` maps an action to a
    fixed response body (dict) returned instead of the simulated one.
    """

    def __init__(self):
        self.records = {}
        self.requests = []
        self.overrides = {}
        self.session_id = "session-abc"
        self._next_id = 100

    def actions(self):
        return [r["action"] for r in self.requests]

    def handler(self, request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/run/webservice/servers/endpoint.php"
        body = json.loads(request.content)
        self.requests.append(body)
        action = body["action"]
        if action in self.overrides:
            return httpx.Response(200, json=self.overrides[action])
        return httpx.Response(200, json=getattr(self, f"_{action}")(body["param"]))

    def _login(self, param):
        return make_envelope("login", responsedata={"apisessionid": self.session_id})

    def _logout(self, param):
        return make_envelope("logout", responsedata="")

    def _infoDnsRecords(self, param):
        records = self.records.get(param["domainname"], [])
        return make_envelope("infoDnsRecords", responsedata={"dnsrecords": list(records)})

    def _updateDnsRecords(self, param):
        records = self.records.setdefault(param["domainname"], [])
        for record in param["dnsrecordset"]["dnsrecords"]:
            if record.get("deleterecord"):
                records[:] = [r for r in records if r["id"] != record["id"]]
            else:
                self._next_id += 1
                records.append(make_record(record["hostname"], record["destination"], id=str(self._next_id)))
        return make_envelope("updateDnsRecords", responsedata={"dnsrecords": list(records)})


@pytest.fixture
def fake_netcup():
    return FakeNetcup()


@pytest.fixture
def client(fake_netcup):
    http_client = httpx.Client(transport=httpx.MockTransport(fake_netcup.handler))
    with NetcupClient(_http_client=http_client) as c:
        yield c


@pytest.fixture
def logged_in(client):
    client.login("12345", "api-pw", "api-key")
    return client
