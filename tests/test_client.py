import base64
import json
from urllib.parse import parse_qs, urlparse

import pytest
import responses

from paxi.client import ClientError, HTTPClient
from paxi.config import Config
from paxi.ident import ID

BASES = {
    ID("1.1"): "http://127.0.0.1:8080",
    ID("1.2"): "http://127.0.0.1:8081",
    ID("2.1"): "http://127.0.0.1:8082",
}


def make_config():
    return Config(
        addrs={
            ID("1.1"): "tcp://127.0.0.1:1735",
            ID("1.2"): "tcp://127.0.0.1:1736",
            ID("2.1"): "tcp://127.0.0.1:1737",
        },
        http_addrs=dict(BASES),
    )


@pytest.fixture
def rsps():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as mock:
        yield mock


@pytest.fixture
def client():
    return HTTPClient("1.1", make_config())


def test_counts_nodes(client):
    assert client.n == 3
    assert client.local_n == 2
    assert HTTPClient("", make_config()).local_n == 0


def test_get_sends_headers(rsps, client):
    rsps.add(responses.GET, BASES[ID("1.1")] + "/5", body=b"hello")
    assert client.get(5) == b"hello"
    assert client.cid == 1
    request = rsps.calls[0].request
    assert request.method == "GET"
    assert request.headers["Id"] == "1.1"
    assert request.headers["Cid"] == "1"


def test_put_sends_body(rsps, client):
    rsps.add(responses.PUT, BASES[ID("1.1")] + "/7", body=b"")
    client.put(7, b"v")
    request = rsps.calls[0].request
    assert request.method == "PUT"
    assert request.body == b"v"
    assert client.cid == 1


def test_error_status_raises(rsps, client):
    rsps.add(responses.GET, BASES[ID("1.2")] + "/1", status=500, body=b"boom")
    with pytest.raises(ClientError) as info:
        client.rest_get("1.2", 1)
    assert info.value.status.startswith("500")


def test_metadata_holds_headers(rsps, client):
    rsps.add(responses.GET, BASES[ID("2.1")] + "/2", body=b"x", headers={"Ballot": "3.1.1"})
    value, metadata = client.rest_get("2.1", 2)
    assert value == b"x"
    assert metadata["Ballot"] == "3.1.1"


def test_get_url_random_node():
    anonymous = HTTPClient("", make_config())
    assert anonymous.get_url("", 3) in {base + "/3" for base in BASES.values()}
    assert anonymous.get_url("1.2", 3) == BASES[ID("1.2")] + "/3"


def test_get_url_unknown_node(client):
    with pytest.raises(KeyError):
        client.get_url("9.9", 1)


def test_quorum_get(rsps, client):
    for base in BASES.values():
        rsps.add(responses.GET, base + "/4", body=b"x")
    values, metas = client.quorum_get(4)
    assert len(values) == client.n // 2 + 1
    assert all(v == b"x" for v in values)
    assert len(metas) == len(values)


def test_multi_get_skips_failures(rsps, client):
    rsps.add(responses.GET, BASES[ID("1.1")] + "/1", body=b"ok")
    rsps.add(responses.GET, BASES[ID("1.2")] + "/1", status=500)
    values, _ = client.multi_get(2, 1)
    assert values == [b"ok"]


def history(*values):
    return json.dumps([base64.b64encode(v).decode() for v in values])


def test_consensus_agrees(rsps, client):
    rsps.add(responses.GET, BASES[ID("1.1")] + "/history", body=history(b"a", b"b"))
    rsps.add(responses.GET, BASES[ID("1.2")] + "/history", body=history(b"a", b"b"))
    rsps.add(responses.GET, BASES[ID("2.1")] + "/history", body=history(b"a"))
    assert client.consensus(3) is True
    assert parse_qs(urlparse(rsps.calls[0].request.url).query) == {"key": ["3"]}


def test_consensus_disagrees(rsps, client):
    rsps.add(responses.GET, BASES[ID("1.1")] + "/history", body=history(b"a", b"b"))
    rsps.add(responses.GET, BASES[ID("1.2")] + "/history", body=history(b"a", b"c"))
    rsps.add(responses.GET, BASES[ID("2.1")] + "/history", body="null")
    assert client.consensus(3) is False


def test_crash_url(rsps, client):
    rsps.add(responses.GET, BASES[ID("1.2")] + "/crash")
    client.crash("1.2", 5)
    url = urlparse(rsps.calls[0].request.url)
    assert url.path == "/crash"
    assert parse_qs(url.query) == {"t": ["5"]}


def test_partition_drops_from_other_nodes(rsps, client):
    for base in BASES.values():
        rsps.add(responses.GET, base + "/drop")
    client.partition(10, ID("2.1"))
    urls = [urlparse(call.request.url) for call in rsps.calls]
    assert len(urls) == 2
    assert {u.port for u in urls} == {8080, 8081}
    assert all(parse_qs(u.query) == {"id": ["2.1"], "t": ["10"]} for u in urls)


def test_json_put(rsps, client):
    rsps.add(responses.POST, BASES[ID("1.1")], body=b"prev")
    assert client.json_put(4, b"v") == b"prev"
    payload = json.loads(rsps.calls[0].request.body)
    assert payload["Key"] == 4
    assert base64.b64decode(payload["Value"]) == b"v"
    assert payload["ClientID"] == "1.1"


def test_quorum_put(rsps, client):
    for base in BASES.values():
        rsps.add(responses.PUT, base + "/6")
    client.quorum_put(6, b"z")
    assert len(rsps.calls) == client.n // 2
    assert all(call.request.body == b"z" for call in rsps.calls)