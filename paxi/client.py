"""HTTP client for the key-value REST interface of paxi nodes."""

from __future__ import annotations

import base64
import json
import random
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable

import requests

from .config import Config, get_config
from .ident import ID
from .logger import get_logger

# HTTP header names
HTTP_CLIENT_ID = "Id"
HTTP_COMMAND_ID = "Cid"
HTTP_TIMESTAMP = "Timestamp"
HTTP_NODE_ID = "Id"

_log = get_logger()


class ClientError(Exception):
    """A node answered with a status other than 200."""

    def __init__(self, status: str, metadata: dict[str, str] | None = None) -> None:
        super().__init__(status)
        self.status = status
        self.metadata = dict(metadata or {})


def _status(response: requests.Response) -> str:
    return f"{response.status_code} {response.reason or ''}".strip()


class HTTPClient:
    """Client of the REST API; also injects faults into nodes."""

    def __init__(self, id: ID | str | None = None, config: Config | None = None) -> None:
        cfg = config if config is not None else get_config()
        self.id = ID(id or "")
        self.addrs: dict[ID, str] = {ID(node): addr for node, addr in cfg.addrs.items()}
        self.http: dict[ID, str] = {ID(node): addr for node, addr in cfg.http_addrs.items()}
        self.n = len(self.addrs)
        self.local_n = (
            sum(1 for node in self.addrs if node.zone() == self.id.zone()) if self.id else 0
        )
        self.cid = 0
        self.session = requests.Session()

    def get(self, key: int) -> bytes:
        """Read the value of ``key``."""
        self.cid += 1
        value, _ = self.rest_get(self.id, key)
        return value

    def put(self, key: int, value: bytes) -> None:
        """Write ``value`` under ``key``."""
        self.cid += 1
        self.rest_put(self.id, key, value)

    def get_url(self, id: ID | str | None, key: int) -> str:
        """URL of ``key`` on node ``id``; a random node when ``id`` is empty."""
        if not id:
            if not self.http:
                raise LookupError("no http addresses configured")
            id = random.choice(list(self.http))
        return f"{self.http[ID(id)]}/{key}"

    def _rest(self, id: ID | str | None, key: int,
              value: bytes | None) -> tuple[bytes, dict[str, str]]:
        url = self.get_url(id, key)
        method = "GET" if value is None else "PUT"
        headers = {HTTP_CLIENT_ID: str(self.id), HTTP_COMMAND_ID: str(self.cid)}
        with self.session.request(method, url, data=value, headers=headers) as response:
            metadata = dict(response.headers)
            if response.status_code == 200:
                body = response.content
                _log.debug("node=%s type=%s key=%s value=%s", id, method, key,
                           (body if value is None else value).hex())
                return body, metadata
            _log.debug("%r", response.content)
            raise ClientError(_status(response), metadata)

    def rest_get(self, id: ID | str | None, key: int) -> tuple[bytes, dict[str, str]]:
        """Read ``key`` from node ``id``; return the value and response headers."""
        return self._rest(id, key, None)

    def rest_put(self, id: ID | str | None, key: int,
                 value: bytes) -> tuple[bytes, dict[str, str]]:
        """Write ``key`` on node ``id``; return the reply body and headers."""
        return self._rest(id, key, value)

    def _json(self, id: ID | str, key: int, value: bytes | None) -> bytes:
        url = self.http[ID(id)]
        command = {
            "Key": key,
            "Value": None if value is None else base64.b64encode(value).decode("ascii"),
            "ClientID": str(self.id),
            "CommandID": self.cid,
        }
        data = json.dumps(command).encode("utf-8")
        with self.session.post(url, data=data, headers={"Content-Type": "json"}) as response:
            if response.status_code == 200:
                body = response.content
                _log.debug("key=%s value=%s", key, body.hex())
                return body
            _log.debug("%r", response.content)
            raise ClientError(_status(response), dict(response.headers))

    def json_get(self, key: int) -> bytes:
        """Post a read command as JSON to this client's node."""
        return self._json(self.id, key, None)

    def json_put(self, key: int, value: bytes) -> bytes:
        """Post a write command as JSON to this client's node."""
        return self._json(self.id, key, value)

    def _try_read(self, id: ID, key: int) -> tuple[bytes, dict[str, str]] | None:
        try:
            return self._rest(id, key, None)
        except (requests.RequestException, ClientError) as err:
            _log.error("%s", err)
            return None

    def _gather(self, targets: Iterable[ID],
                key: int) -> tuple[list[bytes], list[dict[str, str]]]:
        targets = list(targets)
        values: list[bytes] = []
        metas: list[dict[str, str]] = []
        if not targets:
            return values, metas
        with ThreadPoolExecutor(max_workers=len(targets)) as pool:
            for result in pool.map(lambda node: self._try_read(node, key), targets):
                if result is not None:
                    values.append(result[0])
                    metas.append(result[1])
        return values, metas

    def quorum_get(self, key: int) -> tuple[list[bytes], list[dict[str, str]]]:
        """Read ``key`` from a majority of nodes concurrently."""
        return self.multi_get(self.n // 2 + 1, key)

    def multi_get(self, n: int, key: int) -> tuple[list[bytes], list[dict[str, str]]]:
        """Read ``key`` from ``n`` nodes concurrently; failed reads are left out."""
        return self._gather(list(self.http)[:max(n, 0)], key)

    def local_quorum_get(self, key: int) -> tuple[list[bytes], list[dict[str, str]]]:
        """Read ``key`` concurrently from half of the nodes in this client's zone."""
        zone = self.id.zone()
        local = [node for node in self.http if node.zone() == zone]
        return self._gather(local[:self.local_n // 2], key)

    def quorum_put(self, key: int, value: bytes) -> None:
        """Write ``value`` to half of the nodes concurrently and wait for them."""
        targets = list(self.http)[:self.n // 2]
        if not targets:
            return

        def write(node: ID) -> None:
            try:
                self._rest(node, key, value)
            except (requests.RequestException, ClientError) as err:
                _log.error("%s", err)

        with ThreadPoolExecutor(max_workers=len(targets)) as pool:
            list(pool.map(write, targets))

    def _history(self, url: str, key: int) -> list[bytes]:
        with self.session.get(f"{url}/history", params={"key": str(key)}) as response:
            data = json.loads(response.content or b"null")
        if data is None:
            return []
        if not isinstance(data, list):
            raise ValueError("history is not a list")
        return [b"" if item is None else base64.b64decode(item) for item in data]

    def consensus(self, key: int) -> bool:
        """True when every node's history of ``key`` agrees position by position."""
        histories: dict[ID, list[bytes]] = {}
        for node, url in self.http.items():
            try:
                histories[node] = self._history(url, key)
            except (requests.RequestException, ValueError) as err:
                _log.error("%s", err)
                histories[node] = []
                continue
            _log.debug("node=%s key=%s h=%s", node, key, histories[node])
        length = max((len(h) for h in histories.values()), default=0)
        for position in range(length):
            seen = {h[position] for h in histories.values() if len(h) > position}
            if len(seen) > 1:
                return False
        return True

    def _admin(self, url: str) -> None:
        try:
            self.session.get(url).close()
        except requests.RequestException as err:
            _log.error("%s", err)

    def crash(self, id: ID | str, t: int) -> None:
        """Stop node ``id`` for ``t`` seconds; forever when ``t`` is negative."""
        self._admin(f"{self.http[ID(id)]}/crash?t={t}")

    def drop(self, source: ID | str, target: ID | str, t: int) -> None:
        """Make ``source`` drop every message to ``target`` for ``t`` seconds."""
        self._admin(f"{self.http[ID(source)]}/drop?id={target}&t={t}")

    def partition(self, t: int, *args: ID | str) -> None:
        """Cut the nodes in ``args`` off from all others for ``t`` seconds."""
        isolated = {ID(node) for node in args}
        for source in self.addrs:
            if source not in isolated:
                for target in args:
                    self.drop(source, target, t)