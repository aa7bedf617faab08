# paxi

Pieces for building and poking at replicated key-value stores: identifiers,
ballots, a state-machine database, protocol message types, a REST client for
the nodes of a cluster and a small admin shell.

## What is inside

- `paxi.ident` – node identifiers of the form `zone.node`: `ID` (a `str`
  with `zone()`, `node()` and `sort_key()`) and `new_id(zone, node)`.
- `paxi.ballot` – 64-bit ballot numbers packing a 32-bit counter with a
  zone and node: `Ballot` (`n()`, `id()`, `next(id)`), `new_ballot`,
  `ballot_from_string`, `next_ballot`, `leader_id`.
- `paxi.db` – `Command` (a read when `value` is `None`, otherwise a write),
  the thread-safe, optionally multi-version `Database`, and
  `conflict` / `conflict_batch`.
- `paxi.codec` – stream codecs made by `new_codec(scheme, stream)` with
  scheme `"json"` (one JSON document per line) or `"pickle"`.
- `paxi.graph` – a directed `Graph` with BFS, reverse BFS, DFS, transpose,
  cycle detection (`cyclic`, `cycle`) and Tarjan strongly connected
  components (`scc`).
- `paxi.hash_ring` – an MD5 consistent `HashRing` (`insert`, `get`, `next`).
- `paxi.containers` – lock-guarded `ConcurrentMap`, `ConcurrentSet` and
  `MultiMap`, plus a FIFO `Queue` and a LIFO `Stack`.
- `paxi.config` – `Config` and `BenchmarkConfig`, read from and written to
  JSON, with `default_config`, `get_config` and `set_config` for the
  process-wide configuration.
- `paxi.client` – `HTTPClient` for the nodes' REST API: `get`, `put`,
  `rest_get`, `rest_put`, `json_get`, `json_put`, quorum reads and writes,
  `consensus`, and fault injection with `crash`, `drop` and `partition`.
  Non-200 answers raise `ClientError`.
- `paxi.chain` – chain-replication messages (`Accept`, `Ack`) and a `Client`
  that writes to the head of the chain and reads from its tail.
- `paxi.messages` – ABD (`Get`, `GetReply`, `Set`, `SetReply`),
  `Replicate`, and Paxos phase messages (`P1a`, `P1b`, `P2a`, `P2b`, `P3`).
- `paxi.epaxos` – EPaxos `Status`, `Instance` (with `merge` and `copy_dep`)
  and its messages.
- `paxi.blockchain` – proof-of-work `Block`s and `genesis(prefix)`.
- `paxi.logger` – `setup(log_dir, severity)`, `get_logger()`, `Severity`
  and `parse_severity`.

## Install

```
pip install .
```

## Quick look

```python
from paxi.ident import new_id
from paxi.ballot import new_ballot

node = new_id(2, 1)
b = new_ballot(0, node)
b = b.next(node)
print(b)              # 1.2.1
print(b.id().zone())  # 2
```

```python
from paxi.db import Command, Database

db = Database(multiversion=True)
db.execute(Command(key=1, value=b"a"))
db.execute(Command(key=1, value=b"b"))
print(db.get(1), db.history(1))   # b'b' [b'a', b'b']
```

## Configuration

`Config.load(path)` reads a JSON file such as:

```json
{
  "address": {"1.1": "tcp://127.0.0.1:1735", "1.2": "tcp://127.0.0.1:1736"},
  "http_address": {"1.1": "http://127.0.0.1:8080", "1.2": "http://127.0.0.1:8081"},
  "multiversion": true
}
```

Field names are matched without regard to case; fields left out keep their
defaults. `Config.save(path)` writes the configuration back as JSON.

## Command line

With a configuration file describing the cluster, the admin shell talks to
the nodes over HTTP:

```
paxi-cmd -config config.json -id 1.1 put 1 hello
paxi-cmd -config config.json -id 1.1 get 1
paxi-cmd -config config.json consensus 1
paxi-cmd -config config.json crash 1.2 10
paxi-cmd -config config.json partition 10 1.1 1.2
```

Options: `-id` (node the client talks to), `-algorithm` (`chain` selects the
chain-replication client), `-config`, `-log_dir` and `-log_level`. A log file
named `<program>.<pid>.log` is written to the log directory.

Run `paxi-cmd` with no command to get an interactive `paxi $` prompt. It
accepts `get`, `put`, `consensus`, `crash`, `partition`, `help` and `exit`;
anything else prints the usage text.

## What this package does not do

It contains no node or replica: there is no server answering the REST API,
no transport between nodes, and no running implementation of ABD, chain
replication, EPaxos or Paxos — only their message and state types. The
client and the shell need a cluster that serves the REST API. There is no
benchmark runner and no linearizability checker; `BenchmarkConfig` only
holds workload settings.

## Tests

```
pip install .[test]
pytest
```