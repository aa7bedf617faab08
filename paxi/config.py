"""Cluster and benchmark configuration, read from and written to JSON."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from typing import Any, Mapping

from .ident import ID

DEFAULT_CONFIG_FILE = "config.json"


def _coerce(value: Any, kind: type, name: str) -> Any:
    if kind is bool:
        if isinstance(value, bool):
            return value
    elif kind is int:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    elif kind is float:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
    elif kind is str:
        if isinstance(value, str):
            return value
    raise TypeError(f"field {name!r} expects {kind.__name__}, got {type(value).__name__}")


def _folded(data: Mapping[str, Any]) -> dict[str, Any]:
    """Field names are matched without regard to case."""
    if not isinstance(data, Mapping):
        raise TypeError(f"expected a JSON object, got {type(data).__name__}")
    return {str(key).lower(): value for key, value in data.items()}


# attribute name, JSON name, value type
_BENCHMARK_FIELDS: tuple[tuple[str, str, type], ...] = (
    ("t", "T", int),
    ("n", "N", int),
    ("k", "K", int),
    ("w", "W", float),
    ("throttle", "Throttle", int),
    ("concurrency", "Concurrency", int),
    ("distribution", "Distribution", str),
    ("linearizability_check", "LinearizabilityCheck", bool),
    ("conflicts", "Conflicts", int),
    ("min_key", "Min", int),
    ("mu", "Mu", float),
    ("sigma", "Sigma", float),
    ("move", "Move", bool),
    ("speed", "Speed", int),
    ("zipfian_s", "ZipfianS", float),
    ("zipfian_v", "ZipfianV", float),
    ("lambda_", "Lambda", float),
)


@dataclass
class BenchmarkConfig:
    """Workload settings for a benchmark run."""

    t: int = 60                       # running time in seconds
    n: int = 0                        # total number of requests
    k: int = 1000                     # key space
    w: float = 0.5                    # write ratio
    throttle: int = 0                 # requests per second, unused if 0
    concurrency: int = 1              # number of simulated clients
    distribution: str = "uniform"
    linearizability_check: bool = True
    conflicts: int = 100              # percentage of conflicting keys
    min_key: int = 0
    mu: float = 0.0                   # normal distribution mean
    sigma: float = 60.0               # normal distribution deviation
    move: bool = False                # move the mean over time
    speed: int = 500                  # milliseconds per key when moving
    zipfian_s: float = 2.0
    zipfian_v: float = 1.0
    lambda_: float = 0.01             # exponential distribution rate

    def to_dict(self) -> dict[str, Any]:
        return {json_name: getattr(self, attr) for attr, json_name, _ in _BENCHMARK_FIELDS}

    def _apply(self, data: Mapping[str, Any]) -> None:
        folded = _folded(data)
        for attr, json_name, kind in _BENCHMARK_FIELDS:
            key = json_name.lower()
            if key in folded:
                setattr(self, attr, _coerce(folded[key], kind, json_name))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> BenchmarkConfig:
        """Build a config from JSON fields; missing fields keep their defaults."""
        result = cls()
        result._apply(data)
        return result


def _address_map(value: Any, name: str) -> dict[ID, str]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise TypeError(f"field {name!r} expects an object of addresses")
    return {ID(str(node)): _coerce(address, str, name) for node, address in value.items()}


@dataclass
class Config:
    """System configuration shared by nodes and clients."""

    addrs: dict[ID, str] = field(default_factory=dict)        # node-to-node addresses
    http_addrs: dict[ID, str] = field(default_factory=dict)   # client-facing addresses
    policy: str = "consecutive"
    threshold: float = 3.0
    thrifty: bool = False
    buffer_size: int = 1024
    chan_buffer_size: int = 1024
    multiversion: bool = False
    benchmark: BenchmarkConfig = field(default_factory=BenchmarkConfig)

    def ids(self) -> list[ID]:
        """Every node identifier."""
        return [ID(node) for node in self.addrs]

    def n(self) -> int:
        """Total number of nodes."""
        return len(self.addrs)

    def z(self) -> int:
        """Total number of zones."""
        return len({ID(node).zone() for node in self.addrs})

    def to_dict(self) -> dict[str, Any]:
        return {
            "address": {str(k): self.addrs[k] for k in sorted(self.addrs, key=str)},
            "http_address": {str(k): self.http_addrs[k] for k in sorted(self.http_addrs, key=str)},
            "policy": self.policy,
            "threshold": self.threshold,
            "thrifty": self.thrifty,
            "buffer_size": self.buffer_size,
            "chan_buffer_size": self.chan_buffer_size,
            "multiversion": self.multiversion,
            "benchmark": self.benchmark.to_dict(),
        }

    def _apply(self, data: Mapping[str, Any]) -> None:
        folded = _folded(data)
        if "address" in folded:
            self.addrs = _address_map(folded["address"], "address")
        if "http_address" in folded:
            self.http_addrs = _address_map(folded["http_address"], "http_address")
        scalars = (
            ("policy", str),
            ("threshold", float),
            ("thrifty", bool),
            ("buffer_size", int),
            ("chan_buffer_size", int),
            ("multiversion", bool),
        )
        for name, kind in scalars:
            if name in folded:
                setattr(self, name, _coerce(folded[name], kind, name))
        if "benchmark" in folded and folded["benchmark"] is not None:
            self.benchmark._apply(folded["benchmark"])

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Config:
        """Build a config from JSON fields; missing fields keep their defaults."""
        result = cls()
        result._apply(data)
        return result

    def __str__(self) -> str:
        return json.dumps(self.to_dict(), separators=(",", ":"))

    def load(self, path: str | os.PathLike[str] = DEFAULT_CONFIG_FILE) -> None:
        """Read JSON from ``path`` over the current values."""
        with open(path, encoding="utf-8") as handle:
            data = json.load(handle)
        self._apply(data)

    def save(self, path: str | os.PathLike[str] = DEFAULT_CONFIG_FILE) -> None:
        """Write the configuration to ``path`` as JSON."""
        with open(path, "w", encoding="utf-8") as handle:
            handle.write(json.dumps(self.to_dict()) + "\n")


def default_config() -> Config:
    """A configuration holding only default values."""
    return Config()


_config = default_config()


def get_config() -> Config:
    """The process-wide configuration."""
    return _config


def set_config(config: Config) -> None:
    """Replace the process-wide configuration."""
    global _config
    _config = config