"""Message serialisation over a byte stream."""

from __future__ import annotations

import abc
import json
import pickle
from typing import Any, BinaryIO


class Codec(abc.ABC):
    """Writes messages to and reads messages from one byte stream."""

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream

    @abc.abstractmethod
    def scheme(self) -> str:
        """Name of the encoding."""

    @abc.abstractmethod
    def encode(self, message: Any) -> None:
        """Write ``message`` to the stream."""

    @abc.abstractmethod
    def decode(self) -> Any:
        """Read the next message; raise EOFError when none is left."""


class JSONCodec(Codec):
    """One JSON document per line."""

    def scheme(self) -> str:
        return "json"

    def encode(self, message: Any) -> None:
        line = json.dumps(message, separators=(",", ":")) + "\n"
        self._stream.write(line.encode("utf-8"))

    def decode(self) -> Any:
        line = self._stream.readline()
        if not line:
            raise EOFError("no message to decode")
        return json.loads(line)


class PickleCodec(Codec):
    """Native Python objects, for trusted peers only."""

    def scheme(self) -> str:
        return "pickle"

    def encode(self, message: Any) -> None:
        pickle.dump(message, self._stream)

    def decode(self) -> Any:
        return pickle.load(self._stream)


_CODECS: dict[str, type[Codec]] = {
    "json": JSONCodec,
    "pickle": PickleCodec,
}


def new_codec(scheme: str, stream: BinaryIO) -> Codec:
    """Return the codec for ``scheme`` ("json" or "pickle") over ``stream``."""
    try:
        return _CODECS[scheme](stream)
    except KeyError:
        raise ValueError(f"unknown codec scheme {scheme!r}") from None