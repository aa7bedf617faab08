"""Interactive command line for reading, writing and injecting faults into a cluster."""

from __future__ import annotations

import argparse
import re
from typing import Any, Sequence

import requests

from .chain import Client as ChainClient
from .client import ClientError, HTTPClient
from .config import DEFAULT_CONFIG_FILE, Config, set_config
from .ident import ID
from .logger import get_logger, setup

_INT = re.compile(r"[+-]?\d+")


def usage() -> str:
    """Help text listing the accepted commands."""
    return ("Usage:\n"
            "\t get key\n"
            "\t put key value\n"
            "\t consensus key\n"
            "\t crash id time\n"
            "\t partition time ids...\n"
            "\t exit\n")


def _parse_int(text: str) -> int | None:
    return int(text) if _INT.fullmatch(text) else None


def _key(text: str) -> int:
    value = _parse_int(text)
    return 0 if value is None else value


def run(client: Any, admin: Any, cmd: str, args: Sequence[str]) -> None:
    """Carry out one command, printing its result."""
    if cmd == "get":
        if len(args) < 1:
            print("get KEY")
            return
        try:
            value = client.get(_key(args[0]))
        except (ClientError, requests.RequestException) as err:
            get_logger().error("%s", err)
            value = b""
        print((value or b"").decode("utf-8", errors="replace"))
    elif cmd == "put":
        if len(args) < 2:
            print("put KEY VALUE")
            return
        try:
            client.put(_key(args[0]), args[1].encode("utf-8"))
        except (ClientError, requests.RequestException) as err:
            get_logger().error("%s", err)
    elif cmd == "consensus":
        if len(args) < 1:
            print("consensus KEY")
            return
        print("true" if admin.consensus(_key(args[0])) else "false")
    elif cmd == "crash":
        if len(args) < 2:
            print("crash id time(s)")
            return
        seconds = _parse_int(args[1])
        if seconds is None:
            print("second argument should be integer")
            return
        admin.crash(ID(args[0]), seconds)
    elif cmd == "partition":
        if len(args) < 2:
            print("partition time ids...")
            return
        seconds = _parse_int(args[0])
        if seconds is None:
            print("time argument should be integer")
            return
        admin.partition(seconds, *(ID(node) for node in args[1:]))
    elif cmd == "exit":
        raise SystemExit(0)
    else:
        print(usage())


def main(argv: Sequence[str] | None = None) -> int:
    """Run one command given on the command line, or read commands from standard input."""
    parser = argparse.ArgumentParser(prog="paxi-cmd", description="paxi cluster command line")
    parser.add_argument("-id", dest="id", default="", help="node id this client connects to")
    parser.add_argument("-algorithm", default="", help="client API type [chain]")
    parser.add_argument("-config", default=DEFAULT_CONFIG_FILE, help="configuration file")
    parser.add_argument("-log_dir", default="", help="directory for the log file")
    parser.add_argument("-log_level", default=None, help="logs at and above this level")
    parser.add_argument("command", nargs=argparse.REMAINDER)
    args = parser.parse_args(argv)

    setup(args.log_dir or None, args.log_level)
    config = Config()
    config.load(args.config)
    set_config(config)

    admin = HTTPClient(args.id, config)
    client: Any = ChainClient(config) if args.algorithm == "chain" else HTTPClient(args.id, config)

    if args.command:
        run(client, admin, args.command[0], args.command[1:])
        return 0

    while True:
        try:
            line = input("paxi $ ")
        except EOFError:
            print()
            return 0
        words = line.split()
        if words:
            run(client, admin, words[0], words[1:])