"""Command line entry point for a sensor node."""

from __future__ import annotations

import sys
from typing import Iterable, List, Optional

from .client import Client, Config
from .utils import Mode, info, str_to_int

_SERVER_FLAGS = ("--server", "-S")
_CLIENT_FLAGS = ("--client", "-C")
_IP_FLAGS = ("--ip", "-I")
_PORT_FLAGS = ("--port", "-P")
_ID_FLAGS = ("--id", "-ID")


def usage(program: str) -> str:
    """Return the usage text for ``program``."""
    return (
        f"Usage: {program} <mode> <server_ip> <id>\n"
        "\tmode: --server | -S | --client | -C\n"
        "\tserver_ip: <ip>\n"
        "\tid: <int>"
    )


def parse_args(argv: Iterable[str]) -> Config:
    """Build a Config from the arguments; unknown arguments are ignored."""
    config = Config()
    args = iter(argv)

    def value_for(flag: str) -> str:
        value = next(args, None)
        if value is None:
            raise ValueError(f"missing value for {flag}")
        return value

    for arg in args:
        if arg in _SERVER_FLAGS:
            config.mode = Mode.SERVER
        elif arg in _CLIENT_FLAGS:
            config.mode = Mode.CLIENT
        elif arg in _IP_FLAGS:
            config.server_ip = value_for(arg)
        elif arg in _PORT_FLAGS:
            config.server_port = str_to_int(value_for(arg))
        elif arg in _ID_FLAGS:
            config.id = str_to_int(value_for(arg))
    return config


def main(argv: Optional[List[str]] = None) -> int:
    """Run a node from command line arguments and return the exit status."""
    program = sys.argv[0] if sys.argv and sys.argv[0] else "sensorlink"
    args = sys.argv[1:] if argv is None else list(argv)
    if not args:
        print(usage(program))
        return 1

    info()
    try:
        config = parse_args(args)
    except ValueError:
        print(usage(program))
        return 1

    client = Client(config)
    try:
        client.exec()
    except OSError as exc:
        print(exc, file=sys.stderr)
        return 1
    finally:
        client.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())