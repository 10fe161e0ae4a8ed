"""Shared constants and small helpers for the sensor link."""

from __future__ import annotations

import enum
import platform
import random
from typing import Optional

VERSION = "1.0.0"

BUFFER_SIZE = 1024
MAX_MSG_SIZE = 32768
MAX_CLIENTS = 64
MAX_LISTEN_QUEUE = 64
MAX_URL_SIZE = 256

SQLITE_DIR_PATH = "./view"
SQLITE_PATH = "./view/data.db"

VIEW_SERVER_LOCALHOST = "127.0.0.1"
VIEW_SERVER_PORT = 30900
VIEW_SERVER_ROOT = "./view"
VIEW_SERVER_HOME = "/view.html"
VIEW_SERVER_DEFAULT_CONTENT_TYPE = "octet-stream"

DEFAULT_SERVER_PORT = 30080

LINE = "-" * 50


class Mode(enum.IntFlag):
    """Roles a node can take: reporting client, collecting server, or both."""

    CLIENT = 0x01
    SERVER = 0x02
    ALL = CLIENT | SERVER


def str_to_int(text: str) -> int:
    """Parse an optional leading '-' and the digits after it, stopping at the first non-digit."""
    sign = 1
    if text.startswith("-"):
        sign = -1
        text = text[1:]
    digits = []
    for char in text:
        if "0" <= char <= "9":
            digits.append(char)
        else:
            break
    return sign * int("".join(digits)) if digits else 0


def contains(options: int, value: int) -> bool:
    """Return True if every bit of ``value`` is set in ``options``."""
    return (int(options) & int(value)) == int(value)


def random_between(low: int, high: int, rng: Optional[random.Random] = None) -> int:
    """Return a random integer in the closed range [low, high]."""
    if high < low:
        raise ValueError(f"empty range: {low}..{high}")
    source = rng if rng is not None else random
    return source.randint(low, high)


def rangify(low: int, high: int, value: int) -> int:
    """Clamp ``value`` into [low, high]."""
    if value < low:
        return low
    if value > high:
        return high
    return value


def print_line() -> None:
    """Print a horizontal separator line."""
    print(LINE)


def info() -> str:
    """Print and return the program banner."""
    banner = (
        f"Socket client version {VERSION}, "
        f"compiled by {platform.python_implementation()}."
    )
    print(banner)
    return banner