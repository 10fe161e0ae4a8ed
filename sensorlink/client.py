"""Sensor node that reports readings to a server, collects them, or both."""

from __future__ import annotations

import itertools
import random
import socket
import threading
import time
from dataclasses import dataclass
from typing import NoReturn, Optional, Tuple

from .package import Package
from .storage import PathLike, Storage
from .utils import (
    BUFFER_SIZE,
    DEFAULT_SERVER_PORT,
    MAX_LISTEN_QUEUE,
    SQLITE_PATH,
    VIEW_SERVER_LOCALHOST,
    Mode,
    contains,
    print_line,
    random_between,
    rangify,
)

TEMPERATURE_RANGE = (-10, 40)
HUMIDITY_START_RANGE = (30, 100)
HUMIDITY_RANGE = (-30, 100)
DRIFT_STEP = 2

_ACCEPT_POLL_SECONDS = 0.2


@dataclass
class Config:
    """How a node runs: its role, the server address and its own id."""

    mode: Mode = Mode(0)
    server_ip: str = VIEW_SERVER_LOCALHOST
    server_port: int = DEFAULT_SERVER_PORT
    id: int = 0
    report_interval: float = 1.0


def drift(value: int, low: int, high: int, rng: Optional[random.Random] = None) -> int:
    """Move ``value`` by a random step of at most two and clamp it into [low, high]."""
    step = random_between(-DRIFT_STEP, DRIFT_STEP, rng)
    return rangify(low, high, value + step)


class Client:
    """A sensor node: sends readings as a client, stores them as a server."""

    def __init__(self, config: Config, db_path: PathLike = SQLITE_PATH) -> None:
        self.config = config
        self.rng = random.Random(int(time.time()))
        self.temperature = 0
        self.humidity = 0
        self._client_sock: Optional[socket.socket] = None
        self._server_sock: Optional[socket.socket] = None
        self._closed = threading.Event()
        self.storage = Storage(db_path)

    def _fail(self, message: str, exc: BaseException) -> NoReturn:
        self._close_sockets()
        raise ConnectionError(f"{message}: {exc}") from exc

    def _new_socket(self) -> socket.socket:
        try:
            return socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        except OSError as exc:
            self._fail("Socket create failed", exc)

    def connect(self) -> None:
        """Open the connection to the configured server."""
        print("Initializing client.")
        ip, port = self.config.server_ip, self.config.server_port
        try:
            socket.inet_pton(socket.AF_INET, ip)
        except OSError as exc:
            self._fail("Inet_pton failed", exc)
        sock = self._new_socket()
        print(f"Connecting to {ip}:{port}.")
        try:
            sock.connect((ip, port))
        except OSError as exc:
            sock.close()
            self._fail("Connect failed", exc)
        self._client_sock = sock
        print("Connection established successfully.")

    def bind(self) -> Tuple[str, int]:
        """Bind the server socket on all interfaces and return the bound address."""
        print("Initializing server.")
        sock = self._new_socket()
        try:
            sock.bind(("", self.config.server_port))
        except OSError as exc:
            sock.close()
            self._fail("Bind failed", exc)
        self._server_sock = sock
        host, port = sock.getsockname()[:2]
        return host, port

    def send(self, package: Package) -> None:
        """Send one reading to the server."""
        if self._client_sock is None:
            raise ConnectionError("Send failed: not connected")
        try:
            self._client_sock.sendall(package.to_bytes())
        except OSError as exc:
            self._fail("Send failed", exc)
        print_line()
        print("Sent package:")
        print(package.describe())
        print_line()

    def make_reports(self, count: Optional[int] = None) -> int:
        """Send drifting readings once per interval; forever unless ``count`` is given."""
        print("Recording...")
        temperature = random_between(*TEMPERATURE_RANGE, self.rng)
        humidity = random_between(*HUMIDITY_START_RANGE, self.rng)
        now = int(time.time())
        readings = itertools.count() if count is None else range(count)
        sent = 0
        for index in readings:
            if index:
                time.sleep(self.config.report_interval)
                temperature = drift(temperature, *TEMPERATURE_RANGE, self.rng)
                humidity = drift(humidity, *HUMIDITY_RANGE, self.rng)
                now = int(time.time())
            self.temperature = temperature
            self.humidity = humidity
            self.send(
                Package(
                    id=self.config.id,
                    temperature=temperature,
                    humidity=humidity,
                    time=now,
                )
            )
            sent += 1
        return sent

    def listen(self) -> None:
        """Accept connections until closed, storing each one's readings in a thread."""
        sock = self._server_sock
        if sock is None:
            raise ConnectionError("Listen failed: socket not bound")
        try:
            sock.listen(MAX_LISTEN_QUEUE)
        except OSError as exc:
            self._fail("Listen failed", exc)
        port = sock.getsockname()[1]
        print(f"Server is now listening on {VIEW_SERVER_LOCALHOST}:{port}.")
        sock.settimeout(_ACCEPT_POLL_SECONDS)
        while not self._closed.is_set():
            try:
                conn, _addr = sock.accept()
            except socket.timeout:
                continue
            except OSError:
                if self._closed.is_set():
                    break
                continue
            conn.settimeout(None)
            threading.Thread(
                target=self.handle_connection, args=(conn,), daemon=True
            ).start()

    def handle_connection(self, conn: socket.socket) -> int:
        """Store every complete reading received on ``conn``; return how many were stored."""
        stored = 0
        pending = b""
        with conn:
            while True:
                try:
                    chunk = conn.recv(BUFFER_SIZE)
                except OSError:
                    chunk = b""
                if not chunk:
                    print("Client disconnected.")
                    return stored
                pending += chunk
                while len(pending) >= Package.SIZE:
                    package = Package.from_bytes(pending)
                    pending = pending[Package.SIZE:]
                    self.storage.insert(package)
                    stored += 1

    def exec(self) -> None:
        """Open the sockets the mode needs, then report and/or serve."""
        mode = self.config.mode
        try:
            if contains(mode, Mode.CLIENT):
                self.connect()
            if contains(mode, Mode.SERVER):
                self.bind()
            if contains(mode, Mode.CLIENT):
                self.make_reports()
            if contains(mode, Mode.SERVER):
                self.listen()
        except KeyboardInterrupt:
            print("Socket client stop.")
            self.close()

    def _close_sockets(self) -> None:
        for sock in (self._client_sock, self._server_sock):
            if sock is not None:
                sock.close()
        self._client_sock = None
        self._server_sock = None

    def close(self) -> None:
        """Stop serving and release sockets and the database."""
        if self._closed.is_set():
            return
        self._closed.set()
        self._close_sockets()
        self.storage.close()

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()