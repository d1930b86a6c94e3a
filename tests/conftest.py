import os
import socket
import tempfile
import threading
import time

import pytest


class FakeConnection:
    """Stand-in for a connected socket that records every call."""

    def __init__(self, reply: bytes = b"pong", send_error: OSError | None = None,
                 recv_error: OSError | None = None) -> None:
        self.reply = reply
        self.send_error = send_error
        self.recv_error = recv_error
        self.sent: list[bytes] = []
        self.recv_sizes: list[int] = []
        self.close_calls = 0

    def sendall(self, data: bytes) -> None:
        if self.send_error is not None:
            raise self.send_error
        self.sent.append(data)

    def recv(self, bufsize: int) -> bytes:
        self.recv_sizes.append(bufsize)
        if self.recv_error is not None:
            raise self.recv_error
        return self.reply[:bufsize]

    def close(self) -> None:
        self.close_calls += 1


class PongListener(threading.Thread):
    """Blocking Unix-socket peer serving a fixed number of connections in a thread.

    The socket is bound and listening as soon as the object exists.
    """

    def __init__(self, path: str, reply: bytes = b"pong", connections: int = 1,
                 read_request: bool = True, delay: float = 0.0) -> None:
        super().__init__(daemon=True)
        self.reply = reply
        self.connections = connections
        self.read_request = read_request
        self.delay = delay
        self.requests: list[bytes] = []
        self.sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        self.sock.settimeout(5.0)
        self.sock.bind(path)
        self.sock.listen()

    def run(self) -> None:
        for _ in range(self.connections):
            try:
                conn, _ = self.sock.accept()
            except OSError:
                return
            with conn:
                try:
                    if self.read_request:
                        self.requests.append(conn.recv(64))
                    if self.delay:
                        time.sleep(self.delay)
                    if self.reply:
                        conn.sendall(self.reply)
                except OSError:
                    pass

    def close(self) -> None:
        self.join(timeout=5.0)
        self.sock.close()


@pytest.fixture
def socket_path():
    # AF_UNIX paths are limited to ~108 bytes, so stay out of pytest's deep tmp_path
    with tempfile.TemporaryDirectory(prefix="ff-", dir="/tmp") as tmpdir:
        yield os.path.join(tmpdir, "frameforge.socket")


@pytest.fixture
def pong_listener(socket_path):
    listeners: list[PongListener] = []

    def start(**kwargs) -> PongListener:
        listener = PongListener(socket_path, **kwargs)
        listener.start()
        listeners.append(listener)
        return listener

    yield start

    for listener in listeners:
        listener.close()
