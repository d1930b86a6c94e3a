from __future__ import annotations
import socket
from contextlib import closing
from typing import Callable, Optional, Protocol

from shared.errors import ConnectError, ReadError, WriteError
from shared.log import get_logger, log_step
from shared.wire import PING_REQUEST, READ_SIZE
from .config import PingConfig
from .state import PingResult, PingStep

logger = get_logger(__name__)


class Connection(Protocol):
    def sendall(self, data: bytes) -> None: ...

    def recv(self, bufsize: int) -> bytes: ...

    def close(self) -> None: ...


Connector = Callable[[PingConfig], Connection]


def open_unix_socket(config: PingConfig) -> socket.socket:
    """Open a stream connection to ``config.socket_path``.

    The socket is closed again if the connect itself fails.
    """
    sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
    try:
        sock.settimeout(config.timeout)
        sock.connect(config.socket_path)
    except OSError:
        sock.close()
        raise
    return sock


class PingClient:
    """
    One-shot ping over a local stream socket.

    Sends ``ping`` once and issues exactly one read of up to 64 bytes.
    Nothing is retried. The connection, once opened, is closed exactly once
    whichever step fails.
    """

    def __init__(self, config: Optional[PingConfig] = None, connector: Connector = open_unix_socket) -> None:
        self.config = config or PingConfig()
        self.connector = connector
        self.step = PingStep.CONNECTING

    def ping(self) -> PingResult:
        path = self.config.socket_path

        self._enter(PingStep.CONNECTING)
        try:
            conn = self.connector(self.config)
        except OSError as e:
            self._fail(e)
            raise ConnectError(path) from e

        with closing(conn):
            self._enter(PingStep.WRITING)
            try:
                conn.sendall(PING_REQUEST)
            except OSError as e:
                self._fail(e)
                raise WriteError() from e

            self._enter(PingStep.READING)
            try:
                data = conn.recv(READ_SIZE)
            except OSError as e:
                self._fail(e)
                raise ReadError() from e

            # recv() signals end-of-stream with b""
            if not data:
                self._fail("peer closed the connection before replying")
                raise ReadError()

        self._enter(PingStep.DONE)
        log_step(logger, "debug", f"Received {len(data)} bytes", step=self.step.value, socket_path=path)
        return PingResult(data=data)

    def _enter(self, step: PingStep) -> None:
        self.step = step
        log_step(logger, "debug", f"Entering {step.value}", step=step.value, socket_path=self.config.socket_path)

    def _fail(self, cause: object) -> None:
        failed_at = self.step
        self.step = PingStep.FAILED
        log_step(logger, "debug", f"{failed_at.value} failed: {cause}",
                 step=failed_at.value, socket_path=self.config.socket_path)
