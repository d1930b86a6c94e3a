from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    """Process exit statuses used when ``--exit-codes`` is requested."""

    OK = 0
    CONNECT_FAILED = 3
    WRITE_FAILED = 4
    READ_FAILED = 5


class PingError(Exception):
    """Base class for a failed ping exchange. ``str()`` is the user-facing report.

    Only the step-specific subclasses are raised; each sets its own ``exit_code``.
    """

    exit_code: ExitCode
    message = "ping failed"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)


class ConnectError(PingError):
    exit_code = ExitCode.CONNECT_FAILED

    def __init__(self, socket_path: str) -> None:
        self.socket_path = socket_path
        super().__init__(f"failed to connect to {socket_path}")


class WriteError(PingError):
    exit_code = ExitCode.WRITE_FAILED
    message = "failed to write ping"


class ReadError(PingError):
    exit_code = ExitCode.READ_FAILED
    message = "failed to receive data"
