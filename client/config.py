from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from shared.wire import SOCKET_PATH


@dataclass(frozen=True)
class PingConfig:
    """Where to send the ping and how long each socket call may block.

    ``timeout`` is applied to connect, write and read alike; ``None`` blocks
    indefinitely.
    """

    socket_path: str = SOCKET_PATH
    timeout: Optional[float] = None
