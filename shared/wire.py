from __future__ import annotations

# Well-known address of the frameforge peer.
SOCKET_PATH = "/tmp/frameforge.socket"

# Single unframed request; no length prefix, no terminator.
PING_REQUEST = b"ping"

# Capacity of the one and only read issued by the client.
READ_SIZE = 64

PONG_REPLY = b"pong"
