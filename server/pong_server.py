#!/usr/bin/env python3

from __future__ import annotations
import asyncio
import os
from contextlib import suppress
from typing import List

import typer

from shared.log import configure_root_logging, get_logger
from shared.wire import PING_REQUEST, PONG_REPLY, SOCKET_PATH

logger = get_logger(__name__)


class PongServer:
    """Local peer for the ping client: answers ``ping`` with a fixed reply and hangs up."""

    def __init__(self, socket_path: str = SOCKET_PATH, reply: bytes = PONG_REPLY) -> None:
        self.socket_path = socket_path
        self.reply = reply
        self.requests: List[bytes] = []
        self.started = asyncio.Event()

    async def start_server(self) -> None:
        """Listen on the socket path until cancelled, then remove the socket file."""
        logger.info(f"Starting pong server on {self.socket_path}")

        server = await asyncio.start_unix_server(self.handle_connection, path=self.socket_path)
        try:
            async with server:
                logger.info(f"Pong server listening on {self.socket_path}")
                self.started.set()
                await server.serve_forever()
        finally:
            logger.info("Pong server stopped")
            with suppress(FileNotFoundError):
                os.unlink(self.socket_path)

    async def handle_connection(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        """Read the fixed-size request, reply once and close."""
        try:
            try:
                request = await reader.readexactly(len(PING_REQUEST))
            except asyncio.IncompleteReadError as e:
                logger.warning("Peer closed after %d of %d request bytes", len(e.partial), len(PING_REQUEST))
                self.requests.append(e.partial)
                return

            self.requests.append(request)
            if request != PING_REQUEST:
                logger.warning("Unexpected request %r; closing without reply", request)
                return

            writer.write(self.reply)
            await writer.drain()
            logger.debug("Answered ping with %r", self.reply)
        except ConnectionError as e:
            logger.warning("Connection dropped: %s", e)
        finally:
            writer.close()
            with suppress(ConnectionError):
                await writer.wait_closed()


app = typer.Typer(help="Serve pong replies on a Unix domain socket.")


@app.command()
def serve(
    socket_path: str = typer.Option(SOCKET_PATH, "--socket-path", help="Filesystem path to listen on"),
    reply: str = typer.Option(PONG_REPLY.decode(), "--reply", help="Bytes sent back for each ping"),
):
    """Run the pong server until interrupted."""
    configure_root_logging(os.getenv("FRAMEFORGE_LOG_LEVEL", "INFO"))
    server = PongServer(socket_path=socket_path, reply=reply.encode())
    with suppress(KeyboardInterrupt):
        asyncio.run(server.start_server())


def main() -> None:
    app()


if __name__ == "__main__":
    main()
