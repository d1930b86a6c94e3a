import asyncio
import os
from contextlib import suppress

import pytest


async def _start(server):
    task = asyncio.create_task(server.start_server())
    await asyncio.wait_for(server.started.wait(), timeout=3.0)
    return task


async def _stop(task):
    task.cancel()
    with suppress(asyncio.CancelledError):
        await task


@pytest.mark.asyncio
async def test_pong_server_answers_ping_client(socket_path):
    from client.config import PingConfig
    from client.ping_client import PingClient
    from server.pong_server import PongServer

    server = PongServer(socket_path=socket_path)
    task = await _start(server)
    try:
        client = PingClient(PingConfig(socket_path=socket_path, timeout=5.0))
        result = await asyncio.to_thread(client.ping)
    finally:
        await _stop(task)

    assert result.text == "pong"
    assert server.requests == [b"ping"]


@pytest.mark.asyncio
async def test_pong_server_uses_configured_reply(socket_path):
    from client.config import PingConfig
    from client.ping_client import PingClient
    from server.pong_server import PongServer

    server = PongServer(socket_path=socket_path, reply=b"frame ok")
    task = await _start(server)
    try:
        client = PingClient(PingConfig(socket_path=socket_path, timeout=5.0))
        first = await asyncio.to_thread(client.ping)
        second = await asyncio.to_thread(client.ping)
    finally:
        await _stop(task)

    assert first.data == second.data == b"frame ok"
    assert server.requests == [b"ping", b"ping"]


@pytest.mark.asyncio
async def test_pong_server_closes_on_unexpected_request(socket_path):
    from server.pong_server import PongServer

    server = PongServer(socket_path=socket_path)
    task = await _start(server)
    try:
        reader, writer = await asyncio.open_unix_connection(socket_path)
        writer.write(b"nope")
        await writer.drain()
        reply = await asyncio.wait_for(reader.read(), timeout=3.0)
        writer.close()
        await writer.wait_closed()
    finally:
        await _stop(task)

    assert reply == b""
    assert server.requests == [b"nope"]


@pytest.mark.asyncio
async def test_pong_server_records_truncated_request(socket_path):
    from server.pong_server import PongServer

    server = PongServer(socket_path=socket_path)
    task = await _start(server)
    try:
        reader, writer = await asyncio.open_unix_connection(socket_path)
        writer.write(b"pi")
        await writer.drain()
        writer.write_eof()
        reply = await asyncio.wait_for(reader.read(), timeout=3.0)
        writer.close()
        await writer.wait_closed()
    finally:
        await _stop(task)

    assert reply == b""
    assert server.requests == [b"pi"]


@pytest.mark.asyncio
async def test_pong_server_removes_socket_file_on_shutdown(socket_path):
    from server.pong_server import PongServer

    server = PongServer(socket_path=socket_path)
    task = await _start(server)
    assert os.path.exists(socket_path)

    await _stop(task)

    assert not os.path.exists(socket_path)
