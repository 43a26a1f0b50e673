"""Tests for the aiohttp transport against a local server."""

import socket

import pytest
from aiohttp import web
from aiohttp import test_utils

from bucketfs.core.errors import TransportError
from bucketfs.providers.http import AiohttpTransport, HttpRequest, TransportSettings


async def echo(request: web.Request) -> web.Response:
    body = await request.read()
    return web.Response(
        status=201,
        body=request.method.encode() + b" " + request.raw_path.encode() + b" " + body,
        headers={"x-amz-date": request.headers.get("x-amz-date", "")},
    )


def unused_port() -> int:
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


class TestAiohttpTransport:

    @pytest.mark.asyncio
    async def test_send(self):
        app = web.Application()
        app.router.add_route("*", "/{tail:.*}", echo)
        server = test_utils.TestServer(app)
        await server.start_server()

        try:
            async with AiohttpTransport(settings=TransportSettings(timeout_seconds=5)) as transport:
                response = await transport.send(HttpRequest(
                    method="PUT",
                    url=f"http://{server.host}:{server.port}/my-bucket/a%20b/c%2Fd",
                    headers={"x-amz-date": "20240102T030405Z"},
                    body=b"payload",
                ))
        finally:
            await server.close()

        assert response.status_code == 201
        assert response.is_success
        assert response.body == b"PUT /my-bucket/a%20b/c%2Fd payload"
        headers = {key.lower(): value for key, value in response.headers.items()}
        assert headers["x-amz-date"] == "20240102T030405Z"

    @pytest.mark.asyncio
    async def test_unreachable_host(self):
        transport = AiohttpTransport()
        request = HttpRequest(method="GET", url=f"http://127.0.0.1:{unused_port()}/my-bucket/a")

        try:
            with pytest.raises(TransportError) as excinfo:
                await transport.send(request)
        finally:
            await transport.shutdown()

        assert excinfo.value.context.get("method") == "GET"
        assert excinfo.value.cause is not None
