"""
Tests for the httpx fetcher.
"""

import asyncio

import httpx
import pytest

from offline_gateway.entities import GatewayRequest
from offline_gateway.errors import NetworkError
from offline_gateway.protocols import Fetcher
from offline_gateway.repositories import HttpxFetcher


def fetch(handler, request: GatewayRequest):
    fetcher = HttpxFetcher.create(transport=httpx.MockTransport(handler))

    async def scenario():
        try:
            return await fetcher.fetch(request)
        finally:
            await fetcher.close()

    return asyncio.run(scenario())


def test_satisfies_protocol():
    assert isinstance(HttpxFetcher(), Fetcher)


def test_buffers_response():
    def handler(request):
        return httpx.Response(201, content=b"\x00\x01binary", headers={"X-Test": "yes"})

    response = fetch(handler, GatewayRequest(url="http://survey.test/api/responses", method="post"))

    assert response.status == 201
    assert response.ok is True
    assert response.body == b"\x00\x01binary"
    assert response.headers["x-test"] == "yes"
    assert response.url == "http://survey.test/api/responses"


def test_error_status_is_not_a_failure():
    response = fetch(lambda request: httpx.Response(503), GatewayRequest(url="http://survey.test/"))

    assert response.status == 503
    assert response.ok is False


def test_transport_error_becomes_network_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(NetworkError) as exc_info:
        fetch(handler, GatewayRequest(url="http://survey.test/"))

    assert exc_info.value.url == "http://survey.test/"


def test_forwards_method_body_and_end_to_end_headers():
    seen = {}

    def handler(request):
        seen["method"] = request.method
        seen["body"] = request.content
        seen["headers"] = request.headers
        return httpx.Response(200)

    fetch(
        handler,
        GatewayRequest(
            url="http://survey.test/api/responses",
            method="POST",
            body=b'{"q1": "wool"}',
            headers={"Content-Type": "application/json", "Connection": "close", "Host": "proxy.local"},
        ),
    )

    assert seen["method"] == "POST"
    assert seen["body"] == b'{"q1": "wool"}'
    assert seen["headers"]["content-type"] == "application/json"
    assert seen["headers"]["host"] == "survey.test"
    assert seen["headers"].get("connection") != "close"
