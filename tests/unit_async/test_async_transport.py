from __future__ import annotations

import httpx
import pytest

from gh_stream_client.core.async_transport import AsyncTransport
from gh_stream_client.core.errors import (
    ClientClosedError,
    ErrorCategory,
    MalformedRequestError,
    TransportError,
)
from gh_stream_client.core.models import RequestDescriptor
from gh_stream_client.core.transport_shared import build_async_http_client
from tests.shared.transport import AsyncSequencedClient, build_config, build_transport, json_response


@pytest.mark.asyncio
async def test_send_forwards_descriptor_to_client():
    client = AsyncSequencedClient([json_response(205)])
    transport = build_transport(client)
    descriptor = RequestDescriptor(
        "/repos/{owner}/{name}/notifications",
        path_params={"owner": "octokit", "name": "octokit.net"},
        method="PUT",
        accept="application/vnd.github.raw+json",
        json_body={"last_read_at": "2024-01-01T00:00:00Z"},
    )

    response = await transport.send(descriptor)

    assert response.status_code == 205
    [call] = client.calls
    assert call.method == "PUT"
    assert call.url == "repos/octokit/octokit.net/notifications"
    assert call.headers == {"Accept": "application/vnd.github.raw+json"}
    assert call.json == {"last_read_at": "2024-01-01T00:00:00Z"}


@pytest.mark.asyncio
async def test_send_returns_error_statuses_unclassified():
    client = AsyncSequencedClient([json_response(404, {"message": "Not Found"})])
    transport = build_transport(client)
    response = await transport.send(RequestDescriptor("notifications"))
    assert response.status_code == 404


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "failure",
    [RuntimeError("network down"), httpx.ReadTimeout("timed out"), httpx.ConnectError("refused")],
    ids=["runtime", "timeout", "connect"],
)
async def test_send_maps_client_failures_to_transient_error(failure):
    client = AsyncSequencedClient([failure])
    transport = build_transport(client)
    descriptor = RequestDescriptor("notifications")

    with pytest.raises(TransportError) as excinfo:
        await transport.send(descriptor)

    assert excinfo.value.category is ErrorCategory.TRANSIENT
    assert excinfo.value.descriptor is descriptor
    assert excinfo.value.__cause__ is failure


@pytest.mark.asyncio
async def test_send_rejects_malformed_descriptor_without_network_call():
    client = AsyncSequencedClient([json_response(200, [])])
    transport = build_transport(client)
    with pytest.raises(MalformedRequestError):
        await transport.send(RequestDescriptor("repos/{owner}/notifications"))
    assert client.calls == []


@pytest.mark.asyncio
async def test_send_after_close_raises_client_closed():
    client = AsyncSequencedClient([])
    transport = build_transport(client)
    await transport.close()
    await transport.close()
    with pytest.raises(ClientClosedError):
        await transport.send(RequestDescriptor("notifications"))
    # injected clients are owned by the caller
    assert client.closed is False
    assert transport.closed is True


@pytest.mark.asyncio
async def test_async_transport_can_initialize_and_close_with_real_httpx_client():
    transport = AsyncTransport(build_config(token="abc"))
    await transport.close()
    assert transport.closed is True


@pytest.mark.asyncio
async def test_send_follows_redirect_for_renamed_repository():
    seen: list[str] = []

    def _handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.url.path)
        if request.url.path == "/repos/old/name/notifications":
            return httpx.Response(
                301,
                headers={"Location": "https://api.github.com/repos/new/name/notifications"},
            )
        return httpx.Response(200, json=[])

    config = build_config(token="abc")
    http_client = build_async_http_client(config, transport=httpx.MockTransport(_handler))
    transport = AsyncTransport(config, client=http_client)

    response = await transport.send(RequestDescriptor("repos/old/name/notifications"))

    assert response.status_code == 200
    assert seen == ["/repos/old/name/notifications", "/repos/new/name/notifications"]
    await http_client.aclose()


@pytest.mark.asyncio
async def test_send_rejects_absolute_url_on_foreign_host_without_network_call():
    client = AsyncSequencedClient([json_response(200, [])])
    transport = build_transport(client, token="abc")

    with pytest.raises(MalformedRequestError):
        await transport.send(RequestDescriptor("https://evil.example.com/notifications"))

    assert client.calls == []


@pytest.mark.asyncio
async def test_send_accepts_absolute_url_on_api_host():
    client = AsyncSequencedClient([json_response(200, [])])
    transport = build_transport(client)
    await transport.send(RequestDescriptor("https://API.github.com/notifications"))
    assert client.calls[0].url == "https://API.github.com/notifications"
