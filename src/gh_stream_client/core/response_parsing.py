"""Response body parsing helpers shared by page and resource fetchers."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Protocol, TypeVar

from .errors import MalformedResponseError, classify_http_error
from .models import RequestDescriptor, ResponseMetadata

T = TypeVar("T")


class JsonPayloadResponse(Protocol):
    status_code: int
    headers: Mapping[str, str]
    content: bytes

    def json(self) -> object: ...


def read_metadata(response: JsonPayloadResponse) -> ResponseMetadata:
    return ResponseMetadata.from_response(response.status_code, response.headers)


def parse_json_payload(
    response: JsonPayloadResponse,
    *,
    descriptor: RequestDescriptor | None = None,
) -> object:
    """Parse response JSON and map parse failures to MalformedResponseError."""

    try:
        return response.json()
    except Exception as exc:
        raise MalformedResponseError(
            "response body is not valid JSON",
            descriptor=descriptor,
            http_status=response.status_code,
        ) from exc


def raise_for_api_status(
    response: JsonPayloadResponse,
    metadata: ResponseMetadata,
    *,
    descriptor: RequestDescriptor | None = None,
) -> None:
    if 200 <= metadata.status_code < 300:
        return
    # Error bodies are best effort; a missing or broken body must not hide the status.
    payload: object = None
    if response.content:
        try:
            payload = response.json()
        except ValueError:
            payload = None
    error = classify_http_error(metadata, payload=payload, descriptor=descriptor)
    if error is not None:
        raise error


def decode_items(
    payload: object,
    decode_item: Callable[[object], T],
    *,
    descriptor: RequestDescriptor | None = None,
    http_status: int | None = None,
) -> list[T]:
    if not isinstance(payload, list):
        raise MalformedResponseError(
            "response JSON root must be an array",
            descriptor=descriptor,
            http_status=http_status,
        )
    return [
        decode_one(raw, decode_item, descriptor=descriptor, http_status=http_status)
        for raw in payload
    ]


def decode_one(
    payload: object,
    decode_item: Callable[[object], T],
    *,
    descriptor: RequestDescriptor | None = None,
    http_status: int | None = None,
) -> T:
    try:
        return decode_item(payload)
    except MalformedResponseError:
        raise
    except Exception as exc:
        raise MalformedResponseError(
            f"could not decode response item: {exc}",
            descriptor=descriptor,
            http_status=http_status,
        ) from exc


__all__ = [
    "JsonPayloadResponse",
    "read_metadata",
    "parse_json_payload",
    "raise_for_api_status",
    "decode_items",
    "decode_one",
]
