"""Request descriptors for notification endpoints."""

from __future__ import annotations

from collections.abc import Mapping

from ..core.models import RequestDescriptor


def _validate_thread_id(notification_id: int) -> None:
    if isinstance(notification_id, bool) or not isinstance(notification_id, int):
        raise TypeError("notification_id must be int")
    if notification_id < 1:
        raise ValueError("notification_id must be >= 1")


def repository_path(
    owner: str | None,
    name: str | None,
    repository_id: int | None,
) -> tuple[str, dict[str, str | int]]:
    """Path template and parameters for owner/name or numeric repository forms."""

    if repository_id is not None:
        if owner is not None or name is not None:
            raise ValueError("pass either owner/name or repository_id, not both")
        if isinstance(repository_id, bool) or not isinstance(repository_id, int):
            raise TypeError("repository_id must be int")
        if repository_id < 1:
            raise ValueError("repository_id must be >= 1")
        return "repositories/{repository_id}", {"repository_id": repository_id}
    if not owner:
        raise ValueError("owner must not be empty")
    if not name:
        raise ValueError("name must not be empty")
    return "repos/{owner}/{name}", {"owner": owner, "name": name}


def notifications_descriptor(
    *,
    query: Mapping[str, str] | None = None,
    method: str = "GET",
    body: object = None,
) -> RequestDescriptor:
    return RequestDescriptor("notifications", query=query or {}, method=method, json_body=body)


def repository_notifications_descriptor(
    owner: str | None,
    name: str | None,
    repository_id: int | None,
    *,
    query: Mapping[str, str] | None = None,
    method: str = "GET",
    body: object = None,
) -> RequestDescriptor:
    base, params = repository_path(owner, name, repository_id)
    return RequestDescriptor(
        f"{base}/notifications",
        path_params=params,
        query=query or {},
        method=method,
        json_body=body,
    )


def thread_descriptor(notification_id: int, *, method: str = "GET") -> RequestDescriptor:
    _validate_thread_id(notification_id)
    return RequestDescriptor(
        "notifications/threads/{thread_id}",
        path_params={"thread_id": notification_id},
        method=method,
    )


def thread_subscription_descriptor(
    notification_id: int,
    *,
    method: str = "GET",
    body: object = None,
) -> RequestDescriptor:
    _validate_thread_id(notification_id)
    return RequestDescriptor(
        "notifications/threads/{thread_id}/subscription",
        path_params={"thread_id": notification_id},
        method=method,
        json_body=body,
    )


__all__ = [
    "repository_path",
    "notifications_descriptor",
    "repository_notifications_descriptor",
    "thread_descriptor",
    "thread_subscription_descriptor",
]
