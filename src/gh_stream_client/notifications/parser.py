"""Parsers from GitHub JSON payloads into notification models, and back."""

from __future__ import annotations

from collections.abc import Mapping

from ..core.errors import MalformedResponseError
from .models import Notification, NotificationRepository, NotificationSubject, ThreadSubscription

JsonObject = dict[str, object]


def _as_object(payload: object, what: str) -> Mapping[str, object]:
    if not isinstance(payload, Mapping):
        raise MalformedResponseError(f"{what} must be a JSON object")
    return payload


def _required_text(payload: Mapping[str, object], key: str, what: str) -> str:
    value = payload.get(key)
    if value is None:
        raise MalformedResponseError(f"{what}.{key} is missing")
    return str(value)


def _optional_text(value: object) -> str | None:
    if value is None:
        return None
    return str(value)


def _as_bool(value: object, key: str) -> bool:
    if not isinstance(value, bool):
        raise MalformedResponseError(f"{key} must be a boolean")
    return value


def parse_repository(payload: object) -> NotificationRepository:
    obj = _as_object(payload, "repository")
    raw_id = obj.get("id")
    if isinstance(raw_id, bool) or not isinstance(raw_id, int):
        raise MalformedResponseError("repository.id must be an integer")
    owner = obj.get("owner")
    owner_login = None
    if owner is not None:
        owner_login = _optional_text(_as_object(owner, "repository.owner").get("login"))
    return NotificationRepository(
        id=raw_id,
        name=_required_text(obj, "name", "repository"),
        full_name=_required_text(obj, "full_name", "repository"),
        owner_login=owner_login,
        private=_as_bool(obj.get("private", False), "repository.private"),
        html_url=_optional_text(obj.get("html_url")),
    )


def parse_subject(payload: object) -> NotificationSubject:
    obj = _as_object(payload, "subject")
    return NotificationSubject(
        title=_required_text(obj, "title", "subject"),
        type=_required_text(obj, "type", "subject"),
        url=_optional_text(obj.get("url")),
        latest_comment_url=_optional_text(obj.get("latest_comment_url")),
    )


def parse_notification(payload: object) -> Notification:
    obj = _as_object(payload, "notification")
    return Notification(
        id=_required_text(obj, "id", "notification"),
        repository=parse_repository(obj.get("repository")),
        subject=parse_subject(obj.get("subject")),
        reason=_required_text(obj, "reason", "notification"),
        unread=_as_bool(obj.get("unread"), "notification.unread"),
        updated_at=_required_text(obj, "updated_at", "notification"),
        last_read_at=_optional_text(obj.get("last_read_at")),
        url=_optional_text(obj.get("url")),
        subscription_url=_optional_text(obj.get("subscription_url")),
    )


def parse_thread_subscription(payload: object) -> ThreadSubscription:
    obj = _as_object(payload, "subscription")
    return ThreadSubscription(
        subscribed=_as_bool(obj.get("subscribed"), "subscription.subscribed"),
        ignored=_as_bool(obj.get("ignored"), "subscription.ignored"),
        reason=_optional_text(obj.get("reason")),
        created_at=_optional_text(obj.get("created_at")),
        url=_optional_text(obj.get("url")),
        thread_url=_optional_text(obj.get("thread_url")),
    )


def repository_to_payload(repository: NotificationRepository) -> JsonObject:
    payload: JsonObject = {
        "id": repository.id,
        "name": repository.name,
        "full_name": repository.full_name,
        "private": repository.private,
        "html_url": repository.html_url,
    }
    if repository.owner_login is not None:
        payload["owner"] = {"login": repository.owner_login}
    return payload


def notification_to_payload(notification: Notification) -> JsonObject:
    """Inverse of :func:`parse_notification`, used to build fixtures."""

    return {
        "id": notification.id,
        "repository": repository_to_payload(notification.repository),
        "subject": {
            "title": notification.subject.title,
            "type": notification.subject.type,
            "url": notification.subject.url,
            "latest_comment_url": notification.subject.latest_comment_url,
        },
        "reason": notification.reason,
        "unread": notification.unread,
        "updated_at": notification.updated_at,
        "last_read_at": notification.last_read_at,
        "url": notification.url,
        "subscription_url": notification.subscription_url,
    }


__all__ = [
    "parse_repository",
    "parse_subject",
    "parse_notification",
    "parse_thread_subscription",
    "repository_to_payload",
    "notification_to_payload",
]
