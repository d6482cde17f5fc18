"""Notification domain models."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class NotificationRepository:
    id: int
    name: str
    full_name: str
    owner_login: str | None
    private: bool
    html_url: str | None


@dataclass(slots=True, frozen=True)
class NotificationSubject:
    title: str
    type: str
    url: str | None
    latest_comment_url: str | None


@dataclass(slots=True, frozen=True)
class Notification:
    id: str
    repository: NotificationRepository
    subject: NotificationSubject
    reason: str
    unread: bool
    updated_at: str
    last_read_at: str | None
    url: str | None
    subscription_url: str | None


@dataclass(slots=True, frozen=True)
class ThreadSubscription:
    subscribed: bool
    ignored: bool
    reason: str | None
    created_at: str | None
    url: str | None
    thread_url: str | None


__all__ = [
    "NotificationRepository",
    "NotificationSubject",
    "Notification",
    "ThreadSubscription",
]
