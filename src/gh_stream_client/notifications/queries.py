"""Request models for notification endpoints."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone


def format_timestamp(value: datetime) -> str:
    """ISO 8601 in UTC as the API expects (naive values are taken as UTC)."""

    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


@dataclass(slots=True, frozen=True)
class NotificationsRequest:
    """Filters for notification listings.

    ``include_read`` maps to the API's ``all`` flag.
    """

    include_read: bool = False
    participating: bool = False
    since: datetime | None = None
    before: datetime | None = None

    def __post_init__(self) -> None:
        for name in ("include_read", "participating"):
            if not isinstance(getattr(self, name), bool):
                raise TypeError(f"{name} must be bool")
        for name in ("since", "before"):
            value = getattr(self, name)
            if value is not None and not isinstance(value, datetime):
                raise TypeError(f"{name} must be datetime")

    def to_params(self) -> dict[str, str]:
        params: dict[str, str] = {}
        if self.include_read:
            params["all"] = "true"
        if self.participating:
            params["participating"] = "true"
        if self.since is not None:
            params["since"] = format_timestamp(self.since)
        if self.before is not None:
            params["before"] = format_timestamp(self.before)
        return params


@dataclass(slots=True, frozen=True)
class MarkAsReadRequest:
    last_read_at: datetime | None = None

    def to_body(self) -> dict[str, str]:
        if self.last_read_at is None:
            return {}
        return {"last_read_at": format_timestamp(self.last_read_at)}


@dataclass(slots=True, frozen=True)
class NewThreadSubscription:
    subscribed: bool = True
    ignored: bool = False

    def to_body(self) -> dict[str, bool]:
        return {"subscribed": self.subscribed, "ignored": self.ignored}


__all__ = [
    "format_timestamp",
    "NotificationsRequest",
    "MarkAsReadRequest",
    "NewThreadSubscription",
]
