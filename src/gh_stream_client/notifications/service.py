"""Notification endpoints as lazy streams."""

from __future__ import annotations

from ..core.async_transport import AsyncTransport
from ..core.page_fetcher import PageFetcher
from ..core.pagination import PaginationOptions
from ..core.resources import ResourceFetcher
from ..core.sequencer import PaginatedSequencer
from ..core.single_result import SingleResultAdapter
from ..core.stream import Stream
from .models import Notification, ThreadSubscription
from .parser import parse_notification, parse_thread_subscription
from .queries import MarkAsReadRequest, NewThreadSubscription, NotificationsRequest
from .urls import (
    notifications_descriptor,
    repository_notifications_descriptor,
    thread_descriptor,
    thread_subscription_descriptor,
)


class NotificationsService:
    """Activity notifications API.

    Every method returns a :class:`Stream`; no request is sent until the
    stream is consumed, and each consumption sends its own requests.
    """

    def __init__(self, transport: AsyncTransport) -> None:
        self._pages = PaginatedSequencer(PageFetcher(transport, parse_notification))
        self._resources = ResourceFetcher(transport)

    def get_all_for_current(
        self,
        request: NotificationsRequest | None = None,
        options: PaginationOptions | None = None,
    ) -> Stream[Notification]:
        query = request.to_params() if request is not None else None
        return self._pages.open(notifications_descriptor(query=query), options)

    def get_all_for_repository(
        self,
        owner: str | None = None,
        name: str | None = None,
        *,
        repository_id: int | None = None,
        request: NotificationsRequest | None = None,
        options: PaginationOptions | None = None,
    ) -> Stream[Notification]:
        query = request.to_params() if request is not None else None
        descriptor = repository_notifications_descriptor(owner, name, repository_id, query=query)
        return self._pages.open(descriptor, options)

    def get(self, notification_id: int) -> Stream[Notification]:
        descriptor = thread_descriptor(notification_id)
        return SingleResultAdapter.open(
            lambda: self._resources.fetch_object(descriptor, parse_notification),
            name=descriptor.describe(),
        )

    def mark_as_read(self, request: MarkAsReadRequest | None = None) -> Stream[None]:
        body = request.to_body() if request is not None else None
        descriptor = notifications_descriptor(method="PUT", body=body)
        return SingleResultAdapter.open(
            lambda: self._resources.execute(descriptor),
            name=descriptor.describe(),
        )

    def mark_as_read_for_repository(
        self,
        owner: str | None = None,
        name: str | None = None,
        *,
        repository_id: int | None = None,
        request: MarkAsReadRequest | None = None,
    ) -> Stream[None]:
        body = request.to_body() if request is not None else None
        descriptor = repository_notifications_descriptor(
            owner,
            name,
            repository_id,
            method="PUT",
            body=body,
        )
        return SingleResultAdapter.open(
            lambda: self._resources.execute(descriptor),
            name=descriptor.describe(),
        )

    def mark_thread_as_read(self, notification_id: int) -> Stream[None]:
        descriptor = thread_descriptor(notification_id, method="PATCH")
        return SingleResultAdapter.open(
            lambda: self._resources.execute(descriptor),
            name=descriptor.describe(),
        )

    def get_thread_subscription(self, notification_id: int) -> Stream[ThreadSubscription]:
        descriptor = thread_subscription_descriptor(notification_id)
        return SingleResultAdapter.open(
            lambda: self._resources.fetch_object(descriptor, parse_thread_subscription),
            name=descriptor.describe(),
        )

    def set_thread_subscription(
        self,
        notification_id: int,
        subscription: NewThreadSubscription,
    ) -> Stream[ThreadSubscription]:
        if not isinstance(subscription, NewThreadSubscription):
            raise TypeError("subscription must be NewThreadSubscription")
        descriptor = thread_subscription_descriptor(
            notification_id,
            method="PUT",
            body=subscription.to_body(),
        )
        return SingleResultAdapter.open(
            lambda: self._resources.fetch_object(descriptor, parse_thread_subscription),
            name=descriptor.describe(),
        )

    def delete_thread_subscription(self, notification_id: int) -> Stream[None]:
        descriptor = thread_subscription_descriptor(notification_id, method="DELETE")
        return SingleResultAdapter.open(
            lambda: self._resources.execute(descriptor),
            name=descriptor.describe(),
        )


__all__ = [
    "NotificationsService",
]
