from __future__ import annotations

import gh_stream_client
import gh_stream_client.notifications as notifications


def test_notifications_package_exports_public_models_and_queries_only():
    expected = {
        "NotificationsRequest",
        "MarkAsReadRequest",
        "NewThreadSubscription",
        "Notification",
        "NotificationRepository",
        "NotificationSubject",
        "ThreadSubscription",
    }
    assert expected.issubset(set(notifications.__all__))
    assert "NotificationsService" not in notifications.__all__
    assert not hasattr(notifications, "NotificationsService")


def test_top_level_exports_resolve():
    for name in gh_stream_client.__all__:
        assert getattr(gh_stream_client, name) is not None
