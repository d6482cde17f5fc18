"""Public async client entrypoint."""

from __future__ import annotations

from types import TracebackType

from .config import GitHubClientConfig
from .core.async_transport import AsyncTransport
from .core.errors import ClientClosedError, MalformedRequestError
from .notifications.service import NotificationsService


def validate_client_config(config: GitHubClientConfig) -> None:
    try:
        config.validate()
    except ValueError as exc:
        raise MalformedRequestError(str(exc)) from exc


class AsyncGitHubClient:
    """Public async GitHub API client."""

    def __init__(
        self,
        *,
        config: GitHubClientConfig | None = None,
        transport: AsyncTransport | None = None,
        notifications_service: NotificationsService | None = None,
    ) -> None:
        self._config = config or GitHubClientConfig()
        validate_client_config(self._config)

        self._transport = transport or AsyncTransport(self._config)
        self._notifications = notifications_service or NotificationsService(self._transport)
        self._closed = False

    @property
    def config(self) -> GitHubClientConfig:
        return self._config

    @property
    def notifications(self) -> NotificationsService:
        self._ensure_open()
        return self._notifications

    def _ensure_open(self) -> None:
        if self._closed:
            raise ClientClosedError("AsyncGitHubClient is already closed")

    async def close(self) -> None:
        if self._closed:
            return
        await self._transport.close()
        self._closed = True

    async def __aenter__(self) -> "AsyncGitHubClient":
        self._ensure_open()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        await self.close()
        return False


__all__ = [
    "validate_client_config",
    "AsyncGitHubClient",
]
