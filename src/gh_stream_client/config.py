"""Client configuration."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True, frozen=True)
class TransportConfig:
    """Transport-related settings."""

    timeout_connect_seconds: float = 5.0
    timeout_read_seconds: float = 30.0
    timeout_write_seconds: float = 30.0
    timeout_pool_seconds: float = 5.0

    def validate(self) -> None:
        for field_name in (
            "timeout_connect_seconds",
            "timeout_read_seconds",
            "timeout_write_seconds",
            "timeout_pool_seconds",
        ):
            if getattr(self, field_name) <= 0:
                raise ValueError(f"transport.{field_name} must be > 0")


@dataclass(slots=True, frozen=True)
class GitHubClientConfig:
    """Runtime configuration for the GitHub client."""

    base_url: str = "https://api.github.com"
    user_agent: str = "gh-stream-client/0.1.0"
    token: str | None = field(default=None, repr=False)
    accept: str = "application/vnd.github+json"
    api_version: str | None = "2022-11-28"

    transport: TransportConfig = field(default_factory=TransportConfig)

    def validate(self) -> None:
        if not self.base_url:
            raise ValueError("base_url must not be empty")
        if not self.base_url.startswith(("http://", "https://")):
            raise ValueError("base_url must be an http(s) URL")
        if not self.user_agent:
            raise ValueError("user_agent must not be empty")
        if self.token is not None and self.token.strip() == "":
            raise ValueError("token must not be blank")
        if not self.accept:
            raise ValueError("accept must not be empty")
        self.transport.validate()


__all__ = [
    "TransportConfig",
    "GitHubClientConfig",
]
