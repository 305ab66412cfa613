from __future__ import annotations

from dataclasses import dataclass, replace

from .errors import ConfigError

DEFAULT_TIMEOUT_S = 30.0
DEFAULT_USER_AGENT = "lembaas-client/0.3.0"


@dataclass(frozen=True)
class ClientConfig:
    base_url: str
    api_version: int = 1
    token: str | None = None
    timeout_s: float = DEFAULT_TIMEOUT_S
    user_agent: str = DEFAULT_USER_AGENT

    def __post_init__(self) -> None:
        base = (self.base_url or "").strip()
        if not base:
            raise ConfigError("base_url is required")
        lowered = base.lower()
        if not (lowered.startswith("http://") or lowered.startswith("https://")):
            raise ConfigError(f"base_url must start with http:// or https://, got {base!r}")
        if isinstance(self.api_version, bool) or not isinstance(self.api_version, int) or self.api_version < 1:
            raise ConfigError(f"api_version must be a positive integer, got {self.api_version!r}")
        if self.timeout_s <= 0:
            raise ConfigError(f"timeout_s must be positive, got {self.timeout_s!r}")

    @property
    def api_base_url(self) -> str:
        return f"{self.base_url.strip().rstrip('/')}/api/v{self.api_version}"

    @property
    def has_token(self) -> bool:
        return bool((self.token or "").strip())

    def with_token(self, token: str | None) -> ClientConfig:
        return replace(self, token=token)
