from __future__ import annotations

import httpx

from .app_config import ConfigClient
from .apps import AppClient
from .config_types import ClientConfig
from .errors import ApiError
from .roles import RoleClient
from .transport import RestClient
from .users import UserClient


class LembaasClient:
    """All resource clients sharing one :class:`RestClient`."""

    def __init__(self, cfg: ClientConfig, *, transport: httpx.BaseTransport | None = None):
        self._transport = transport
        self._rest = RestClient(cfg, transport=transport)
        self.apps = AppClient(self._rest)
        self.config = ConfigClient(self._rest)
        self.roles = RoleClient(self._rest)
        self.users = UserClient(self._rest)

    @property
    def rest(self) -> RestClient:
        return self._rest

    @property
    def client_config(self) -> ClientConfig:
        return self._rest.config

    def close(self) -> None:
        self._rest.close()

    def __enter__(self) -> LembaasClient:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def authenticate(self, client_id: str, client_secret: str) -> LembaasClient:
        """Exchange app credentials once; returns a new client carrying the token.

        The new client owns its own connection pool and this one stays open:
        close both (or use each as a context manager) when done.
        """
        token = self.apps.get_auth_token(client_id, client_secret)
        if token is None or not token.token:
            raise ApiError("token exchange returned no token", 200)
        return LembaasClient(self.client_config.with_token(token.token), transport=self._transport)
