from __future__ import annotations

from .endpoints import Endpoint
from .models import AppInfo, AppToken, TokenRequest
from .transport import RestClient

GET_TOKEN = Endpoint("POST", "/token", decode=AppToken.from_dict, authenticated=False)
GET_APP = Endpoint("GET", "/app", decode=AppInfo.from_dict)


class AppClient:
    def __init__(self, rest: RestClient):
        self._rest = rest

    def get_auth_token(self, client_id: str, client_secret: str) -> AppToken:
        """Exchange app credentials for a bearer token. Does not need a token itself."""
        body = TokenRequest(client_id=client_id, client_secret=client_secret)
        return self._rest.call(GET_TOKEN, body=body).payload

    def get_app_info(self) -> AppInfo:
        return self._rest.call(GET_APP).payload
