from __future__ import annotations

from .endpoints import Endpoint
from .models import AppConfigValue, AppConfigValueList, SetConfigValueRequest
from .transport import RestClient

LIST_VALUES = Endpoint("GET", "/config/all", decode=AppConfigValueList.from_dict)
GET_VALUE = Endpoint("GET", "/config/{key}/get", decode=AppConfigValue.from_dict, lookup=True)
SET_VALUE = Endpoint("POST", "/config/set", expected_status=201, decode=AppConfigValue.from_dict)
# 204 with an empty body; there is nothing to inspect for an error field.
DELETE_VALUE = Endpoint("DELETE", "/config/{key}/delete", expected_status=204, check_error_field=False)


class ConfigClient:
    """Custom key/value settings stored per application."""

    def __init__(self, rest: RestClient):
        self._rest = rest

    def list_values(self) -> AppConfigValueList:
        return self._rest.call(LIST_VALUES).payload

    def get_value(self, key: str) -> AppConfigValue:
        return self._rest.call(GET_VALUE, key=key).payload

    def set_value(self, key: str, value: str) -> AppConfigValue:
        body = SetConfigValueRequest(config_key=key, config_value=value)
        return self._rest.call(SET_VALUE, body=body).payload

    def delete_value(self, key: str) -> None:
        self._rest.call(DELETE_VALUE, key=key)
