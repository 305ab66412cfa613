from __future__ import annotations

from .endpoints import Endpoint
from .extract import ErrorExtractor
from .models import AppRole, AppRoleList, CreateRoleRequest
from .transport import RestClient

# Role responses report failures in "message" as well as "error".
ROLE_ERRORS = ErrorExtractor("error", "message", "Error.message")

LIST_ROLES = Endpoint("GET", "/roles", decode=AppRoleList.from_dict, error_extractor=ROLE_ERRORS)
CREATE_ROLE = Endpoint(
    "POST", "/roles/create", expected_status=201, decode=AppRole.from_dict, error_extractor=ROLE_ERRORS
)
# Older API builds answer 200 with a JSON body, newer ones 204.
DELETE_ROLE = Endpoint("DELETE", "/roles/{role_id}/delete", expected_status=(200, 204), error_extractor=ROLE_ERRORS)


class RoleClient:
    def __init__(self, rest: RestClient):
        self._rest = rest

    def list_roles(self) -> AppRoleList:
        return self._rest.call(LIST_ROLES).payload

    def create_role(self, role: CreateRoleRequest) -> AppRole:
        return self._rest.call(CREATE_ROLE, body=role).payload

    def delete_role(self, role_id: int) -> None:
        self._rest.call(DELETE_ROLE, role_id=int(role_id))
