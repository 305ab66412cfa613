from .client import LembaasClient
from .config_types import ClientConfig
from .envelope import Envelope
from .errors import (
    ApiError,
    AuthError,
    ConfigError,
    DecodeError,
    LembaasClientError,
    NotFoundError,
    TransportError,
    UnexpectedStatusError,
)
from .transport import AsyncRestClient, RestClient

__all__ = [
    "LembaasClient",
    "ClientConfig",
    "Envelope",
    "RestClient",
    "AsyncRestClient",
    "LembaasClientError",
    "ApiError",
    "AuthError",
    "ConfigError",
    "DecodeError",
    "NotFoundError",
    "TransportError",
    "UnexpectedStatusError",
]
