"""Client and error types for the recipe generation backend."""

from roto.api.base import (
    DecodingError,
    ErrorKind,
    InvalidResponseError,
    InvalidURLError,
    NetworkError,
    ServerError,
    UnknownNetworkError,
    user_message,
)
from roto.api.client import APIClient
from roto.api.device import DeviceIdentity

__all__ = [
    "APIClient",
    "DecodingError",
    "DeviceIdentity",
    "ErrorKind",
    "InvalidResponseError",
    "InvalidURLError",
    "NetworkError",
    "ServerError",
    "UnknownNetworkError",
    "user_message",
]
