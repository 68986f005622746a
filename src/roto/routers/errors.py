"""Translation of core errors into HTTP errors."""

from fastapi import HTTPException, status

from roto.api.base import NetworkError, user_message
from roto.storage import StorageError


def network_error(error: NetworkError) -> HTTPException:
    """Backend failures keep their kind so the client can pick its own wording."""
    return HTTPException(
        status_code=status.HTTP_502_BAD_GATEWAY,
        detail={
            "kind": error.kind.value,
            "message": user_message(error),
            "status_code": error.status_code,
        },
    )


def storage_error(error: StorageError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail={
            "kind": "storage_error",
            "message": "Could not access saved data on this device",
            "operation": error.operation,
        },
    )
