"""API routes for the user profile."""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from roto.dependencies import get_profile_state
from roto.logging_config import get_logger
from roto.profile.state import ProfileState, ProfileStateCoordinator
from roto.routers.errors import storage_error
from roto.schemas import ProfileData
from roto.storage import StorageError

logger = get_logger(__name__)

router = APIRouter(prefix="/profile", tags=["profile"])


class ProfileResponse(BaseModel):
    """Cached profile plus a warning when the last storage access failed."""

    profile: ProfileData
    state: ProfileState
    warning: str | None = None


def _warning(error: StorageError | None) -> str | None:
    if error is None:
        return None
    if error.operation == "save_profile":
        return "Profile could not be saved; showing the last saved profile"
    return "Saved profile could not be read; showing an empty profile"


def _response(profile_state: ProfileStateCoordinator) -> ProfileResponse:
    warning = _warning(profile_state.last_error)
    return ProfileResponse(
        profile=profile_state.snapshot, state=profile_state.state, warning=warning
    )


@router.get("", response_model=ProfileResponse)
def get_profile(
    profile_state: ProfileStateCoordinator = Depends(get_profile_state),
) -> ProfileResponse:
    """Current cached profile."""
    return _response(profile_state)


@router.put("", response_model=ProfileResponse)
def save_profile(
    profile: ProfileData,
    profile_state: ProfileStateCoordinator = Depends(get_profile_state),
) -> ProfileResponse:
    """Replace the saved profile."""
    try:
        profile_state.save(profile.base_ingredients, profile.dislikes, profile.diet_categories)
    except StorageError as e:
        raise storage_error(e)
    return _response(profile_state)


@router.post("/refresh", response_model=ProfileResponse)
def refresh_profile(
    profile_state: ProfileStateCoordinator = Depends(get_profile_state),
) -> ProfileResponse:
    """Reload the cached profile from storage."""
    profile_state.refresh()
    return _response(profile_state)
