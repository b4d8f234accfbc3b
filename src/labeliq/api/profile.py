"""Health profile endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, HTTPException, Request, status

from labeliq.api.auth import current_user_id, require_api_token
from labeliq.api.schemas import ProfileUpdate, serialize_profile

if TYPE_CHECKING:
    from labeliq.containers import AppContainer

router = APIRouter(
    prefix="/api/profile", tags=["profile"], dependencies=[Depends(require_api_token)]
)


@router.get("/me")
async def get_my_profile(
    request: Request,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Return the caller's health profile."""
    container: AppContainer = request.app.state.container
    profile = container.profile_service.get_profile(user_id)
    if profile is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found"
        )
    return serialize_profile(profile)


@router.put("/me")
async def update_my_profile(
    body: ProfileUpdate,
    request: Request,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Replace the caller's health profile."""
    container: AppContainer = request.app.state.container
    profile = container.profile_service.update_profile(user_id, body.model_dump())
    return serialize_profile(profile)
