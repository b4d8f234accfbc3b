"""Food log, daily report and scoring endpoints."""

from __future__ import annotations

from datetime import UTC, date, datetime
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status

from labeliq.api.auth import current_user_id, require_api_token
from labeliq.api.schemas import (
    FoodLogCreate,
    FoodLogUpdate,
    ScoreRequest,
    serialize_entry,
    serialize_report,
)
from labeliq.domain.scoring import HealthGoal  # noqa: TC001
from labeliq.services.scoring import calorie_goal, compute_tdee, score_food

if TYPE_CHECKING:
    from labeliq.containers import AppContainer

router = APIRouter(
    prefix="/api", tags=["logs"], dependencies=[Depends(require_api_token)]
)


def _entry_not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND, detail="Log entry not found"
    )


@router.post("/logs", status_code=status.HTTP_201_CREATED)
async def create_log(
    body: FoodLogCreate,
    request: Request,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Log a food with per-serving nutrients."""
    container: AppContainer = request.app.state.container
    entry = container.food_log_service.log_food(
        user_id,
        body.description,
        body.nutrients.to_domain(),
        body.servings,
        fdc_id=body.fdc_id,
        brand_name=body.brand_name,
        category=body.category,
        serving_size=body.serving_size,
        serving_unit=body.serving_unit,
        notes=body.notes,
        created_at=body.created_at,
    )
    return serialize_entry(entry)


@router.get("/logs")
async def list_logs(
    request: Request,
    day: date | None = Query(default=None, alias="date"),
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Return entries for a day (UTC), newest first."""
    container: AppContainer = request.app.state.container
    resolved_day = day or datetime.now(tz=UTC).date()
    entries = container.food_log_service.list_for_date(user_id, resolved_day)
    return {
        "date": resolved_day.isoformat(),
        "entries": [serialize_entry(entry) for entry in entries],
    }


@router.get("/logs/{entry_id}")
async def get_log(
    entry_id: UUID,
    request: Request,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Return one log entry."""
    container: AppContainer = request.app.state.container
    entry = container.food_log_service.get_entry(user_id, entry_id)
    if entry is None:
        raise _entry_not_found()
    return serialize_entry(entry)


@router.patch("/logs/{entry_id}")
async def update_log(
    entry_id: UUID,
    body: FoodLogUpdate,
    request: Request,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Change the servings eaten and notes of an entry."""
    container: AppContainer = request.app.state.container
    entry = container.food_log_service.update_entry(
        user_id, entry_id, body.servings, body.notes
    )
    if entry is None:
        raise _entry_not_found()
    return serialize_entry(entry)


@router.delete("/logs/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_log(
    entry_id: UUID,
    request: Request,
    user_id: UUID = Depends(current_user_id),
) -> Response:
    """Delete an entry."""
    container: AppContainer = request.app.state.container
    if not container.food_log_service.delete_entry(user_id, entry_id):
        raise _entry_not_found()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/reports/daily")
async def daily_report(
    request: Request,
    day: date | None = Query(default=None, alias="date"),
    goal: HealthGoal | None = None,
    weighted: bool = False,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Return the daily score and nutrient totals."""
    container: AppContainer = request.app.state.container
    resolved_day = day or datetime.now(tz=UTC).date()
    report = container.food_log_service.daily_report(
        user_id, resolved_day, goal, weighted=weighted
    )
    return serialize_report(report)


@router.post("/score")
async def score_single_food(
    body: ScoreRequest,
    request: Request,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Score one food against the caller's profile."""
    container: AppContainer = request.app.state.container
    profile, biometrics = container.profile_service.require_biometrics(user_id)
    goal = body.goal or profile.health_goal
    return {
        "goal": goal.value,
        "score": score_food(body.nutrients.to_domain(), biometrics, goal),
        "tdee": compute_tdee(biometrics),
        "calorie_goal": calorie_goal(biometrics, goal),
    }
