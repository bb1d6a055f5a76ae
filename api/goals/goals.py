from __future__ import annotations

from beanie.odm.fields import PydanticObjectId
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from api.auth.config import get_current_user_id, require_auth
from api.errors import http_error
from schemas.goals import GoalCreateIn, GoalOut, GoalUpdateIn
from services.goals import GoalManager
from services.statistics import StatisticsError

router = APIRouter(prefix="/goals", tags=["goals"])


def get_goal_manager() -> GoalManager:
    return GoalManager()


@router.get("")
async def list_goals(
    skip: int = 0,
    limit: int = 20,
    current_user_id=Depends(get_current_user_id),
    manager: GoalManager = Depends(get_goal_manager),
):
    user_id = require_auth(current_user_id)
    limit = min(max(limit, 1), 100)

    goals = await manager.list_goals(user_id, skip=max(skip, 0), limit=limit)
    return {"items": [GoalOut.model_validate(g, from_attributes=True) for g in goals], "skip": skip, "limit": limit}


@router.post("", response_model=GoalOut, status_code=status.HTTP_201_CREATED)
async def create_goal(
    payload: GoalCreateIn,
    current_user_id=Depends(get_current_user_id),
    manager: GoalManager = Depends(get_goal_manager),
):
    user_id = require_auth(current_user_id)
    try:
        goal = await manager.create_active_goal(user_id, payload)
    except StatisticsError as exc:
        raise http_error(exc)
    return GoalOut.model_validate(goal, from_attributes=True)


@router.get("/active/current", response_model=GoalOut)
async def active_goal(
    current_user_id=Depends(get_current_user_id),
    manager: GoalManager = Depends(get_goal_manager),
):
    user_id = require_auth(current_user_id)
    goal = await manager.get_active_goal(user_id)
    if not goal:
        raise HTTPException(status_code=404, detail="No active goal found")
    return GoalOut.model_validate(goal, from_attributes=True)


@router.put("/{goal_id}", response_model=GoalOut)
async def update_goal(
    goal_id: PydanticObjectId,
    payload: GoalUpdateIn,
    current_user_id=Depends(get_current_user_id),
    manager: GoalManager = Depends(get_goal_manager),
):
    user_id = require_auth(current_user_id)
    try:
        goal = await manager.update_goal(user_id, goal_id, payload)
    except ValidationError as exc:
        # the merged goal broke a create-time rule, e.g. weight direction
        raise RequestValidationError(exc.errors(include_url=False, include_context=False))
    except StatisticsError as exc:
        raise http_error(exc)
    if not goal:
        raise HTTPException(status_code=404, detail="Goal not found")
    return GoalOut.model_validate(goal, from_attributes=True)


@router.delete("/{goal_id}", status_code=status.HTTP_200_OK)
async def delete_goal(
    goal_id: PydanticObjectId,
    current_user_id=Depends(get_current_user_id),
    manager: GoalManager = Depends(get_goal_manager),
):
    user_id = require_auth(current_user_id)
    try:
        deleted = await manager.delete_goal(user_id, goal_id)
    except StatisticsError as exc:
        raise http_error(exc)
    if not deleted:
        raise HTTPException(status_code=404, detail="Goal not found")
    return {"status": "ok"}
