# app/routers/goal.py
from fastapi import APIRouter, Depends, HTTPException, Query, status
import logging
import math

from app.dependencies import get_record_store, get_goal_deletion_coordinator
from app.models.goal import Goal
from app.models.user import User
from app.schemas.goal import GoalCreate, GoalUpdate, GoalOut, GoalDetailOut, GoalPage
from app.services.exceptions import TimeTrackingError
from app.services.goal_deletion import GoalDeletionCoordinator
from app.services.record_store import RecordStore
from app.utils.auth import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/goals", tags=["goals"])

@router.get("/", response_model=GoalPage)
def get_goals(
    page: int = Query(1, ge=1, le=10000),
    limit: int = Query(10, ge=1, le=100),
    store: RecordStore = Depends(get_record_store),
    current_user: User = Depends(get_current_user)
):
    """Get the current user's goals, newest first"""
    goals, total = store.list_goals(current_user.id, offset=(page - 1) * limit, limit=limit)
    return {
        "goals": goals,
        "current_page": page,
        "total_pages": math.ceil(total / limit),
        "total_goals": total,
    }

@router.get("/{goal_id}", response_model=GoalDetailOut)
def get_goal(
    goal_id: int,
    store: RecordStore = Depends(get_record_store),
    current_user: User = Depends(get_current_user)
):
    """Get a goal with its task lists"""
    goal = store.find_goal(goal_id, current_user.id)
    if not goal:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Goal not found")
    return {"goal": goal, "task_lists": store.task_lists_for_owner(current_user.id, goal_id=goal_id)}

@router.post("/", response_model=GoalOut, status_code=status.HTTP_201_CREATED)
def create_goal(
    goal_data: GoalCreate,
    store: RecordStore = Depends(get_record_store),
    current_user: User = Depends(get_current_user)
):
    """Create a new goal"""
    goal = Goal(user_id=current_user.id, **goal_data.model_dump())
    store.add(goal)
    logger.info(f"Goal {goal.id} created by user {current_user.id}")
    return goal

@router.put("/{goal_id}", response_model=GoalOut)
def update_goal(
    goal_id: int,
    goal_update: GoalUpdate,
    store: RecordStore = Depends(get_record_store),
    current_user: User = Depends(get_current_user)
):
    """Update a goal"""
    goal = store.find_goal(goal_id, current_user.id)
    if not goal:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Goal not found")

    update_data = goal_update.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        if value is not None:
            setattr(goal, field, value)
    return store.save(goal)

@router.delete("/{goal_id}")
def delete_goal(
    goal_id: int,
    coordinator: GoalDeletionCoordinator = Depends(get_goal_deletion_coordinator),
    current_user: User = Depends(get_current_user)
):
    """Delete a goal together with its task lists and tasks"""
    try:
        coordinator.delete_goal(goal_id, current_user.id)
    except TimeTrackingError as e:
        raise e.to_http()
    return {"message": "Goal and all related data deleted successfully"}
