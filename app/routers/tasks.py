# app/routers/tasks.py
from fastapi import APIRouter, Depends, HTTPException, status
from typing import List
import logging

from app.dependencies import get_record_store
from app.models.task import Task, TaskList
from app.models.user import User
from app.schemas.task import TaskListCreate, TaskListOut, TaskCreate, TaskUpdate, TaskOut
from app.services.record_store import RecordStore
from app.utils.auth import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tasks", tags=["tasks"])

@router.get("/lists", response_model=List[TaskListOut])
def get_all_task_lists(
    store: RecordStore = Depends(get_record_store),
    current_user: User = Depends(get_current_user)
):
    """Get all task lists of the current user with goal information"""
    return store.task_lists_for_owner(current_user.id)

@router.post("/lists", response_model=TaskListOut, status_code=status.HTTP_201_CREATED)
def create_task_list(
    list_data: TaskListCreate,
    store: RecordStore = Depends(get_record_store),
    current_user: User = Depends(get_current_user)
):
    """Create a task list under a goal"""
    if not store.find_goal(list_data.goal_id, current_user.id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Goal not found")

    task_list = TaskList(name=list_data.name, goal_id=list_data.goal_id, user_id=current_user.id)
    return store.add(task_list)

@router.get("/goal/{goal_id}/lists", response_model=List[TaskListOut])
def get_task_lists_by_goal(
    goal_id: int,
    store: RecordStore = Depends(get_record_store),
    current_user: User = Depends(get_current_user)
):
    """Get the task lists of one goal"""
    if not store.find_goal(goal_id, current_user.id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Goal not found")
    return store.task_lists_for_owner(current_user.id, goal_id=goal_id)

@router.get("/list/{list_id}", response_model=List[TaskOut])
def get_tasks_by_list(
    list_id: int,
    store: RecordStore = Depends(get_record_store),
    current_user: User = Depends(get_current_user)
):
    """Get the tasks of one task list"""
    if not store.find_task_list(list_id, current_user.id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task list not found")
    return store.tasks_in_list(list_id, current_user.id)

@router.delete("/lists/{list_id}")
def delete_task_list(
    list_id: int,
    store: RecordStore = Depends(get_record_store),
    current_user: User = Depends(get_current_user)
):
    """Delete a task list and its tasks (not atomic, unlike goal deletion)"""
    if not store.find_task_list(list_id, current_user.id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task list not found")

    store.delete_task_list_with_tasks(list_id, current_user.id)
    logger.info(f"Task list {list_id} deleted by user {current_user.id}")
    return {"message": "Task list and all its tasks deleted successfully"}

@router.post("/", response_model=TaskOut, status_code=status.HTTP_201_CREATED)
def create_task(
    task_data: TaskCreate,
    store: RecordStore = Depends(get_record_store),
    current_user: User = Depends(get_current_user)
):
    """Create a task in a task list"""
    if not store.find_task_list(task_data.list_id, current_user.id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task list not found")

    task = Task(user_id=current_user.id, **task_data.model_dump())
    return store.add(task)

@router.put("/{task_id}", response_model=TaskOut)
def update_task(
    task_id: int,
    task_update: TaskUpdate,
    store: RecordStore = Depends(get_record_store),
    current_user: User = Depends(get_current_user)
):
    """Update a task"""
    task = store.find_task(task_id, current_user.id)
    if not task:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")

    update_data = task_update.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        if value is not None:
            setattr(task, field, value)
    return store.save(task)

@router.delete("/{task_id}")
def delete_task(
    task_id: int,
    store: RecordStore = Depends(get_record_store),
    current_user: User = Depends(get_current_user)
):
    """Delete a task"""
    task = store.find_task(task_id, current_user.id)
    if not task:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")

    store.delete(task)
    return {"message": "Task deleted successfully"}
