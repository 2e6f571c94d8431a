# app/schemas/task.py
from pydantic import BaseModel, validator
from datetime import datetime
from typing import Optional

from .goal import GoalBrief

class TaskListCreate(BaseModel):
    name: str
    goal_id: int

    @validator('name')
    def name_required(cls, v):
        if not v or not v.strip():
            raise ValueError('Task list name is required')
        return v.strip()

class TaskListOut(BaseModel):
    id: int
    name: str
    goal_id: int
    user_id: int
    created_at: datetime
    goal: Optional[GoalBrief] = None

    model_config = {
        "from_attributes": True
    }

class TaskCreate(BaseModel):
    title: str
    description: Optional[str] = ""
    list_id: int

    @validator('title')
    def title_required(cls, v):
        if not v or not v.strip():
            raise ValueError('Title is required')
        return v.strip()

    @validator('description')
    def strip_description(cls, v):
        return (v or "").strip()

class TaskUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    completed: Optional[bool] = None

    @validator('title', 'description')
    def strip_text(cls, v):
        return v.strip() if v is not None else v

class TaskOut(BaseModel):
    id: int
    title: str
    description: str
    completed: bool
    list_id: int
    user_id: int
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True
    }
