from pydantic import BaseModel, validator
from typing import Optional, List
from datetime import datetime

from app.models.goal import GoalPriority
from app.utils.clock import to_naive_utc

class GoalCreate(BaseModel):
    title: str
    description: Optional[str] = ""
    target_date: datetime
    priority: GoalPriority = GoalPriority.MEDIUM
    category: Optional[str] = ""

    @validator('title')
    def title_required(cls, v):
        if not v or not v.strip():
            raise ValueError('Title is required')
        return v.strip()

    @validator('description', 'category')
    def strip_text(cls, v):
        return (v or "").strip()

    @validator('target_date')
    def normalize_target_date(cls, v):
        return to_naive_utc(v)

class GoalUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    target_date: Optional[datetime] = None
    priority: Optional[GoalPriority] = None
    category: Optional[str] = None
    completed: Optional[bool] = None

    @validator('title', 'description', 'category')
    def strip_text(cls, v):
        return v.strip() if v is not None else v

    @validator('target_date')
    def normalize_target_date(cls, v):
        return to_naive_utc(v) if v is not None else v

# Lightweight projection attached to time logs and stats
class GoalBrief(BaseModel):
    id: int
    title: str
    category: str
    priority: GoalPriority

    model_config = {
        "from_attributes": True
    }

class TaskListBasic(BaseModel):
    id: int
    name: str
    goal_id: int
    created_at: datetime

    model_config = {
        "from_attributes": True
    }

class GoalOut(BaseModel):
    id: int
    user_id: int
    title: str
    description: str
    target_date: datetime
    priority: GoalPriority
    category: str
    completed: bool
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True
    }

class GoalDetailOut(BaseModel):
    goal: GoalOut
    task_lists: List[TaskListBasic]

class GoalPage(BaseModel):
    goals: List[GoalOut]
    current_page: int
    total_pages: int
    total_goals: int
