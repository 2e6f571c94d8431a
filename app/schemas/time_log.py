from pydantic import BaseModel, validator
from datetime import datetime, date as date_type
from typing import Optional, List, Dict

from app.models.time_log import TimeLogCategory, DESCRIPTION_MAX_LENGTH
from app.utils.clock import to_naive_utc
from .goal import GoalBrief

def _clean_description(v):
    if v is None:
        return v
    v = v.strip()
    if len(v) > DESCRIPTION_MAX_LENGTH:
        raise ValueError(f'Description cannot exceed {DESCRIPTION_MAX_LENGTH} characters')
    return v

class TimeLogCreate(BaseModel):
    goal_id: int
    task_list_id: Optional[int] = None
    task_id: Optional[int] = None
    duration: Optional[float] = None  # minutes
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    description: Optional[str] = None
    category: Optional[TimeLogCategory] = None
    is_timer_session: bool = False

    @validator('start_time', 'end_time')
    def normalize_times(cls, v):
        return to_naive_utc(v) if v is not None else v

    @validator('description')
    def clean_description(cls, v):
        return _clean_description(v)

# Duration is derived from the interval after creation, so it is not accepted here
class TimeLogUpdate(BaseModel):
    task_list_id: Optional[int] = None
    task_id: Optional[int] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    description: Optional[str] = None
    category: Optional[TimeLogCategory] = None
    is_timer_session: Optional[bool] = None

    @validator('start_time', 'end_time')
    def normalize_times(cls, v):
        return to_naive_utc(v) if v is not None else v

    @validator('description')
    def clean_description(cls, v):
        return _clean_description(v)

class TaskListBrief(BaseModel):
    id: int
    name: str

    model_config = {
        "from_attributes": True
    }

class TaskBrief(BaseModel):
    id: int
    title: str

    model_config = {
        "from_attributes": True
    }

class TimeLogOut(BaseModel):
    id: int
    user_id: int
    goal_id: int
    task_list_id: Optional[int] = None
    task_id: Optional[int] = None
    duration: int
    formatted_duration: str
    start_time: datetime
    end_time: datetime
    description: str
    category: TimeLogCategory
    is_timer_session: bool
    created_at: datetime
    updated_at: Optional[datetime] = None

    # Related objects, None once the referenced row has been deleted
    goal: Optional[GoalBrief] = None
    task_list: Optional[TaskListBrief] = None
    task: Optional[TaskBrief] = None

    model_config = {
        "from_attributes": True
    }

class TimeLogPage(BaseModel):
    time_logs: List[TimeLogOut]
    total_pages: int
    current_page: int
    total: int

class CategoryDuration(BaseModel):
    category: str
    duration: int

class TimeStatsOut(BaseModel):
    goal_id: Optional[int] = None
    goal: Optional[GoalBrief] = None
    total_minutes: int
    total_sessions: int
    avg_session_length: float
    total_hours: float
    avg_session_hours: float
    categories: List[CategoryDuration]
    category_breakdown: Dict[str, int]

class DailyTimeStat(BaseModel):
    date: date_type
    total_minutes: int
    total_sessions: int
    total_hours: float
    categories: List[CategoryDuration]
    category_breakdown: Dict[str, int]

class DailyTimeStatsOut(BaseModel):
    goal: GoalBrief
    daily_stats: List[DailyTimeStat]
    total_days: int
