# app/models/time_log.py
from sqlalchemy import Column, Integer, String, Boolean, DateTime, Enum, Index
from sqlalchemy.orm import relationship
from datetime import datetime
import enum

from app.database import Base

DESCRIPTION_MAX_LENGTH = 500

class TimeLogCategory(enum.Enum):
    PLANNING = "planning"
    EXECUTION = "execution"
    REVIEW = "review"
    RESEARCH = "research"
    MEETING = "meeting"
    OTHER = "other"

class TimeLog(Base):
    __tablename__ = "time_logs"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, nullable=False)

    # Plain references: a log outlives the goal, list or task it points at
    goal_id = Column(Integer, nullable=False)
    task_list_id = Column(Integer, nullable=True)
    task_id = Column(Integer, nullable=True)

    duration = Column(Integer, nullable=False)  # minutes
    start_time = Column(DateTime, nullable=False)
    end_time = Column(DateTime, nullable=False)
    description = Column(String(DESCRIPTION_MAX_LENGTH), nullable=False, default="")
    category = Column(Enum(TimeLogCategory), default=TimeLogCategory.EXECUTION, nullable=False)
    is_timer_session = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Display projections, None once the referenced row is gone
    goal = relationship("Goal", primaryjoin="foreign(TimeLog.goal_id) == Goal.id", viewonly=True)
    task_list = relationship("TaskList", primaryjoin="foreign(TimeLog.task_list_id) == TaskList.id", viewonly=True)
    task = relationship("Task", primaryjoin="foreign(TimeLog.task_id) == Task.id", viewonly=True)

    __table_args__ = (
        Index("ix_time_logs_user_created", "user_id", "created_at"),
        Index("ix_time_logs_goal_user", "goal_id", "user_id"),
        Index("ix_time_logs_user_goal_created", "user_id", "goal_id", "created_at"),
        Index("ix_time_logs_task_list_user", "task_list_id", "user_id"),
        Index("ix_time_logs_task_user", "task_id", "user_id"),
    )

    @property
    def formatted_duration(self) -> str:
        if self.duration < 60:
            return f"{self.duration}m"
        hours, minutes = divmod(self.duration, 60)
        return f"{hours}h {minutes}m"
