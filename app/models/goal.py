# app/models/goal.py
from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean, ForeignKey, Enum, Index
from sqlalchemy.orm import relationship
from datetime import datetime
import enum

from app.database import Base

class GoalPriority(enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

class Goal(Base):
    __tablename__ = "goals"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False, default="")
    target_date = Column(DateTime, nullable=False)
    priority = Column(Enum(GoalPriority), default=GoalPriority.MEDIUM, nullable=False)
    category = Column(String, nullable=False, default="")
    completed = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    owner = relationship("User", back_populates="goals")
    task_lists = relationship("TaskList", back_populates="goal", order_by="TaskList.created_at.desc()")

    __table_args__ = (
        Index("ix_goals_user_created", "user_id", "created_at"),
        Index("ix_goals_user_priority", "user_id", "priority"),
        Index("ix_goals_user_target_date", "user_id", "target_date"),
        Index("ix_goals_user_completed", "user_id", "completed"),
    )
