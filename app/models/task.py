from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text, Boolean, Index
from sqlalchemy.orm import relationship
from app.database import Base
from datetime import datetime

class TaskList(Base):
    __tablename__ = "task_lists"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    goal_id = Column(Integer, ForeignKey("goals.id"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    goal = relationship("Goal", back_populates="task_lists")
    tasks = relationship("Task", back_populates="task_list")

    __table_args__ = (
        Index("ix_task_lists_user_created", "user_id", "created_at"),
        Index("ix_task_lists_goal_user", "goal_id", "user_id"),
    )

class Task(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False, default="")
    completed = Column(Boolean, default=False, nullable=False)
    list_id = Column(Integer, ForeignKey("task_lists.id"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    task_list = relationship("TaskList", back_populates="tasks")

    __table_args__ = (
        Index("ix_tasks_user_list", "user_id", "list_id"),
        Index("ix_tasks_list_created", "list_id", "created_at"),
        Index("ix_tasks_user_completed", "user_id", "completed"),
    )
