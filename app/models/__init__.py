from .user import User
from .goal import Goal, GoalPriority
from .task import TaskList, Task
from .time_log import TimeLog, TimeLogCategory
