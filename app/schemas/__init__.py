from .goal import GoalCreate, GoalUpdate, GoalBrief, GoalOut, GoalDetailOut, GoalPage, TaskListBasic
from .task import TaskListCreate, TaskListOut, TaskCreate, TaskUpdate, TaskOut
from .time_log import TimeLogCreate, TimeLogUpdate, TimeLogOut, TimeLogPage, TaskListBrief, TaskBrief, CategoryDuration, TimeStatsOut, DailyTimeStat, DailyTimeStatsOut
