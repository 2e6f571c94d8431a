# app/services/goal_deletion.py
import logging

from app.services.exceptions import GoalDeletionFailedError, NotFoundError
from app.services.record_store import RecordStore

logger = logging.getLogger(__name__)


class GoalDeletionCoordinator:
    """Deletes a goal together with its task lists and their tasks, atomically.

    Time logs pointing at any of the deleted rows are left in place.
    """

    def __init__(self, store: RecordStore):
        self.store = store

    def delete_goal(self, goal_id: int, owner_id: int) -> None:
        if self.store.find_goal(goal_id, owner_id) is None:
            raise NotFoundError("Goal")

        try:
            with self.store.atomic():
                list_ids = self.store.task_list_ids_for_goal(goal_id, owner_id)
                deleted_tasks = 0
                if list_ids:
                    deleted_tasks = self.store.delete_tasks_in_lists(list_ids, owner_id)
                self.store.delete_task_lists_for_goal(goal_id, owner_id)
                self.store.delete_goal(goal_id, owner_id)
        except Exception as e:
            logger.exception(f"Rolled back deletion of goal {goal_id} for user {owner_id}")
            raise GoalDeletionFailedError() from e

        logger.info(
            f"Goal {goal_id} deleted by user {owner_id} "
            f"with {len(list_ids)} task list(s) and {deleted_tasks} task(s)"
        )
