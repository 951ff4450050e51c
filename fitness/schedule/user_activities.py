"""Collection of the activities of a single user."""

import datetime
from typing import Any, Dict, Iterable, List, Optional

from fitness.activity import Activity, activity_from_dict
from fitness.schedule.training_plan import (
    ActivityNotFoundError,
    ActivityOverlapError,
    TrainingPlan,
    insert_sorted,
)


class UserActivities:
    """
    The activities of a user: those still to be executed, those already
    completed and a training plan.
    """

    def __init__(
        self,
        todo: Optional[Iterable[Activity]] = None,
        done: Optional[Iterable[Activity]] = None,
        plan: Optional[TrainingPlan] = None,
    ) -> None:
        """
        Initialize a collection of user activities.

        Args:
            todo: Activities still to be executed.
            done: Completed activities. Not checked for overlaps.
            plan: Training plan being executed.

        Raises:
            ActivityOverlapError: Overlaps within ``todo`` or against ``plan``.
        """
        self._todo: List[Activity] = []
        self._done: List[Activity] = []
        self._plan: TrainingPlan = TrainingPlan()
        if todo is not None:
            self.set_todo(todo)
        if done is not None:
            self.set_done(done)
        if plan is not None:
            self.set_training_plan(plan)

    @property
    def todo(self) -> List[Activity]:
        return [a.copy() for a in self._todo]

    @property
    def done(self) -> List[Activity]:
        return [a.copy() for a in self._done]

    @property
    def training_plan(self) -> TrainingPlan:
        return self._plan.copy()

    def add_activity(self, activity: Activity) -> None:
        """
        Add an activity to be executed.

        Args:
            activity: Activity to add.

        Raises:
            ActivityOverlapError: The activity overlaps the plan or a todo activity.
        """
        if self._plan.overlaps(activity):
            raise ActivityOverlapError()
        if any(activity.overlaps(a) for a in self._todo):
            raise ActivityOverlapError()
        insert_sorted(self._todo, activity.copy())

    def set_todo(self, todo: Iterable[Activity]) -> None:
        """
        Replace the activities to be executed. Nothing changes on failure.

        Raises:
            ActivityOverlapError: Overlaps within ``todo`` or against the plan.
        """
        previous = self._todo
        self._todo = []
        try:
            for activity in todo:
                self.add_activity(activity)
        except ActivityOverlapError:
            self._todo = previous
            raise

    def set_done(self, done: Iterable[Activity]) -> None:
        self._done = []
        for activity in done:
            insert_sorted(self._done, activity.copy())

    def set_training_plan(self, plan: TrainingPlan) -> None:
        """
        Replace the training plan. Nothing changes on failure.

        Raises:
            ActivityOverlapError: A todo activity overlaps the new plan.
        """
        previous = self._plan
        self._plan = plan.copy()
        try:
            self.set_todo(self._todo)
        except ActivityOverlapError:
            self._plan = previous
            raise

    def remove_activity(self, index: int) -> None:
        """
        Remove an activity still to be executed.

        Args:
            index: Position of the activity, in date order.

        Raises:
            ActivityNotFoundError: ``index`` out of range.
        """
        if index < 0 or index >= len(self._todo):
            raise ActivityNotFoundError()
        del self._todo[index]

    def leap_forward(self, now: datetime.datetime, goal: datetime.datetime) -> None:
        """
        Advance time, completing the activities that end before ``goal``.

        Args:
            now: Current time.
            goal: New time.
        """
        pending: List[Activity] = []
        for activity in self._todo:
            if activity.end_date <= goal:
                insert_sorted(self._done, activity)
            else:
                pending.append(activity)
        self._todo = pending

        for activity in self._plan.activities_between(now, goal):
            insert_sorted(self._done, activity)

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, UserActivities):
            return False
        return (
            self._todo == other._todo
            and self._done == other._done
            and self._plan == other._plan
        )

    __hash__ = None  # type: ignore[assignment]

    def copy(self) -> "UserActivities":
        activities = UserActivities()
        activities._todo = self.todo
        activities._done = self.done
        activities._plan = self.training_plan
        return activities

    def __repr__(self) -> str:
        return (
            f"UserActivities(todo={self._todo!r}, done={self._done!r}, "
            f"plan={self._plan!r})"
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "todo": [a.to_dict() for a in self._todo],
            "done": [a.to_dict() for a in self._done],
            "plan": self._plan.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserActivities":
        """
        Rebuild a collection serialized with ``to_dict``.

        Raises:
            ValueError: Invalid field value or overlapping activities.
            KeyError: Missing field.
        """
        return cls(
            [activity_from_dict(a) for a in data.get("todo") or []],
            [activity_from_dict(a) for a in data.get("done") or []],
            TrainingPlan.from_dict(data.get("plan") or {}),
        )
