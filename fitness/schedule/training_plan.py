"""Weekly training plans."""

import bisect
import calendar
import datetime
import logging
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Optional, Set, Tuple

from fitness.activity import Activity, activity_from_dict

if TYPE_CHECKING:
    from fitness.user import User

PLAN_DATE = datetime.date(1, 1, 1)

PlanEntry = Tuple[Activity, int]


class ActivityOverlapError(ValueError):
    """Exception raised when an activity overlaps another scheduled activity."""

    def __init__(self, message: str = "Activity overlaps an existing activity!"):
        super().__init__(message)


class ActivityNotFoundError(IndexError):
    """Exception raised when removing an activity that doesn't exist."""

    def __init__(self, message: str = "Activity doesn't exist!"):
        super().__init__(message)


def insert_sorted(activities: List[Activity], activity: Activity) -> bool:
    """
    Insert an activity in a list kept sorted by date, ignoring duplicates.

    Args:
        activities: List sorted by ``Activity.sort_key``.
        activity: Activity to insert.

    Returns:
        bool: True if the activity was inserted.
    """
    if activity in activities:
        return False
    bisect.insort(activities, activity, key=Activity.sort_key)
    return True


def day_names(days: Iterable[int]) -> List[str]:
    return [calendar.day_name[d] for d in sorted(days)]


def _repeated(activity: Activity, times: int) -> Activity:
    """Copy of an activity stretched to cover ``times`` consecutive executions."""
    repeat = activity.copy()
    repeat.execution_time = activity.execution_time * times
    return repeat


def _normalized(activity: Activity) -> Activity:
    """Copy of an activity that keeps only its time of day."""
    normal = activity.copy()
    normal.execution_date = datetime.datetime.combine(
        PLAN_DATE, activity.execution_date.time()
    )
    return normal


class TrainingPlan:
    """
    A training plan, composed of activities that can be executed multiple
    times on many days of the week.

    Activities executed multiple times are done consecutively. Only the time of
    day of each activity is kept; its date is replaced by 0001-01-01.
    """

    def __init__(
        self,
        activities: Optional[Iterable[PlanEntry]] = None,
        days: Optional[Iterable[int]] = None,
    ) -> None:
        """
        Initialize a training plan.

        Args:
            activities: Pairs of activity and number of consecutive executions.
            days: Week days (0 is Monday) when the plan is executed.

        Raises:
            ActivityOverlapError: Overlapping activities.
        """
        self.logger: logging.Logger = logging.getLogger(self.__class__.__name__)
        self._activities: List[PlanEntry] = []
        self._days: Set[int] = set()
        if activities is not None:
            self.set_activities(activities)
        if days is not None:
            self.days = days

    @property
    def activities(self) -> List[PlanEntry]:
        """Copies of the plan's activities, sorted by time of day."""
        return [(a.copy(), times) for a, times in self._activities]

    @property
    def days(self) -> List[int]:
        return sorted(self._days)

    @days.setter
    def days(self, days: Iterable[int]) -> None:
        days = set(days)
        if any(d not in range(7) for d in days):
            raise ValueError("Week days must be in [0; 6]!")
        self._days = days

    def _overlaps_daytime(self, activity: Activity) -> bool:
        normal = _normalized(activity)
        return any(
            _repeated(a, times).overlaps(normal) for a, times in self._activities
        )

    def overlaps(self, activity: Activity) -> bool:
        """
        Check if an outside activity overlaps an activity in this plan.

        Args:
            activity: Dated activity.

        Returns:
            bool: True if the activity falls on a plan day and overlaps it.
        """
        if activity.execution_date.weekday() not in self._days:
            return False
        return self._overlaps_daytime(activity)

    def add_activity(self, activity: Activity, times: int) -> None:
        """
        Add an activity to this plan.

        Args:
            activity: Activity to add. Its date is ignored.
            times: Number of consecutive executions.

        Raises:
            ActivityOverlapError: Non-positive ``times`` or overlap with the plan.
        """
        if times <= 0:
            raise ActivityOverlapError(
                "Non-positive number of activity executions! Negative overlap."
            )

        if self._overlaps_daytime(_repeated(activity, times)):
            raise ActivityOverlapError()

        entry = (_normalized(activity), times)
        index = bisect.bisect_right(
            [a.sort_key() for a, _ in self._activities], entry[0].sort_key()
        )
        self._activities.insert(index, entry)
        self.logger.debug(f"Added {entry[0]!r} x{times} to training plan")

    def remove_activity(self, index: int) -> None:
        """
        Remove an activity from this plan.

        Args:
            index: Position of the activity, in time of day order.

        Raises:
            ActivityNotFoundError: ``index`` out of range.
        """
        if index < 0 or index >= len(self._activities):
            raise ActivityNotFoundError()
        del self._activities[index]

    def set_activities(self, activities: Iterable[PlanEntry]) -> None:
        """
        Replace the activities of this plan. Nothing changes on failure.

        Raises:
            ActivityOverlapError: Overlapping activities.
        """
        previous = self._activities
        self._activities = []
        try:
            for activity, times in activities:
                self.add_activity(activity, times)
        except ActivityOverlapError:
            self._activities = previous
            raise

    def activities_between(
        self, now: datetime.datetime, goal: datetime.datetime
    ) -> List[Activity]:
        """
        Get the plan's executions finished between two dates.

        Args:
            now: First day to consider.
            goal: Executions must end before (or at) this date.

        Returns:
            List[Activity]: Dated executions, sorted by date.
        """
        ret: List[Activity] = []
        if not self._days:
            return ret

        for ordinal in range(now.toordinal(), goal.toordinal() + 1):
            day = datetime.date.fromordinal(ordinal)
            if day.weekday() not in self._days:
                continue

            for activity, times in self._activities:
                start = datetime.datetime.combine(day, activity.execution_date.time())
                for i in range(times):
                    # end_date <= goal, without building dates past goal
                    if start > goal - activity.execution_time * (i + 1):
                        break
                    execution = activity.copy()
                    execution.execution_date = start + activity.execution_time * i
                    insert_sorted(ret, execution)
        return ret

    def count_calories(self, user: "User") -> float:
        return sum(a.count_calories(user) * times for a, times in self._activities)

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, TrainingPlan):
            return False
        return self._activities == other._activities and self._days == other._days

    __hash__ = None  # type: ignore[assignment]

    def copy(self) -> "TrainingPlan":
        plan = TrainingPlan()
        plan._activities = self.activities
        plan._days = set(self._days)
        return plan

    def __repr__(self) -> str:
        return (
            f"TrainingPlan(activities={self._activities!r}, "
            f"days={day_names(self._days)!r})"
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "days": self.days,
            "activities": [
                {"activity": a.to_dict(), "times": times}
                for a, times in self._activities
            ],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TrainingPlan":
        """
        Rebuild a plan serialized with ``to_dict``.

        Raises:
            ValueError: Invalid field value.
            KeyError: Missing field.
        """
        return cls(
            [
                (activity_from_dict(e["activity"]), int(e["times"]))
                for e in data.get("activities") or []
            ],
            [int(d) for d in data.get("days") or []],
        )
