"""Queries available in the fitness application."""

import datetime
from collections import Counter
from typing import List, Optional, Tuple, Type

from fitness.activity import ActivityDistance
from fitness.query.base import Query, QueryBetweenDates
from fitness.user import User


class QueryDistance(QueryBetweenDates):
    """A query that calculates the distance a single user traversed."""

    def __init__(
        self,
        activity_type: Type[ActivityDistance] = ActivityDistance,
        start: Optional[datetime.datetime] = None,
        end: Optional[datetime.datetime] = None,
    ) -> None:
        """
        Initialize the query.

        Args:
            activity_type: Only activities of this class are considered.
            start: Ignore activities that ended before this date.
            end: Ignore activities that ended after this date.
        """
        super().__init__(start, end)
        self.activity_type: Type[ActivityDistance] = activity_type
        self.user: Optional[User] = None
        self.distance: float = -1.0

    def accept(self, user: User) -> None:
        self.user = user.copy()
        self.distance = sum(
            a.distance_to_traverse
            for a in user.activities.done
            if isinstance(a, self.activity_type) and self.activity_fits(a)
        )

    def __repr__(self) -> str:
        return (
            f"QueryDistance(activity_type={self.activity_type.__name__}, "
            f"start={self.start.isoformat()!r}, end={self.end.isoformat()!r})"
        )


class QueryMostActivities(QueryBetweenDates):
    """A query that determines the user that completed the most activities."""

    def __init__(
        self,
        start: Optional[datetime.datetime] = None,
        end: Optional[datetime.datetime] = None,
    ) -> None:
        super().__init__(start, end)
        self.max_user: Optional[User] = None
        self.max_activities: int = -1

    def accept(self, user: User) -> None:
        count = sum(1 for a in user.activities.done if self.activity_fits(a))
        if count > self.max_activities:
            self.max_activities = count
            self.max_user = user.copy()


class QueryMostCalories(QueryBetweenDates):
    """A query that determines the user that burned the most calories."""

    def __init__(
        self,
        start: Optional[datetime.datetime] = None,
        end: Optional[datetime.datetime] = None,
    ) -> None:
        super().__init__(start, end)
        self.max_user: Optional[User] = None
        self.max_calories: float = -1.0

    def accept(self, user: User) -> None:
        calories = sum(
            a.count_calories(user)
            for a in user.activities.done
            if self.activity_fits(a)
        )
        if calories > self.max_calories:
            self.max_calories = calories
            self.max_user = user.copy()


class QueryHardestTrainingPlan(Query):
    """A query that determines the user whose training plan burns the most calories."""

    def __init__(self) -> None:
        self.max_user: Optional[User] = None
        self.max_calories: float = -1.0

    def accept(self, user: User) -> None:
        calories = user.activities.training_plan.count_calories(user)
        if calories > self.max_calories:
            self.max_calories = calories
            self.max_user = user.copy()

    def __repr__(self) -> str:
        return "QueryHardestTrainingPlan()"


class QueryMostCommonActivity(Query):
    """A query that determines the activity that was completed the most times."""

    def __init__(self) -> None:
        self.activities: Counter[str] = Counter()

    def accept(self, user: User) -> None:
        self.activities.update(type(a).__name__ for a in user.activities.done)

    @property
    def top_activity(self) -> Optional[Tuple[str, int]]:
        """
        Get the activity completed the most times.

        Returns:
            Optional[Tuple[str, int]]: Class name and number of executions, or
            None if no activities were found. Ties go to the first name
            alphabetically.
        """
        if not self.activities:
            return None
        return min(self.activities.items(), key=lambda item: (-item[1], item[0]))

    def __repr__(self) -> str:
        return "QueryMostCommonActivity()"


QUERY_CLASSES: List[Type[Query]] = [
    QueryDistance,
    QueryHardestTrainingPlan,
    QueryMostActivities,
    QueryMostCalories,
    QueryMostCommonActivity,
]
