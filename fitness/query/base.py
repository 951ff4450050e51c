"""Base classes for queries over the users of the application."""

import datetime
from abc import ABC, abstractmethod
from typing import Optional

from fitness.activity import Activity
from fitness.user import User


class Query(ABC):
    """A query that is fed every user it should consider, one at a time."""

    @abstractmethod
    def accept(self, user: User) -> None:
        """
        Consume a user, updating the result of this query.

        Args:
            user: User to consider.
        """
        pass


class QueryBetweenDates(Query):
    """A query that only considers activities that ended between two dates."""

    def __init__(
        self,
        start: Optional[datetime.datetime] = None,
        end: Optional[datetime.datetime] = None,
    ) -> None:
        """
        Initialize the date restrictions of the query.

        Args:
            start: Ignore activities that ended before this date. Unbounded if None.
            end: Ignore activities that ended after this date. Unbounded if None.
        """
        self.start: datetime.datetime = (
            start if start is not None else datetime.datetime.min
        )
        self.end: datetime.datetime = end if end is not None else datetime.datetime.max

    def activity_fits(self, activity: Activity) -> bool:
        return self.start < activity.end_date < self.end

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, QueryBetweenDates) or type(self) is not type(other):
            return False
        return self.start == other.start and self.end == other.end

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(start={self.start.isoformat()!r}, "
            f"end={self.end.isoformat()!r})"
        )
