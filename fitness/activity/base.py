"""Abstract activity hierarchy shared by every exercise kind."""

import copy
import datetime
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Tuple

if TYPE_CHECKING:
    from fitness.user import User


class ActivityError(ValueError):
    """Exception raised when an activity field is given an invalid value."""

    pass


class HardActivity:
    """Marker mixin for activities considered hard."""

    pass


class Activity(ABC):
    """An exercise activity that can be executed by a user."""

    def __init__(
        self,
        execution_time: datetime.timedelta,
        execution_date: datetime.datetime,
        bpm: int,
    ) -> None:
        """
        Initialize an activity.

        Args:
            execution_time: Duration of the activity.
            execution_date: Time when the activity was / will be executed.
            bpm: Cardiac rhythm of the user while executing the activity.

        Raises:
            ActivityError: Duration under one second or non-positive bpm.
        """
        self.execution_time = execution_time
        self.bpm = bpm
        self.execution_date = execution_date

    @property
    def execution_time(self) -> datetime.timedelta:
        return self._execution_time

    @execution_time.setter
    def execution_time(self, value: datetime.timedelta) -> None:
        if value < datetime.timedelta(seconds=1):
            raise ActivityError("An exercise should last at least one second long!")
        self._execution_time = value

    @property
    def bpm(self) -> int:
        return self._bpm

    @bpm.setter
    def bpm(self, value: int) -> None:
        if value <= 0:
            raise ActivityError(
                "The average BPM during exercise must be a positive number!"
            )
        self._bpm = value

    @property
    def end_date(self) -> datetime.datetime:
        """Time when this activity finishes."""
        return self.execution_date + self.execution_time

    @property
    def hours(self) -> float:
        return self.execution_time.total_seconds() / 3600.0

    def overlaps(self, other: "Activity") -> bool:
        """
        Check if this activity overlaps another one.

        Activities that only touch (one ends when the other starts) don't overlap.

        Args:
            other: Activity to check against.

        Returns:
            bool: True if both activities share some instant.
        """
        return (
            self.execution_date < other.end_date
            and other.execution_date < self.end_date
        )

    @abstractmethod
    def count_calories(self, user: "User") -> float:
        """
        Count the calories burned by a user executing this activity.

        Args:
            user: User executing the activity.

        Returns:
            float: Calories burned, in kcal.
        """
        pass

    def sort_key(self) -> Tuple[datetime.datetime, datetime.timedelta]:
        return (self.execution_date, self.execution_time)

    def _fields(self) -> Tuple[Any, ...]:
        return (self._execution_time, self.execution_date, self._bpm)

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if other is None or type(self) is not type(other):
            return False
        return self._fields() == other._fields()  # type: ignore[attr-defined]

    __hash__ = None  # type: ignore[assignment]

    def __lt__(self, other: "Activity") -> bool:
        return self.sort_key() < other.sort_key()

    def copy(self) -> "Activity":
        """Create a deep copy of this activity."""
        return copy.deepcopy(self)

    def _repr_fields(self) -> str:
        return (
            f"execution_time={self.execution_time!r}, "
            f"execution_date={self.execution_date!r}, "
            f"bpm={self.bpm}"
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._repr_fields()})"

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize this activity into plain data.

        Returns:
            Dict[str, Any]: YAML-safe dictionary, tagged with the class name.
        """
        return {
            "type": type(self).__name__,
            "execution_time": self.execution_time.total_seconds(),
            "execution_date": self.execution_date.isoformat(),
            "bpm": self.bpm,
        }

    @classmethod
    def _kwargs_from_dict(cls, data: Dict[str, Any]) -> Dict[str, Any]:
        try:
            execution_time = datetime.timedelta(seconds=float(data["execution_time"]))
        except OverflowError as e:
            raise ValueError(f"Execution time out of range: {e}") from e
        return {
            "execution_time": execution_time,
            "execution_date": datetime.datetime.fromisoformat(data["execution_date"]),
            "bpm": int(data["bpm"]),
        }


class ActivityRepetition(Activity):
    """A repetition activity that can be executed by a user."""

    def __init__(
        self,
        execution_time: datetime.timedelta,
        execution_date: datetime.datetime,
        bpm: int,
        number_of_reps: int = 1,
    ) -> None:
        super().__init__(execution_time, execution_date, bpm)
        self.number_of_reps = number_of_reps

    @property
    def number_of_reps(self) -> int:
        return self._number_of_reps

    @number_of_reps.setter
    def number_of_reps(self, value: int) -> None:
        if value <= 0:
            raise ActivityError("Number of reps should be a positive number!")
        self._number_of_reps = value

    def _fields(self) -> Tuple[Any, ...]:
        return super()._fields() + (self._number_of_reps,)

    def _repr_fields(self) -> str:
        return f"{super()._repr_fields()}, number_of_reps={self.number_of_reps}"

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["number_of_reps"] = self.number_of_reps
        return data

    @classmethod
    def _kwargs_from_dict(cls, data: Dict[str, Any]) -> Dict[str, Any]:
        kwargs = super()._kwargs_from_dict(data)
        kwargs["number_of_reps"] = int(data["number_of_reps"])
        return kwargs


class ActivityRepetitionWeighted(ActivityRepetition):
    """A repetition activity with weights that can be executed by a user."""

    def __init__(
        self,
        execution_time: datetime.timedelta,
        execution_date: datetime.datetime,
        bpm: int,
        number_of_reps: int = 1,
        weights_heft: float = 1.0,
    ) -> None:
        super().__init__(execution_time, execution_date, bpm, number_of_reps)
        self.weights_heft = weights_heft

    @property
    def weights_heft(self) -> float:
        """Heft of the weights, in kilograms."""
        return self._weights_heft

    @weights_heft.setter
    def weights_heft(self, value: float) -> None:
        if value <= 0:
            raise ActivityError("Weights' heft should be a positive number!")
        self._weights_heft = float(value)

    def _fields(self) -> Tuple[Any, ...]:
        return super()._fields() + (self._weights_heft,)

    def _repr_fields(self) -> str:
        return f"{super()._repr_fields()}, weights_heft={self.weights_heft:.2f}"

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["weights_heft"] = self.weights_heft
        return data

    @classmethod
    def _kwargs_from_dict(cls, data: Dict[str, Any]) -> Dict[str, Any]:
        kwargs = super()._kwargs_from_dict(data)
        kwargs["weights_heft"] = float(data["weights_heft"])
        return kwargs


class ActivityDistance(Activity):
    """A distance activity that can be executed by a user."""

    def __init__(
        self,
        execution_time: datetime.timedelta,
        execution_date: datetime.datetime,
        bpm: int,
        distance_to_traverse: float = 1.0,
    ) -> None:
        super().__init__(execution_time, execution_date, bpm)
        self.distance_to_traverse = distance_to_traverse

    @property
    def distance_to_traverse(self) -> float:
        """Distance of the route to be traversed, in kilometers."""
        return self._distance_to_traverse

    @distance_to_traverse.setter
    def distance_to_traverse(self, value: float) -> None:
        if value <= 0:
            raise ActivityError("Distance to traverse should be a positive number!")
        self._distance_to_traverse = float(value)

    @property
    def kilometers_per_hour(self) -> float:
        return self.distance_to_traverse / self.hours

    def _fields(self) -> Tuple[Any, ...]:
        return super()._fields() + (self._distance_to_traverse,)

    def _repr_fields(self) -> str:
        return (
            f"{super()._repr_fields()}, "
            f"distance_to_traverse={self.distance_to_traverse:.3f}"
        )

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["distance_to_traverse"] = self.distance_to_traverse
        return data

    @classmethod
    def _kwargs_from_dict(cls, data: Dict[str, Any]) -> Dict[str, Any]:
        kwargs = super()._kwargs_from_dict(data)
        kwargs["distance_to_traverse"] = float(data["distance_to_traverse"])
        return kwargs


class ActivityAltimetryDistance(ActivityDistance):
    """A distance activity with altimetry that can be executed by a user."""

    def __init__(
        self,
        execution_time: datetime.timedelta,
        execution_date: datetime.datetime,
        bpm: int,
        distance_to_traverse: float = 1.0,
        altimetry: float = 0.0,
    ) -> None:
        super().__init__(
            execution_time,
            execution_date,
            bpm,
            distance_to_traverse,
        )
        self.altimetry = altimetry

    @property
    def altimetry(self) -> float:
        """Altimetry difficulty level, in [0.0; 1.0]."""
        return self._altimetry

    @altimetry.setter
    def altimetry(self, value: float) -> None:
        if value < 0.0 or value > 1.0:
            raise ActivityError("Altimetry of activity must be in [0.0; 1.0]!")
        self._altimetry = float(value)

    def _fields(self) -> Tuple[Any, ...]:
        return super()._fields() + (self._altimetry,)

    def _repr_fields(self) -> str:
        return f"{super()._repr_fields()}, altimetry={self.altimetry:.3f}"

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["altimetry"] = self.altimetry
        return data

    @classmethod
    def _kwargs_from_dict(cls, data: Dict[str, Any]) -> Dict[str, Any]:
        kwargs = super()._kwargs_from_dict(data)
        kwargs["altimetry"] = float(data["altimetry"])
        return kwargs
