"""Concrete exercise kinds and their calorie models.

Calories follow the Metabolic Equivalent of Task (MET) of each exercise,
scaled by the user's heart rate and calorie multiplier.
"""

from typing import TYPE_CHECKING, Any, Dict, List, Type

from fitness.activity.base import (
    Activity,
    ActivityAltimetryDistance,
    ActivityDistance,
    ActivityRepetition,
    ActivityRepetitionWeighted,
    HardActivity,
)

if TYPE_CHECKING:
    from fitness.user import User


class ActivityPushUp(ActivityRepetition):
    """A push-up activity that can be executed by a user."""

    def count_calories(self, user: "User") -> float:
        met = 3.8 if self.number_of_reps <= 40 else 7.5
        return met * self.bpm * self.hours * user.calorie_multiplier


class ActivityDiamondPushUp(ActivityRepetition, HardActivity):
    """A diamond push-up activity that can be executed by a user."""

    def count_calories(self, user: "User") -> float:
        met = 4.5 if self.number_of_reps <= 40 else 9.0
        return met * self.bpm * self.hours * user.calorie_multiplier


class ActivityTrackRun(ActivityDistance, HardActivity):
    """A track run activity that can be executed by a user."""

    def count_calories(self, user: "User") -> float:
        kmh = self.kilometers_per_hour
        if kmh <= 6.7593:
            met = 6.5
        elif kmh <= 12.0701:
            met = 11.8
        elif kmh <= 15.4497:
            met = 14.8
        else:
            # High competition track racing
            met = 18.0

        return met * self.bpm * self.distance_to_traverse * user.calorie_multiplier


class ActivityMountainRun(ActivityAltimetryDistance):
    """A mountain run activity, harder the more variable its altitude is."""

    def count_calories(self, user: "User") -> float:
        kmh = self.kilometers_per_hour
        if kmh <= 7.24:
            met = 10.3
        elif kmh <= 9.66:
            met = 13.3
        else:
            met = 15.5

        return (
            met
            * self.bpm
            * self.hours
            * (1.0 + self.altimetry)
            * user.calorie_multiplier
        )


class ActivityWeightLifting(ActivityRepetitionWeighted, HardActivity):
    """A weight lifting activity that can be executed by a user."""

    def count_calories(self, user: "User") -> float:
        if self.number_of_reps <= 15:
            met = 3.5
        elif self.number_of_reps <= 30:
            met = 5.0
        else:
            met = 6.0

        return met * self.bpm * (self.weights_heft / 200.0) * user.calorie_multiplier


ACTIVITY_CLASSES: List[Type[Activity]] = [
    ActivityDiamondPushUp,
    ActivityMountainRun,
    ActivityPushUp,
    ActivityTrackRun,
    ActivityWeightLifting,
]

_BY_NAME: Dict[str, Type[Activity]] = {c.__name__: c for c in ACTIVITY_CLASSES}


def activity_from_dict(data: Dict[str, Any]) -> Activity:
    """
    Rebuild an activity serialized with ``Activity.to_dict``.

    Args:
        data: Dictionary tagged with the activity class name.

    Returns:
        Activity: New activity instance.

    Raises:
        ValueError: Unknown activity type or invalid field value.
        KeyError: Missing field.
    """
    activity_class = _BY_NAME.get(data.get("type", ""))
    if activity_class is None:
        raise ValueError(f"Unknown activity type: {data.get('type')!r}")
    return activity_class(**activity_class._kwargs_from_dict(data))
