"""Exercise activities that users can execute."""

from fitness.activity.base import (
    Activity,
    ActivityAltimetryDistance,
    ActivityDistance,
    ActivityError,
    ActivityRepetition,
    ActivityRepetitionWeighted,
    HardActivity,
)
from fitness.activity.kinds import (
    ACTIVITY_CLASSES,
    ActivityDiamondPushUp,
    ActivityMountainRun,
    ActivityPushUp,
    ActivityTrackRun,
    ActivityWeightLifting,
    activity_from_dict,
)

__all__ = [
    "ACTIVITY_CLASSES",
    "Activity",
    "ActivityAltimetryDistance",
    "ActivityDiamondPushUp",
    "ActivityDistance",
    "ActivityError",
    "ActivityMountainRun",
    "ActivityPushUp",
    "ActivityRepetition",
    "ActivityRepetitionWeighted",
    "ActivityTrackRun",
    "ActivityWeightLifting",
    "HardActivity",
    "activity_from_dict",
]
