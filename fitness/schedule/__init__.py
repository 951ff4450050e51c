"""Scheduling of activities: training plans and per-user activity collections."""

from fitness.schedule.training_plan import (
    ActivityNotFoundError,
    ActivityOverlapError,
    TrainingPlan,
    day_names,
)
from fitness.schedule.user_activities import UserActivities

__all__ = [
    "ActivityNotFoundError",
    "ActivityOverlapError",
    "TrainingPlan",
    "UserActivities",
    "day_names",
]
