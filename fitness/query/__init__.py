"""Queries over the users of the fitness application."""

from fitness.query.base import Query, QueryBetweenDates
from fitness.query.queries import (
    QUERY_CLASSES,
    QueryDistance,
    QueryHardestTrainingPlan,
    QueryMostActivities,
    QueryMostCalories,
    QueryMostCommonActivity,
)

__all__ = [
    "QUERY_CLASSES",
    "Query",
    "QueryBetweenDates",
    "QueryDistance",
    "QueryHardestTrainingPlan",
    "QueryMostActivities",
    "QueryMostCalories",
    "QueryMostCommonActivity",
]
