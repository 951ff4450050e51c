"""Adapter between the console view and the fitness model."""

import calendar
import datetime
import enum
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Type, Union

from fitness.activity import (
    ACTIVITY_CLASSES,
    Activity,
    ActivityAltimetryDistance,
    ActivityDistance,
    ActivityError,
    ActivityRepetition,
    ActivityRepetitionWeighted,
    HardActivity,
)
from fitness.core.model import FitnessModel, FitnessModelError
from fitness.query import (
    QUERY_CLASSES,
    QueryDistance,
    QueryHardestTrainingPlan,
    QueryMostActivities,
    QueryMostCalories,
    QueryMostCommonActivity,
)
from fitness.schedule import ActivityOverlapError
from fitness.user import USER_CLASSES, User, UserError
from fitness.utils.constants import DATE_FORMAT, TIME_FORMAT

Row = List[str]


class FitnessControllerError(RuntimeError):
    """Exception raised when a request from the view can't be fulfilled."""

    pass


@enum.unique
class ActivityExtraField(enum.IntEnum):
    """Fields, beyond duration and date, needed to create an activity."""

    REPETITIONS = 0
    WEIGHT = 1
    DISTANCE = 2
    ALTIMETRY = 3


def _extra_fields(activity_class: Type[Activity]) -> List[ActivityExtraField]:
    fields = []
    if issubclass(activity_class, ActivityRepetition):
        fields.append(ActivityExtraField.REPETITIONS)
    if issubclass(activity_class, ActivityRepetitionWeighted):
        fields.append(ActivityExtraField.WEIGHT)
    if issubclass(activity_class, ActivityDistance):
        fields.append(ActivityExtraField.DISTANCE)
    if issubclass(activity_class, ActivityAltimetryDistance):
        fields.append(ActivityExtraField.ALTIMETRY)
    return fields


_FIELD_KWARGS = {
    ActivityExtraField.REPETITIONS: "number_of_reps",
    ActivityExtraField.WEIGHT: "weights_heft",
    ActivityExtraField.DISTANCE: "distance_to_traverse",
    ActivityExtraField.ALTIMETRY: "altimetry",
}


class FitnessController:
    """Translates view requests into model operations and model data into rows."""

    def __init__(self, model: Optional[FitnessModel] = None) -> None:
        self.logger: logging.Logger = logging.getLogger(self.__class__.__name__)
        self.model: FitnessModel = model if model is not None else FitnessModel()
        self.user_classes: Dict[str, Type[User]] = {
            c.__name__: c for c in USER_CLASSES
        }
        self.activity_classes: Dict[str, Type[Activity]] = {
            c.__name__: c for c in ACTIVITY_CLASSES
        }
        self.activity_fields: Dict[str, List[ActivityExtraField]] = {
            name: _extra_fields(c) for name, c in self.activity_classes.items()
        }
        self.query_classes = {c.__name__: c for c in QUERY_CLASSES}

    def get_user_classes(self) -> List[str]:
        return sorted(self.user_classes)

    def get_activity_classes(self) -> List[str]:
        return sorted(self.activity_classes)

    def get_activity_extra_fields(self, class_name: str) -> List[ActivityExtraField]:
        """
        Get the extra fields needed to create an activity.

        Raises:
            KeyError: Unknown activity class.
        """
        return list(self.activity_fields[class_name])

    def get_query_classes(self) -> List[str]:
        return sorted(self.query_classes)

    def activity_is_hard(self, class_name: str) -> bool:
        """
        Check if an activity class is considered hard.

        Raises:
            KeyError: Unknown activity class.
        """
        return issubclass(self.activity_classes[class_name], HardActivity)

    def is_empty(self) -> bool:
        return self.model.is_empty()

    def user_exists(self, code: int) -> bool:
        return self.model.get_user(code) is not None

    def get_now(self) -> datetime.datetime:
        return self.model.now

    def _get_user(self, code: int) -> User:
        user = self.model.get_user(code)
        if user is None:
            raise FitnessControllerError("User doesn't exist!")
        return user

    def get_users(self) -> List[Row]:
        """
        Get the users in presentable form.

        Returns:
            List[Row]: Rows of code, name, class, address, email and bpm.
        """
        return [
            [
                str(u.code),
                u.name,
                type(u).__name__,
                u.address,
                u.email,
                str(u.average_bpm),
            ]
            for u in self.model.users.values()
        ]

    def _activity_row(self, user: User, activity: Activity) -> Row:
        row = [
            activity.execution_date.strftime(DATE_FORMAT),
            str(int(activity.execution_time.total_seconds() // 60)),
            str(activity.count_calories(user)),
            type(activity).__name__,
            str(activity.bpm),
            "",
            "",
            "",
            "",
        ]
        if isinstance(activity, ActivityRepetition):
            row[5] = str(activity.number_of_reps)
        if isinstance(activity, ActivityRepetitionWeighted):
            row[6] = str(activity.weights_heft)
        if isinstance(activity, ActivityDistance):
            row[7] = str(activity.distance_to_traverse)
        if isinstance(activity, ActivityAltimetryDistance):
            row[8] = str(activity.altimetry)
        return row

    def get_todo_activities(self, code: int) -> List[Row]:
        """
        Get the activities a user still needs to execute.

        Returns:
            List[Row]: Rows of date, minutes, calories, class, bpm, repetitions,
            weight, distance and altimetry.

        Raises:
            FitnessControllerError: User not found.
        """
        user = self._get_user(code)
        return [self._activity_row(user, a) for a in user.activities.todo]

    def get_done_activities(self, code: int) -> List[Row]:
        """
        Get the activities a user has completed. Same columns as
        ``get_todo_activities``.

        Raises:
            FitnessControllerError: User not found.
        """
        user = self._get_user(code)
        return [self._activity_row(user, a) for a in user.activities.done]

    def get_training_plan_days(self, code: int) -> List[str]:
        """
        Get the names of the week days a user executes their training plan.

        Raises:
            FitnessControllerError: User not found.
        """
        user = self._get_user(code)
        return [calendar.day_name[d] for d in user.activities.training_plan.days]

    def get_plan_activities(self, code: int) -> List[Row]:
        """
        Get the activities in a user's training plan.

        Returns:
            List[Row]: Rows of time of day, minutes, calories (of all
            executions), plan repetitions, class, bpm, repetitions, weight,
            distance and altimetry.

        Raises:
            FitnessControllerError: User not found.
        """
        user = self._get_user(code)
        rows = []
        for activity, times in user.activities.training_plan.activities:
            row = self._activity_row(user, activity)
            row[0] = activity.execution_date.strftime(TIME_FORMAT)
            row[2] = str(activity.count_calories(user) * times)
            row.insert(3, str(times))
            rows.append(row)
        return rows

    def add_user(
        self, class_name: str, name: str, address: str, email: str, average_bpm: int
    ) -> int:
        """
        Add a user from the value of its fields.

        Returns:
            int: Code of the new user.

        Raises:
            FitnessControllerError: Unknown user class or invalid field.
        """
        user_class = self.user_classes.get(class_name)
        if user_class is None:
            raise FitnessControllerError(f"No such user class {class_name}")
        try:
            user = user_class(0, name, address, email, average_bpm)
        except UserError as e:
            raise FitnessControllerError(str(e)) from e
        return self.model.add_user(user)

    def _construct_activity(
        self,
        class_name: str,
        minutes: int,
        date: datetime.datetime,
        fields: Dict[ActivityExtraField, Any],
    ) -> Activity:
        activity_class = self.activity_classes.get(class_name)
        if activity_class is None:
            raise FitnessControllerError(f"No such activity class {class_name}")

        kwargs = {_FIELD_KWARGS[field]: value for field, value in fields.items()}
        try:
            # bpm is replaced by the user's when the activity is added
            return activity_class(
                datetime.timedelta(minutes=minutes), date, 1, **kwargs
            )
        except ActivityError as e:
            raise FitnessControllerError(str(e)) from e
        except TypeError as e:
            raise FitnessControllerError(
                f"{class_name} can't be built from the given fields!"
            ) from e

    def add_activity(
        self,
        code: int,
        class_name: str,
        minutes: int,
        date: datetime.datetime,
        fields: Dict[ActivityExtraField, Any],
    ) -> None:
        """
        Add an isolated activity to a user.

        Raises:
            FitnessControllerError: Invalid activity, user not found, activity
                starting before now or overlapping existing activities.
        """
        activity = self._construct_activity(class_name, minutes, date, fields)
        try:
            self.model.add_activity(code, activity)
        except (FitnessModelError, ActivityOverlapError) as e:
            raise FitnessControllerError(str(e)) from e

    def add_activity_to_training_plan(
        self,
        code: int,
        class_name: str,
        minutes: int,
        date: datetime.datetime,
        fields: Dict[ActivityExtraField, Any],
        repetitions: int,
    ) -> None:
        """
        Add an activity to a user's training plan. Only the time of ``date``
        is used.

        Raises:
            FitnessControllerError: Invalid activity, user not found or
                overlapping existing activities.
        """
        activity = self._construct_activity(class_name, minutes, date, fields)
        try:
            self.model.add_activity_to_training_plan(code, activity, repetitions)
        except (FitnessModelError, ActivityOverlapError) as e:
            raise FitnessControllerError(str(e)) from e

    def remove_user(self, code: int) -> None:
        self.model.remove_user(code)

    def set_training_plan_days(self, code: int, days: List[int]) -> None:
        """
        Set the week days (0 is Monday) a user's training plan is executed.

        Raises:
            FitnessControllerError: User not found or overlapping activities.
        """
        try:
            self.model.set_training_plan_days(code, days)
        except (FitnessModelError, ValueError) as e:
            raise FitnessControllerError(str(e)) from e

    def run_query(
        self,
        class_name: str,
        start: Optional[datetime.datetime] = None,
        end: Optional[datetime.datetime] = None,
        code: int = 0,
        altimetry_only: bool = False,
    ) -> str:
        """
        Run a query and describe its result.

        Args:
            class_name: Name of the query class.
            start: Ignore activities that ended before this date.
            end: Ignore activities that ended after this date.
            code: User to consider (QueryDistance only).
            altimetry_only: Only count altimetry activities (QueryDistance only).

        Returns:
            str: Human readable result.

        Raises:
            FitnessControllerError: User not found (QueryDistance only).
        """
        self.logger.debug(f"Running {class_name} ({start} - {end})")

        if class_name == "QueryDistance":
            activity_type = (
                ActivityAltimetryDistance if altimetry_only else ActivityDistance
            )
            distance_query = QueryDistance(activity_type, start, end)
            try:
                self.model.run_query(distance_query, code)
            except FitnessModelError as e:
                raise FitnessControllerError(str(e)) from e
            return f"{distance_query.distance:f} km"

        if class_name == "QueryHardestTrainingPlan":
            plan_query = QueryHardestTrainingPlan()
            self.model.run_query(plan_query)
            if plan_query.max_user is None:
                return "No users!"
            user = plan_query.max_user
            return f"({user.code}) {user.name} - {plan_query.max_calories:f} kcal"

        if class_name == "QueryMostActivities":
            activities_query = QueryMostActivities(start, end)
            self.model.run_query(activities_query)
            if activities_query.max_user is None:
                return "No users!"
            user = activities_query.max_user
            return (
                f"({user.code}) {user.name} - "
                f"{activities_query.max_activities} completed activities"
            )

        if class_name == "QueryMostCalories":
            calories_query = QueryMostCalories(start, end)
            self.model.run_query(calories_query)
            if calories_query.max_user is None:
                return "No users!"
            user = calories_query.max_user
            return f"({user.code}) {user.name} - {calories_query.max_calories:f} kcal"

        if class_name == "QueryMostCommonActivity":
            common_query = QueryMostCommonActivity()
            self.model.run_query(common_query)
            top = common_query.top_activity
            if top is None:
                return "No activities!"
            return f"{top[0]} - {top[1]} executions"

        return f"No such query {class_name}"

    def leap_forward(self, date: datetime.datetime) -> None:
        """
        Advance time, updating which activities have been completed.

        Raises:
            FitnessControllerError: ``date`` not after the current time.
        """
        try:
            self.model.leap_forward(date)
        except FitnessModelError as e:
            raise FitnessControllerError(str(e)) from e

    def load_from_file(self, path: Union[str, Path]) -> None:
        """
        Load the application state from a file.

        Raises:
            FitnessControllerError: Unreadable file or invalid contents.
        """
        try:
            self.model.load_from_file(path)
        except OSError as e:
            self.logger.error(f"Failed to read {path}: {e}")
            raise FitnessControllerError("Failed to read file contents!") from e
        except (ValueError, KeyError, TypeError, AttributeError, OverflowError) as e:
            self.logger.error(f"Invalid contents in {path}: {e}")
            raise FitnessControllerError("Invalid file contents!") from e

    def save_to_file(self, path: Union[str, Path]) -> None:
        """
        Save the application state to a file.

        Raises:
            FitnessControllerError: Failed to write the file.
        """
        try:
            self.model.save_to_file(path)
        except OSError as e:
            self.logger.error(f"Failed to write {path}: {e}")
            raise FitnessControllerError("Failed to write to file!") from e

    def __repr__(self) -> str:
        return f"FitnessController(model={self.model!r})"
