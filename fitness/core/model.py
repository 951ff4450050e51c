"""State of the fitness application: users and the simulated clock."""

import datetime
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Union

import yaml

from fitness.activity import Activity
from fitness.query import Query
from fitness.user import User, user_from_dict


class FitnessModelError(RuntimeError):
    """Exception raised when an operation on the model can't be performed."""

    pass


def _current_minute() -> datetime.datetime:
    return datetime.datetime.now().replace(second=0, microsecond=0)


class FitnessModel:
    """Users of the application (each holding its activities) and current time."""

    def __init__(
        self,
        users: Optional[Dict[int, User]] = None,
        now: Optional[datetime.datetime] = None,
        next_user_code: int = 1,
    ) -> None:
        """
        Initialize the model.

        Args:
            users: Users indexed by their code.
            now: Current time. Defaults to the wall clock, truncated to minutes.
            next_user_code: Code that will be given to the next user added,
                kept above the highest existing code.
        """
        self.logger: logging.Logger = logging.getLogger(self.__class__.__name__)
        self._users: Dict[int, User] = {}
        if users is not None:
            self.users = users
        self.now: datetime.datetime = now if now is not None else _current_minute()
        self.next_user_code: int = max(
            next_user_code, max(self._users, default=0) + 1
        )

    @property
    def users(self) -> Dict[int, User]:
        """Copies of the users, ordered by code."""
        return {code: self._users[code].copy() for code in sorted(self._users)}

    @users.setter
    def users(self, users: Dict[int, User]) -> None:
        """Replace the users. Each copy takes the code it is indexed by."""
        self._users = {}
        for code in sorted(users):
            user = users[code].copy()
            user.code = code
            self._users[code] = user

    def get_user(self, code: int) -> Optional[User]:
        user = self._users.get(code)
        return user.copy() if user is not None else None

    def _require_user(self, code: int) -> User:
        user = self._users.get(code)
        if user is None:
            raise FitnessModelError("User does not exist!")
        return user

    def is_empty(self) -> bool:
        return not self._users

    def add_user(self, user: User) -> int:
        """
        Add a user, assigning it a new identifier code.

        Args:
            user: User to add. Its code is ignored.

        Returns:
            int: Code given to the user.
        """
        code = self.next_user_code
        new_user = user.copy()
        new_user.code = code
        self._users[code] = new_user
        self.next_user_code += 1
        self.logger.info(f"Added {type(user).__name__} {code}: {user.name}")
        return code

    def remove_user(self, code: int) -> None:
        if self._users.pop(code, None) is not None:
            self.logger.info(f"Removed user {code}")

    def set_training_plan_days(self, code: int, days: Iterable[int]) -> None:
        """
        Set the week days when a user's training plan is executed.

        Raises:
            FitnessModelError: User not found.
            ActivityOverlapError: The plan would overlap the user's activities.
        """
        user = self._require_user(code)
        activities = user.activities
        plan = activities.training_plan
        plan.days = days
        activities.set_training_plan(plan)
        user.activities = activities

    def add_activity(self, code: int, activity: Activity) -> None:
        """
        Add an isolated activity to a user. The activity takes the user's bpm.

        Raises:
            FitnessModelError: Activity starts before now or user not found.
            ActivityOverlapError: The activity overlaps existing activities.
        """
        if activity.execution_date < self.now:
            raise FitnessModelError("Activity added starts before current date!")

        user = self._require_user(code)
        activities = user.activities
        new_activity = activity.copy()
        new_activity.bpm = user.average_bpm
        activities.add_activity(new_activity)
        user.activities = activities
        self.logger.debug(f"User {code}: added {new_activity!r}")

    def add_activity_to_training_plan(
        self, code: int, activity: Activity, times: int
    ) -> None:
        """
        Add an activity to a user's training plan. The activity takes the
        user's bpm and its date is ignored.

        Raises:
            FitnessModelError: User not found.
            ActivityOverlapError: The activity overlaps existing activities.
        """
        user = self._require_user(code)
        activities = user.activities
        plan = activities.training_plan
        new_activity = activity.copy()
        new_activity.bpm = user.average_bpm
        plan.add_activity(new_activity, times)
        activities.set_training_plan(plan)
        user.activities = activities
        self.logger.debug(f"User {code}: added {new_activity!r} x{times} to plan")

    def leap_forward(self, date: datetime.datetime) -> None:
        """
        Advance time, updating which activities have been completed.

        Args:
            date: New current time.

        Raises:
            FitnessModelError: ``date`` isn't after the current time.
        """
        if not date > self.now:
            raise FitnessModelError("Date not after current date!")

        # Users are only updated once every leap has succeeded
        updated = {}
        for code, user in self._users.items():
            activities = user.activities
            activities.leap_forward(self.now, date)
            updated[code] = activities
        for code, activities in updated.items():
            self._users[code].activities = activities

        self.logger.info(f"Leaped forward from {self.now} to {date}")
        self.now = date

    def run_query(self, query: Query, code: Optional[int] = None) -> None:
        """
        Feed users to a query.

        Args:
            query: Query to run.
            code: Only feed this user. All users (by code order) if None.

        Raises:
            FitnessModelError: User not found.
        """
        if code is not None:
            query.accept(self._require_user(code))
            return

        for user_code in sorted(self._users):
            query.accept(self._users[user_code])

    def to_dict(self) -> Dict[str, Any]:
        return {
            "now": self.now.isoformat(),
            "next_user_code": self.next_user_code,
            "users": [self._users[code].to_dict() for code in sorted(self._users)],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FitnessModel":
        """
        Rebuild a model serialized with ``to_dict``.

        Raises:
            ValueError: Invalid or overlapping values.
            KeyError: Missing field.
        """
        if not isinstance(data, dict):
            raise ValueError("State must be a YAML mapping")
        users: Dict[int, User] = {}
        for user in (user_from_dict(u) for u in data.get("users") or []):
            if user.code in users:
                raise ValueError(f"Duplicate user code {user.code}")
            users[user.code] = user
        return cls(
            users,
            datetime.datetime.fromisoformat(data["now"]),
            int(data["next_user_code"]),
        )

    def load_from_file(self, path: Union[str, Path]) -> None:
        """
        Replace this model's state with the one saved in a file.

        Args:
            path: YAML file written by ``save_to_file``.

        Raises:
            OSError: Failed to read the file.
            ValueError: Invalid file contents (including YAML syntax errors).
            KeyError: Missing field.
        """
        with Path(path).open("r", encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML: {e}") from e

        loaded = FitnessModel.from_dict(data)
        self._users = loaded._users
        self.now = loaded.now
        self.next_user_code = loaded.next_user_code
        self.logger.info(f"Loaded {len(self._users)} users from {path}")

    def save_to_file(self, path: Union[str, Path]) -> None:
        """
        Save this model's state to a YAML file.

        Raises:
            OSError: Failed to write the file.
        """
        with Path(path).open("w", encoding="utf-8") as f:
            yaml.safe_dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)
        self.logger.info(f"Saved {len(self._users)} users to {path}")

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, FitnessModel):
            return False
        return (
            self._users == other._users
            and self.now == other.now
            and self.next_user_code == other.next_user_code
        )

    __hash__ = None  # type: ignore[assignment]

    def copy(self) -> "FitnessModel":
        return FitnessModel(self._users, self.now, self.next_user_code)

    def __repr__(self) -> str:
        return "FitnessModel(...)"
