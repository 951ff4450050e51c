"""Users of the fitness application."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Type

from fitness.schedule import UserActivities


class UserError(ValueError):
    """Exception raised when a user field is given an invalid value."""

    pass


class User(ABC):
    """A user of the fitness application."""

    def __init__(
        self,
        code: int,
        name: str,
        address: str,
        email: str,
        average_bpm: int,
        activities: Optional[UserActivities] = None,
    ) -> None:
        """
        Initialize a user.

        Args:
            code: Identifier code.
            name: Full name.
            address: Street address.
            email: Email address.
            average_bpm: Average cardiac rhythm when exercising.
            activities: Activities to execute and already executed.

        Raises:
            UserError: Non-positive ``average_bpm``.
        """
        self.code = code
        self.name = name
        self.address = address
        self.email = email
        self.average_bpm = average_bpm
        self._activities: UserActivities = (
            activities.copy() if activities is not None else UserActivities()
        )

    @property
    def average_bpm(self) -> int:
        return self._average_bpm

    @average_bpm.setter
    def average_bpm(self, bpm: int) -> None:
        if bpm <= 0:
            raise UserError("The average BPM of an user must be a positive number!")
        self._average_bpm = bpm

    @property
    def activities(self) -> UserActivities:
        return self._activities.copy()

    @activities.setter
    def activities(self, activities: UserActivities) -> None:
        self._activities = activities.copy()

    @property
    @abstractmethod
    def calorie_multiplier(self) -> float:
        """Multiplier applied to the calories of every activity of this user."""
        pass

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if other is None or type(self) is not type(other):
            return False
        return (
            self.code == other.code  # type: ignore[attr-defined]
            and self.name == other.name  # type: ignore[attr-defined]
            and self.address == other.address  # type: ignore[attr-defined]
            and self.email == other.email  # type: ignore[attr-defined]
            and self.average_bpm == other.average_bpm  # type: ignore[attr-defined]
            and self._activities == other._activities  # type: ignore[attr-defined]
        )

    __hash__ = None  # type: ignore[assignment]

    def __lt__(self, other: "User") -> bool:
        return self.code < other.code

    def copy(self) -> "User":
        return type(self)(
            self.code,
            self.name,
            self.address,
            self.email,
            self.average_bpm,
            self._activities,
        )

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(code={self.code}, name={self.name!r}, "
            f"address={self.address!r}, email={self.email!r}, "
            f"average_bpm={self.average_bpm}, activities={self._activities!r})"
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": type(self).__name__,
            "code": self.code,
            "name": self.name,
            "address": self.address,
            "email": self.email,
            "average_bpm": self.average_bpm,
            "activities": self._activities.to_dict(),
        }


class BeginnerUser(User):
    """A beginner user of the fitness application."""

    @property
    def calorie_multiplier(self) -> float:
        return 1.0


class IntermediateUser(User):
    """An intermediate user of the fitness application."""

    @property
    def calorie_multiplier(self) -> float:
        return 1.25


class AdvancedUser(User):
    """An advanced user of the fitness application."""

    @property
    def calorie_multiplier(self) -> float:
        return 1.5


USER_CLASSES: List[Type[User]] = [AdvancedUser, BeginnerUser, IntermediateUser]

_BY_NAME: Dict[str, Type[User]] = {c.__name__: c for c in USER_CLASSES}


def user_from_dict(data: Dict[str, Any]) -> User:
    """
    Rebuild a user serialized with ``User.to_dict``.

    Args:
        data: Dictionary tagged with the user class name.

    Returns:
        User: New user instance.

    Raises:
        ValueError: Unknown user type or invalid field value.
        KeyError: Missing field.
    """
    user_class = _BY_NAME.get(data.get("type", ""))
    if user_class is None:
        raise ValueError(f"Unknown user type: {data.get('type')!r}")
    return user_class(
        int(data["code"]),
        str(data["name"]),
        str(data["address"]),
        str(data["email"]),
        int(data["average_bpm"]),
        UserActivities.from_dict(data.get("activities") or {}),
    )
