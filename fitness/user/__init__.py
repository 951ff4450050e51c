"""Users of the fitness application."""

from fitness.user.user import (
    USER_CLASSES,
    AdvancedUser,
    BeginnerUser,
    IntermediateUser,
    User,
    UserError,
    user_from_dict,
)

__all__ = [
    "USER_CLASSES",
    "AdvancedUser",
    "BeginnerUser",
    "IntermediateUser",
    "User",
    "UserError",
    "user_from_dict",
]
