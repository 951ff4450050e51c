"""Model, controller and console interface of the fitness application."""

from fitness.core.controller import (
    ActivityExtraField,
    FitnessController,
    FitnessControllerError,
)
from fitness.core.menu import Menu, MenuEntry
from fitness.core.model import FitnessModel, FitnessModelError
from fitness.core.user_input import UserInput
from fitness.core.view import FitnessView

__all__ = [
    "ActivityExtraField",
    "FitnessController",
    "FitnessControllerError",
    "FitnessModel",
    "FitnessModelError",
    "FitnessView",
    "Menu",
    "MenuEntry",
    "UserInput",
]
