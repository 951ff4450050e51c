"""Interactive console interface of the fitness application."""

import calendar
import logging
from typing import Any, Dict, List, Optional

from fitness.core.controller import (
    ActivityExtraField,
    FitnessController,
    FitnessControllerError,
)
from fitness.core.menu import Menu, MenuEntry
from fitness.core.user_input import UserInput
from fitness.utils.constants import DATE_FORMAT

USER_HEADER = ["Code", "Name", "Class", "Address", "Email", "BPM"]
USER_FORMAT = "%5s %-25s %-25s %-25s %-25s %5s"
ACTIVITY_HEADER = [
    "Date",
    "Duration",
    "Calories",
    "Class",
    "BPM",
    "Repetitions",
    "Weight",
    "Distance",
    "Altimetry",
]
ACTIVITY_FORMAT = "%-20s %8s %8s %-25s %5s %11s %6s %8s %9s"
PLAN_HEADER = ACTIVITY_HEADER[:3] + ["Plan reps"] + ACTIVITY_HEADER[3:]
PLAN_FORMAT = "%-10s %8s %8s %9s %-25s %5s %11s %6s %8s %9s"

NO_USERS = "No users yet!"


def _go_back(_: int) -> None:
    pass


class FitnessView:
    """Menu driven interface over a ``FitnessController``."""

    def __init__(
        self,
        controller: Optional[FitnessController] = None,
        user_input: Optional[UserInput] = None,
    ) -> None:
        self.logger: logging.Logger = logging.getLogger(self.__class__.__name__)
        self.controller: FitnessController = (
            controller if controller is not None else FitnessController()
        )
        self.input: UserInput = user_input if user_input is not None else UserInput()
        self.exit_requested: bool = False

    def _menu(self, entries: List[MenuEntry]) -> None:
        Menu(entries, self.input).run()

    def _read_user_code(self) -> int:
        return self.input.read_int(
            "User code > ", "User doesn't exist!", self.controller.user_exists
        )

    def _print_table(
        self, row_format: str, header: List[str], rows: List[List[str]]
    ) -> None:
        self.input.print(row_format % tuple(header))
        for row in rows:
            self.input.print(row_format % tuple(row))

    def add_user(self) -> None:
        classes = self.controller.get_user_classes()

        def handler(i: int) -> None:
            name = self.input.read_string("Name > ")
            address = self.input.read_string("Address > ")
            email = self.input.read_string("Email > ")
            bpm = self.input.read_int(
                "BPM > ", "Must be a positive integer!", lambda b: b > 0
            )
            code = self.controller.add_user(classes[i], name, address, email, bpm)
            self.input.print(f"User {code} successfully added!")

        self._menu([MenuEntry(name, handler) for name in classes])

    def _read_extra_fields(
        self, fields: List[ActivityExtraField]
    ) -> Dict[ActivityExtraField, Any]:
        values: Dict[ActivityExtraField, Any] = {}
        if ActivityExtraField.REPETITIONS in fields:
            values[ActivityExtraField.REPETITIONS] = self.input.read_int(
                "Repetitions > ", "Must be a positive integer!", lambda r: r > 0
            )
        if ActivityExtraField.WEIGHT in fields:
            values[ActivityExtraField.WEIGHT] = self.input.read_float(
                "Weight (kg) > ", "Must be a positive decimal!", lambda w: w > 0.0
            )
        if ActivityExtraField.DISTANCE in fields:
            values[ActivityExtraField.DISTANCE] = self.input.read_float(
                "Distance (km) > ", "Must be a positive decimal!", lambda d: d > 0.0
            )
        if ActivityExtraField.ALTIMETRY in fields:
            values[ActivityExtraField.ALTIMETRY] = self.input.read_float(
                "Altimetry > ",
                "Must be a decimal in [0.0; 1.0]!",
                lambda a: 0.0 <= a <= 1.0,
            )
        return values

    def add_activity(self, code: int, to_training_plan: bool) -> None:
        """
        Ask for an activity and add it to a user.

        Args:
            code: User receiving the activity.
            to_training_plan: Add to the training plan instead of the todo list.
                Only the time of day is asked in that case.
        """
        classes = self.controller.get_activity_classes()

        def handler(i: int) -> None:
            minutes = self.input.read_int(
                "Duration (min) > ", "Must be a positive integer!", lambda m: m > 0
            )
            date = self.input.read_date(
                not to_training_plan,
                "Invalid date or before current one!",
                lambda d: to_training_plan or d >= self.controller.get_now(),
            )
            values = self._read_extra_fields(
                self.controller.get_activity_extra_fields(classes[i])
            )

            if to_training_plan:
                repetitions = self.input.read_int(
                    "Plan repetitions > ",
                    "Must be a positive integer!",
                    lambda r: r > 0,
                )
                self.controller.add_activity_to_training_plan(
                    code, classes[i], minutes, date, values, repetitions
                )
            else:
                self.controller.add_activity(code, classes[i], minutes, date, values)
            self.input.print("Activity added with success!")

        entries = []
        for name in classes:
            hard = " (HARD)" if self.controller.activity_is_hard(name) else ""
            entries.append(MenuEntry(f"{name}{hard}", handler))
        self._menu(entries)

    def add_entity(self) -> None:
        def activity_handler(_: int) -> None:
            if self.controller.is_empty():
                self.input.error(NO_USERS)
                return

            code = self._read_user_code()
            self._menu(
                [
                    MenuEntry(
                        "Single activity", lambda j: self.add_activity(code, False)
                    ),
                    MenuEntry(
                        "Add to training plan", lambda j: self.add_activity(code, True)
                    ),
                    MenuEntry("Go back", _go_back),
                ]
            )

        self._menu(
            [
                MenuEntry("Add new user", lambda i: self.add_user()),
                MenuEntry("Add new activity", activity_handler),
                MenuEntry("Go back", _go_back),
            ]
        )

    def list_entities(self) -> None:
        def handler(i: int) -> None:
            if i == 0:
                self._print_table(USER_FORMAT, USER_HEADER, self.controller.get_users())
                return

            code = self._read_user_code()
            if i == 1:
                rows = self.controller.get_todo_activities(code)
                self._print_table(ACTIVITY_FORMAT, ACTIVITY_HEADER, rows)
            elif i == 2:
                rows = self.controller.get_done_activities(code)
                self._print_table(ACTIVITY_FORMAT, ACTIVITY_HEADER, rows)
            else:
                days = self.controller.get_training_plan_days(code)
                self.input.print(f"Executed on: {', '.join(days) or '-'}")
                rows = self.controller.get_plan_activities(code)
                self._print_table(PLAN_FORMAT, PLAN_HEADER, rows)

        self._menu(
            [
                MenuEntry("List users", handler),
                MenuEntry("List undone activities", handler),
                MenuEntry("List completed activities", handler),
                MenuEntry("List activities in training plan", handler),
                MenuEntry("Go back", _go_back),
            ]
        )

    def modify_remove(self) -> None:
        if self.controller.is_empty():
            self.input.error(NO_USERS)
            return

        def handler(i: int) -> None:
            code = self._read_user_code()
            if i == 0:
                self.controller.remove_user(code)
            else:
                days = [
                    day
                    for day in range(7)
                    if self.input.read_yes_no(f" {calendar.day_name[day]} (y/n) > ")
                ]
                self.controller.set_training_plan_days(code, days)
            self.input.print("Successful operation!")

        self._menu(
            [
                MenuEntry("Remove user", handler),
                MenuEntry("Edit training plan days", handler),
                MenuEntry("Go back", _go_back),
            ]
        )

    def run_query(self) -> None:
        if self.controller.is_empty():
            self.input.error(NO_USERS)
            return

        classes = self.controller.get_query_classes()

        def handler(i: int) -> None:
            name = classes[i]
            start = end = None
            code = 0
            altimetry_only = [False]

            if name == "QueryDistance":
                code = self._read_user_code()

                def set_altimetry(j: int) -> None:
                    altimetry_only[0] = j == 1

                self._menu(
                    [
                        MenuEntry("All distance", set_altimetry),
                        MenuEntry("Altimetry only", set_altimetry),
                    ]
                )

            if name not in ("QueryMostCommonActivity", "QueryHardestTrainingPlan"):
                self.input.print("Input begin date:")
                start = self.input.read_date(True, "Invalid date!")
                self.input.print("Input end date:")
                end = self.input.read_date(True, "Invalid date!")

            self.input.print(
                self.controller.run_query(name, start, end, code, altimetry_only[0])
            )

        self._menu([MenuEntry(name, handler) for name in classes])

    def time_operations(self) -> None:
        def show_now(_: int) -> None:
            self.input.print(self.controller.get_now().strftime(DATE_FORMAT))

        def leap(_: int) -> None:
            date = self.input.read_date(
                True,
                "Invalid date or not after current one!",
                lambda d: d > self.controller.get_now(),
            )
            self.controller.leap_forward(date)

        self._menu(
            [
                MenuEntry("Get current time", show_now),
                MenuEntry("Leap forward to", leap),
                MenuEntry("Go back", _go_back),
            ]
        )

    def file_operations(self) -> None:
        def handler(i: int) -> None:
            path = self.input.read_string("Path > ")
            if i == 0:
                self.controller.load_from_file(path)
            else:
                self.controller.save_to_file(path)
            self.input.print("Operation successful!")

        self._menu(
            [
                MenuEntry("Load state from file", handler),
                MenuEntry("Save state to file", handler),
                MenuEntry("Go back", _go_back),
            ]
        )

    def request_exit(self, _: int = 0) -> None:
        self.exit_requested = True

    def run(self) -> None:
        """Show the main menu until the user exits or input ends."""
        entries = [
            MenuEntry("Add entity", lambda i: self.add_entity()),
            MenuEntry("List entities", lambda i: self.list_entities()),
            MenuEntry("Modify or remove entities", lambda i: self.modify_remove()),
            MenuEntry("Run query", lambda i: self.run_query()),
            MenuEntry("Time operations", lambda i: self.time_operations()),
            MenuEntry("File operations", lambda i: self.file_operations()),
            MenuEntry("Exit", self.request_exit),
        ]

        self.exit_requested = False
        while not self.exit_requested:
            try:
                self._menu(entries)
            except FitnessControllerError as e:
                self.logger.warning(f"Operation failed: {e}")
                self.input.error(str(e))
            except EOFError:
                self.logger.info("Input closed")
                self.input.print()
                return

    def __repr__(self) -> str:
        return f"FitnessView(controller={self.controller!r})"
