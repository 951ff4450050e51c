"""Validated line-based console input."""

import datetime
import sys
from typing import Any, Callable, Optional, TextIO

from fitness.utils.colors import Colors


class UserInput:
    """
    Reads and validates values typed by the user.

    Prompts go to ``stdout`` and errors to ``stderr``. Reading past the end of
    ``stdin`` raises ``EOFError``.
    """

    def __init__(
        self,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
    ) -> None:
        self.stdin: TextIO = stdin if stdin is not None else sys.stdin
        self.stdout: TextIO = stdout if stdout is not None else sys.stdout
        self.stderr: TextIO = stderr if stderr is not None else sys.stderr

    def print(self, text: str = "") -> None:
        print(text, file=self.stdout)

    def error(self, text: str) -> None:
        print(f"{Colors.RED}{text}{Colors.RESET}", file=self.stderr)

    def _readline(self, prompt: str) -> str:
        self.stdout.write(prompt)
        self.stdout.flush()
        line = self.stdin.readline()
        if not line:
            raise EOFError("End of input")
        return line.rstrip("\r\n")

    def read(
        self,
        prompt: str,
        error: Optional[str],
        validate: Callable[[str], bool],
        convert: Callable[[str], Any],
    ) -> Any:
        """
        Keep reading lines until one is valid.

        Args:
            prompt: Text shown before each attempt.
            error: Message shown after an invalid line. Nothing is shown if None.
            validate: Checks whether a line is acceptable.
            convert: Turns the accepted line into the returned value.

        Returns:
            Any: Converted value.

        Raises:
            EOFError: Input ended before a valid line was read.
        """
        while True:
            line = self._readline(prompt)
            if validate(line):
                return convert(line)
            if error is not None:
                self.error(error)

    def read_string(
        self,
        prompt: str,
        error: Optional[str] = None,
        validate: Callable[[str], bool] = lambda s: True,
    ) -> str:
        return self.read(prompt, error, validate, lambda s: s)

    def read_int(
        self, prompt: str, error: str, validate: Callable[[int], bool] = lambda i: True
    ) -> int:
        def check(line: str) -> bool:
            try:
                return validate(int(line))
            except ValueError:
                return False

        return self.read(prompt, error, check, int)

    def read_float(
        self,
        prompt: str,
        error: str,
        validate: Callable[[float], bool] = lambda f: True,
    ) -> float:
        def check(line: str) -> bool:
            try:
                return validate(float(line))
            except ValueError:
                return False

        return self.read(prompt, error, check, float)

    def read_yes_no(self, prompt: str) -> bool:
        return self.read(
            prompt, "Must be y/n!", lambda s: s in ("y", "n"), lambda s: s == "y"
        )

    def read_date(
        self,
        read_ymd: bool,
        error: str,
        validate: Callable[[datetime.datetime], bool] = lambda d: True,
    ) -> datetime.datetime:
        """
        Read a date field by field, until it is valid and accepted by ``validate``.

        Args:
            read_ymd: Ask for year, month and day. Otherwise only the time of
                day is read, on 0001-01-01.
            error: Message shown for impossible or rejected dates.
            validate: Extra check on the full date.

        Returns:
            datetime.datetime: Date read.
        """
        while True:
            year, month, day = 1, 1, 1
            if read_ymd:
                year = self.read_int("Year > ", "Must be an integer!")
                month = self.read_int("Month > ", "Must be an integer!")
                day = self.read_int("Day > ", "Must be an integer!")
            hour = self.read_int("Hour > ", "Must be an integer!")
            minute = self.read_int("Minute > ", "Must be an integer!")

            try:
                date = datetime.datetime(year, month, day, hour, minute)
            except (ValueError, OverflowError):
                self.error(error)
                continue

            if validate(date):
                return date
            self.error(error)
