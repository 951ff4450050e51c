"""Numbered option menus."""

from dataclasses import dataclass
from typing import Callable, List, Optional

from fitness.core.user_input import UserInput


@dataclass(frozen=True)
class MenuEntry:
    """An option in a menu. ``handler`` receives the option's 0-based index."""

    text: str
    handler: Callable[[int], None]


class Menu:
    """A list of options from which the user picks one."""

    def __init__(
        self, entries: List[MenuEntry], user_input: Optional[UserInput] = None
    ) -> None:
        self.entries: List[MenuEntry] = list(entries)
        self.user_input: UserInput = (
            user_input if user_input is not None else UserInput()
        )

    def run(self) -> None:
        """
        Show the options, read the user's choice and run its handler.

        Raises:
            EOFError: Input ended before an option was chosen.
        """
        count = len(self.entries)
        self.user_input.print("\nChoose an option ...\n")
        for i, entry in enumerate(self.entries, start=1):
            self.user_input.print(f"  {i} -> {entry.text}")
        self.user_input.print()

        option = self.user_input.read_int(
            "Option > ",
            f"Must be an integer between 1 and {count}!",
            lambda i: 0 < i <= count,
        )
        self.entries[option - 1].handler(option - 1)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Menu):
            return False
        return self.entries == other.entries

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Menu(entries={[e.text for e in self.entries]!r})"
