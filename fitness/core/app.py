import datetime
import logging
from logging.handlers import RotatingFileHandler
import os
import re
import sys
import tomllib
from argparse import ArgumentParser
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from fitness.core.controller import FitnessController, FitnessControllerError
from fitness.core.user_input import UserInput
from fitness.core.view import FitnessView
from fitness.preset import YmlHandler
from fitness.utils.colors import Colors
from fitness.utils.constants import (
    DEFAULT_APP_NAME,
    DEFAULT_LOG_DIR,
    DEFAULT_PRESET_FILE,
    DEFAULT_STATE_FILE,
    FALLBACK_VERSION,
    LOG_BACKUP_COUNT,
    LOG_MAX_BYTES,
    PRESET_PATH_ENV,
)


DEFAULT_LOG_FILE = DEFAULT_LOG_DIR / f"{DEFAULT_APP_NAME}.log"


def setup_logging(log_file: Path = DEFAULT_LOG_FILE) -> None:
    """
    Configure logging to file (with rotation) and console.

    Only warnings from ``Core`` reach the console, so that logs don't get mixed
    with the menus.

    Args:
        log_file: Path to log file.
    """
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    root_logger.setLevel(logging.DEBUG)

    log_file.parent.mkdir(parents=True, exist_ok=True)
    file_handler = RotatingFileHandler(
        log_file,
        encoding="utf-8",
        maxBytes=LOG_MAX_BYTES,
        backupCount=LOG_BACKUP_COUNT,
    )
    file_handler.setLevel(logging.DEBUG)
    file_formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    file_handler.setFormatter(file_formatter)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.WARNING)
    console_formatter = logging.Formatter(
        f"{Colors.YELLOW}%(levelname)s{Colors.RESET} %(message)s"
    )
    console_handler.setFormatter(console_formatter)

    class ConsoleFilter(logging.Filter):
        def filter(self, record: logging.LogRecord) -> bool:
            return record.name == "Core"

    console_handler.addFilter(ConsoleFilter())

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)


def get_log_file(path: Path) -> Path:
    """
    Work out the log file from the preset's ``NAME`` and ``LOG_DIR``.

    Args:
        path: Path to preset YAML file.

    Returns:
        Path: Log file, ``logs/fitness.log`` unless the preset says otherwise.
    """
    if not path.exists():
        return DEFAULT_LOG_FILE

    try:
        preset = YmlHandler(path)
    except (OSError, ValueError) as e:
        print(
            f"{Colors.YELLOW}Warning: Failed to read {path}: {e}. Using default log file.{Colors.RESET}"
        )
        return DEFAULT_LOG_FILE

    name = str(preset.get("NAME") or "").strip() or DEFAULT_APP_NAME
    sanitized_name = re.sub(r"[^\w\-_\.]", "_", name)
    if sanitized_name != name:
        print(
            f"{Colors.YELLOW}Warning: Name '{name}' contains invalid filename characters. Using '{sanitized_name}' for log file.{Colors.RESET}"
        )

    return preset.get_path("LOG_DIR", DEFAULT_LOG_DIR) / f"{sanitized_name}.log"


def get_version() -> str:
    """
    Get version from pyproject.toml.

    Returns:
        str: Version string from pyproject.toml.
    """
    pyproject_path = Path(__file__).resolve().parents[2] / "pyproject.toml"
    try:
        with open(pyproject_path, "rb") as f:
            pyproject = tomllib.load(f)
            return pyproject["project"]["version"]
    except (OSError, KeyError, tomllib.TOMLDecodeError):
        return FALLBACK_VERSION


def print_banner() -> None:
    """Print application banner."""
    version = get_version()
    banner = f"""{Colors.CYAN}
 ███████╗██╗████████╗███╗   ██╗███████╗███████╗███████╗
 ██╔════╝██║╚══██╔══╝████╗  ██║██╔════╝██╔════╝██╔════╝
 █████╗  ██║   ██║   ██╔██╗ ██║█████╗  ███████╗███████╗
 ██╔══╝  ██║   ██║   ██║╚██╗██║██╔══╝  ╚════██║╚════██║
 ██║     ██║   ██║   ██║ ╚████║███████╗███████║███████║
 ╚═╝     ╚═╝   ╚═╝   ╚═╝  ╚═══╝╚══════╝╚══════╝╚══════╝{Colors.RESET}
        track your workouts, one leap at a time
                       v{version}
    """
    print(banner)


class Core:
    """Main application controller."""

    def __init__(
        self,
        path: Path,
        load_path: Optional[Path] = None,
        user_input: Optional[UserInput] = None,
    ) -> None:
        """
        Build the application from a preset.

        Args:
            path: Preset YAML file. Defaults are used if it doesn't exist.
            load_path: State file loaded at start-up, overriding ``AUTOLOAD``.
            user_input: Console streams used by the menus.

        Raises:
            ValueError: The preset isn't a YAML mapping.
        """
        self.logger: logging.Logger = logging.getLogger(self.__class__.__name__)

        self.preset_path: Path = path
        self.preset: YmlHandler = YmlHandler(self.preset_path)
        self.state_file: Path = self.preset.get_path("STATE_FILE", DEFAULT_STATE_FILE)
        self.autoload: bool = self.preset.get_bool("AUTOLOAD", False)
        self.autosave: bool = self.preset.get_bool("AUTOSAVE", False)
        self.load_path: Optional[Path] = load_path

        self.controller: FitnessController = FitnessController()
        self.view: FitnessView = FitnessView(self.controller, user_input)
        self.logger.debug(
            f"Preset {self.preset_path}: state={self.state_file}, "
            f"autoload={self.autoload}, autosave={self.autosave}"
        )

    def _load_state(self) -> None:
        """
        Load the state requested with ``--load``, or the preset's state file
        when autoload is on.

        Raises:
            FitnessControllerError: The ``--load`` file couldn't be loaded.
        """
        if self.load_path is not None:
            self.controller.load_from_file(self.load_path)
            self.logger.info(f"Loaded state from {self.load_path}")
            return

        if not self.autoload:
            return
        if not self.state_file.exists():
            self.logger.info(f"No state in {self.state_file}, starting empty")
            return

        try:
            self.controller.load_from_file(self.state_file)
            self.logger.info(f"Loaded state from {self.state_file}")
        except FitnessControllerError as e:
            self.logger.warning(f"Couldn't load {self.state_file}: {e}")

    def _save_state(self) -> None:
        if not self.autosave:
            return

        try:
            self.controller.save_to_file(self.state_file)
        except FitnessControllerError as e:
            self.logger.error(f"Couldn't save {self.state_file}: {e}")
            return

        self.logger.info(f"Saved state to {self.state_file}")
        if self.preset_path.exists():
            self.preset.set(
                "LAST_SAVED", datetime.datetime.now().isoformat(timespec="seconds")
            )

    def run(self) -> None:
        """Run the menus until the user exits, saving the state on the way out."""
        print_banner()
        self._load_state()
        try:
            self.view.run()
        finally:
            self._save_state()


def main(argv: Optional[List[str]] = None) -> None:
    load_dotenv()

    parser = ArgumentParser(description="Fitness - Console workout tracker")
    parser.add_argument(
        "--path",
        help=f"Path to preset file (overrides {PRESET_PATH_ENV} env var)",
        default=None,
        type=str,
    )
    parser.add_argument(
        "--load",
        help="State file to load at start-up",
        default=None,
        type=str,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {get_version()}",
    )
    args = parser.parse_args(argv)
    path = Path(args.path or os.environ.get(PRESET_PATH_ENV, str(DEFAULT_PRESET_FILE)))

    if not path.exists():
        print(
            f"{Colors.YELLOW}Warning: Preset file {path} does not exist, using defaults{Colors.RESET}"
        )

    log_file = get_log_file(path)
    print(f"{Colors.DIM}Logging to: {log_file.absolute()}{Colors.RESET}\n")
    setup_logging(log_file)

    try:
        core = Core(path, Path(args.load) if args.load else None)
        core.run()
    except KeyboardInterrupt:
        print(
            f"\n{Colors.GREEN}OK{Colors.RESET} {Colors.WHITE}Exiting cleanly...{Colors.RESET}\n"
        )
        logging.info("Interrupted by user. Exiting cleanly...")
        sys.exit(0)
    except SystemExit:
        raise
    except Exception as e:
        logging.critical(f"Fatal Error: {e}", exc_info=True)
        print(f"\n{Colors.RED}ERR {e}{Colors.RESET}\n")
        sys.exit(1)


if __name__ == "__main__":
    main()
