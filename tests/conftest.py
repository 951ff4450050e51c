"""
Pytest configuration and shared fixtures.
"""

import datetime
import io
import logging
import tempfile
from pathlib import Path

import pytest
import yaml

from fitness.activity import ActivityMountainRun, ActivityPushUp
from fitness.core import FitnessController, FitnessModel, UserInput
from fitness.preset import YmlHandler
from fitness.schedule import TrainingPlan, UserActivities
from fitness.user import AdvancedUser, BeginnerUser, IntermediateUser

MONDAY = 0
FRIDAY = 4


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_preset_file(temp_dir):
    """Create a temporary fitness.yml file."""
    preset_path = temp_dir / "fitness.yml"
    preset_data = {
        "NAME": "test_gym",
        "STATE_FILE": "state.yml",
        "AUTOLOAD": True,
        "AUTOSAVE": True,
        "LOG_DIR": "logs",
    }
    with preset_path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(preset_data, f)
    return preset_path


@pytest.fixture
def preset_handler(temp_preset_file):
    """Create a YmlHandler instance with test preset."""
    return YmlHandler(temp_preset_file)


@pytest.fixture(autouse=True)
def reset_environment(monkeypatch):
    """Reset environment variables before each test."""
    monkeypatch.delenv("FITNESS_PRESET", raising=False)
    yield


@pytest.fixture
def restore_logging():
    """Restore root logger handlers changed by setup_logging."""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(level)


@pytest.fixture
def beginner():
    return BeginnerUser(
        1, "Humberto Gomes", "UMinho", "a104348@alunos.uminho.pt", 90
    )


@pytest.fixture
def intermediate():
    return IntermediateUser(2, "José Lopes", "UMinho", "a104541@alunos.uminho.pt", 60)


@pytest.fixture
def advanced():
    return AdvancedUser(3, "Diogo Barros", "UMinho", "diogo@alunos.uminho.pt", 50)


@pytest.fixture
def training_plan():
    """Monday and Friday plan: a mountain run at 10:00, three push-up sets at 11:00."""
    return TrainingPlan(
        [
            (
                ActivityMountainRun(
                    datetime.timedelta(minutes=50),
                    datetime.datetime(2024, 5, 6, 10, 0),
                    90,
                    8.0,
                    0.3,
                ),
                1,
            ),
            (
                ActivityPushUp(
                    datetime.timedelta(minutes=10),
                    datetime.datetime(2024, 5, 6, 11, 0),
                    100,
                    20,
                ),
                3,
            ),
        ],
        [MONDAY, FRIDAY],
    )


@pytest.fixture
def user_activities():
    """Two push-ups on Monday 2024-05-06 and a Friday morning mountain run plan."""
    plan = TrainingPlan(
        [
            (
                ActivityMountainRun(
                    datetime.timedelta(minutes=50),
                    datetime.datetime(1, 1, 1, 8, 0),
                    90,
                    8.0,
                    0.3,
                ),
                1,
            )
        ],
        [FRIDAY],
    )
    todo = [
        ActivityPushUp(
            datetime.timedelta(minutes=10), datetime.datetime(2024, 5, 6, 11, 0), 100, 20
        ),
        ActivityPushUp(
            datetime.timedelta(minutes=10), datetime.datetime(2024, 5, 6, 11, 20), 100, 20
        ),
    ]
    return UserActivities(todo, [], plan)


@pytest.fixture
def model(beginner, intermediate, advanced):
    return FitnessModel(
        {1: beginner, 2: intermediate, 3: advanced},
        datetime.datetime(2024, 1, 1, 0, 0),
    )


@pytest.fixture
def controller(model):
    return FitnessController(model)


@pytest.fixture
def make_input():
    """Build a UserInput reading the given text, with captured output streams."""

    def factory(text: str) -> UserInput:
        return UserInput(io.StringIO(text), io.StringIO(), io.StringIO())

    return factory
