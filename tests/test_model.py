"""
Tests for core.FitnessModel.
"""

import datetime

import pytest
import yaml

from fitness.activity import ActivityPushUp, ActivityTrackRun
from fitness.core import FitnessModel, FitnessModelError
from fitness.query import QueryMostActivities
from fitness.schedule import ActivityOverlapError, UserActivities
from fitness.user import BeginnerUser

from conftest import MONDAY


def push_up(date, bpm=1):
    return ActivityPushUp(datetime.timedelta(minutes=10), date, bpm, 20)


class TestFitnessModel:
    """Test suite for FitnessModel."""

    def test_users_are_copied(self, model):
        """Test that users can't be changed through the getters."""
        model.users[1].name = "Changed"
        model.get_user(1).name = "Changed"
        assert model.get_user(1).name == "Humberto Gomes"

    def test_users_take_their_index_as_code(self):
        """Test that users are stored under the code they are indexed by."""
        user = BeginnerUser(2, "A", "B", "C", 80)
        model = FitnessModel({3: user})
        assert model.get_user(3).code == 3
        assert model.next_user_code == 4

    def test_add_user(self, model):
        """Test that new users get sequential codes."""
        user = BeginnerUser(0, "New", "Street", "new@mail.com", 70)
        assert model.add_user(user) == 4
        assert model.add_user(user) == 5
        assert model.get_user(4).name == "New"
        assert model.get_user(5).code == 5

    def test_remove_user(self, model):
        """Test removing users, ignoring unknown codes."""
        model.remove_user(2)
        model.remove_user(42)
        assert list(model.users) == [1, 3]
        assert model.get_user(2) is None

    def test_is_empty(self, model):
        """Test is_empty on empty and populated models."""
        assert FitnessModel().is_empty()
        assert not model.is_empty()

    def test_default_now_truncated_to_minutes(self):
        """Test that the default current time has no seconds."""
        now = FitnessModel().now
        assert now.second == 0
        assert now.microsecond == 0

    def test_add_activity_takes_user_bpm(self, model):
        """Test that added activities use the user's average bpm."""
        model.add_activity(1, push_up(datetime.datetime(2024, 1, 2, 10, 0)))
        todo = model.get_user(1).activities.todo
        assert len(todo) == 1
        assert todo[0].bpm == 90

    def test_add_activity_before_now(self, model):
        """Test that activities can't start in the past."""
        with pytest.raises(FitnessModelError, match="before current date"):
            model.add_activity(1, push_up(datetime.datetime(2023, 12, 31, 10, 0)))

    def test_add_activity_unknown_user(self, model):
        """Test adding an activity to a user that doesn't exist."""
        with pytest.raises(FitnessModelError, match="User does not exist"):
            model.add_activity(42, push_up(datetime.datetime(2024, 1, 2, 10, 0)))

    def test_add_activity_overlap(self, model):
        """Test that overlap errors reach the caller."""
        model.add_activity(1, push_up(datetime.datetime(2024, 1, 2, 10, 0)))
        with pytest.raises(ActivityOverlapError):
            model.add_activity(1, push_up(datetime.datetime(2024, 1, 2, 10, 5)))

    def test_training_plan(self, model):
        """Test editing a user's training plan."""
        model.add_activity_to_training_plan(
            2, push_up(datetime.datetime(2024, 1, 1, 7, 0)), 2
        )
        model.set_training_plan_days(2, [MONDAY])

        plan = model.get_user(2).activities.training_plan
        assert plan.days == [MONDAY]
        activity, times = plan.activities[0]
        assert times == 2
        assert activity.bpm == 60

    def test_set_training_plan_days_overlap(self, model):
        """Test that plan days can't overlap todo activities."""
        model.add_activity_to_training_plan(
            1, push_up(datetime.datetime(2024, 1, 1, 7, 0)), 1
        )
        # 2024-01-08 is a Monday
        model.add_activity(1, push_up(datetime.datetime(2024, 1, 8, 7, 5)))
        with pytest.raises(ActivityOverlapError):
            model.set_training_plan_days(1, [MONDAY])
        assert model.get_user(1).activities.training_plan.days == []

    def test_leap_forward(self, model):
        """Test that leaping completes activities and plan executions."""
        model.add_activity(1, push_up(datetime.datetime(2024, 1, 2, 10, 0)))
        model.add_activity_to_training_plan(
            2, push_up(datetime.datetime(2024, 1, 1, 7, 0)), 1
        )
        model.set_training_plan_days(2, [MONDAY])

        model.leap_forward(datetime.datetime(2024, 1, 8, 12, 0))
        assert model.now == datetime.datetime(2024, 1, 8, 12, 0)
        assert len(model.get_user(1).activities.done) == 1
        assert model.get_user(1).activities.todo == []
        # Mondays 2024-01-01 and 2024-01-08
        assert len(model.get_user(2).activities.done) == 2

    def test_leap_forward_to_last_supported_day(self, beginner):
        """Test leaping to the last day a datetime can hold."""
        model = FitnessModel({1: beginner}, datetime.datetime(9999, 12, 30))
        model.add_activity_to_training_plan(
            1, push_up(datetime.datetime(9999, 12, 30, 7, 0)), 1
        )
        model.set_training_plan_days(1, list(range(7)))

        model.leap_forward(datetime.datetime(9999, 12, 31, 12, 0))
        assert model.now == datetime.datetime(9999, 12, 31, 12, 0)
        done = model.get_user(1).activities.done
        assert [a.execution_date.day for a in done] == [30, 31]

    def test_leap_forward_failure_keeps_state(self, model, monkeypatch):
        """Test that no user changes when a leap fails part way."""
        model.add_activity(1, push_up(datetime.datetime(2024, 1, 2, 10, 0)))
        leap = UserActivities.leap_forward
        calls = []

        def failing_leap(activities, now, goal):
            calls.append(now)
            if len(calls) == 2:
                raise RuntimeError("Leap failed")
            leap(activities, now, goal)

        monkeypatch.setattr(UserActivities, "leap_forward", failing_leap)
        with pytest.raises(RuntimeError):
            model.leap_forward(datetime.datetime(2024, 1, 8))

        assert model.now == datetime.datetime(2024, 1, 1)
        assert len(model.get_user(1).activities.todo) == 1
        assert model.get_user(1).activities.done == []

    def test_leap_forward_not_after_now(self, model):
        """Test that time can only move forward."""
        with pytest.raises(FitnessModelError, match="not after current date"):
            model.leap_forward(model.now)

    def test_run_query(self, model):
        """Test feeding all users or a single user to a query."""
        query = QueryMostActivities()
        model.run_query(query)
        assert query.max_user.code == 1

        query = QueryMostActivities()
        model.run_query(query, 3)
        assert query.max_user.code == 3

        with pytest.raises(FitnessModelError):
            model.run_query(QueryMostActivities(), 42)

    def test_copy(self, model):
        """Test that copies are equal and independent."""
        copy = model.copy()
        assert copy == model
        assert copy.users == model.users
        assert copy.now == model.now

        copy.remove_user(1)
        assert copy != model


class TestFitnessModelPersistence:
    """Test suite for saving and loading the model."""

    def test_save_and_load(self, model, temp_dir):
        """Test that a saved model loads back unchanged."""
        model.add_activity(
            3,
            ActivityTrackRun(
                datetime.timedelta(minutes=30), datetime.datetime(2024, 1, 3), 1, 5.0
            ),
        )
        model.add_activity_to_training_plan(
            2, push_up(datetime.datetime(2024, 1, 1, 7, 0)), 3
        )
        model.set_training_plan_days(2, [MONDAY, 2])
        model.leap_forward(datetime.datetime(2024, 1, 4))
        path = temp_dir / "state.yml"

        model.save_to_file(path)
        loaded = FitnessModel()
        loaded.load_from_file(path)

        assert loaded == model
        assert loaded.next_user_code == model.next_user_code

    def test_saved_file_is_yaml(self, model, temp_dir):
        """Test the top-level layout of the saved file."""
        path = temp_dir / "state.yml"
        model.save_to_file(path)

        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        assert data["now"] == "2024-01-01T00:00:00"
        assert data["next_user_code"] == 4
        assert [u["type"] for u in data["users"]] == [
            "BeginnerUser",
            "IntermediateUser",
            "AdvancedUser",
        ]

    def test_load_missing_file(self, model, temp_dir):
        """Test that missing files raise OSError and keep the state."""
        with pytest.raises(OSError):
            model.load_from_file(temp_dir / "missing.yml")
        assert len(model.users) == 3

    def test_load_invalid_yaml(self, model, temp_dir):
        """Test that YAML syntax errors become ValueError."""
        path = temp_dir / "broken.yml"
        path.write_text("users: [unclosed", encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid YAML"):
            model.load_from_file(path)
        assert len(model.users) == 3

    def test_load_invalid_contents(self, model, temp_dir):
        """Test that well-formed YAML with bad contents is rejected."""
        path = temp_dir / "list.yml"
        path.write_text("- 1\n- 2\n", encoding="utf-8")
        with pytest.raises(ValueError):
            model.load_from_file(path)

        path = temp_dir / "no_now.yml"
        path.write_text("next_user_code: 1\nusers: []\n", encoding="utf-8")
        with pytest.raises(KeyError):
            model.load_from_file(path)
        assert len(model.users) == 3

    def _edit_saved(self, model, path, edit):
        model.save_to_file(path)
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        edit(data)
        with path.open("w", encoding="utf-8") as f:
            yaml.safe_dump(data, f)

    def test_load_execution_time_out_of_range(self, model, temp_dir):
        """Test that durations too large for a timedelta are rejected."""
        model.add_activity(1, push_up(datetime.datetime(2024, 1, 2, 10, 0)))
        path = temp_dir / "huge.yml"

        def edit(data):
            data["users"][0]["activities"]["todo"][0]["execution_time"] = 1.0e20

        self._edit_saved(model, path, edit)
        loaded = FitnessModel()
        with pytest.raises(ValueError, match="Execution time out of range"):
            loaded.load_from_file(path)
        assert loaded.is_empty()

    def test_load_duplicate_user_codes(self, model, temp_dir):
        """Test that two users with the same code are rejected."""
        path = temp_dir / "duplicate.yml"

        def edit(data):
            data["users"][1]["code"] = 1

        self._edit_saved(model, path, edit)
        loaded = FitnessModel()
        with pytest.raises(ValueError, match="Duplicate user code 1"):
            loaded.load_from_file(path)
        assert loaded.is_empty()
