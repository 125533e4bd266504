import json
import tempfile
import unittest
from datetime import date
from pathlib import Path

from core.controller import HabitController
from database.manager import DatabaseError, InMemoryRepository, JsonFileRepository

TODAY = date(2026, 2, 7)


class FailingRepository(InMemoryRepository):
    def write_raw(self, text):
        raise DatabaseError("disk full")


def make_controller(repository=None):
    return HabitController(repository or InMemoryRepository(), today_provider=lambda: TODAY)


class ControllerActionsTests(unittest.TestCase):
    def test_end_to_end_scenario(self):
        controller = make_controller()

        habit = controller.add_habit("Exercise")
        self.assertEqual(len(controller.habits), 1)
        overview = controller.overview()
        self.assertEqual(
            (overview.today_completion_rate, overview.total_completions, overview.longest_streak),
            (0, 0, 0),
        )

        controller.toggle_habit_today(habit.id)
        overview = controller.overview()
        self.assertEqual(
            (overview.today_completion_rate, overview.total_completions, overview.longest_streak),
            (100, 1, 1),
        )

        controller.toggle_habit_today(habit.id)
        overview = controller.overview()
        self.assertEqual(
            (overview.today_completion_rate, overview.total_completions, overview.longest_streak),
            (0, 0, 0),
        )

        self.assertTrue(controller.delete_habit(habit.id))
        self.assertEqual(controller.habits, ())
        self.assertEqual(controller.overview().to_dict(), {
            "today_completion_rate": 0,
            "active_habits": 0,
            "total_completions": 0,
            "longest_streak": 0,
        })

    def test_blank_name_is_ignored(self):
        repository = InMemoryRepository()
        controller = make_controller(repository)

        self.assertIsNone(controller.add_habit("   "))
        self.assertIsNone(controller.add_habit(""))
        self.assertIsNone(controller.add_habit(None))
        self.assertEqual(controller.habits, ())
        self.assertIsNone(repository.read_raw())

    def test_name_is_trimmed(self):
        controller = make_controller()
        self.assertEqual(controller.add_habit("  Read ").name, "Read")

    def test_append_order_is_display_order(self):
        controller = make_controller()
        names = ["Exercise", "Read", "Meditate"]
        for name in names:
            controller.add_habit(name)
        self.assertEqual([h.name for h in controller.habits], names)

    def test_unknown_ids_are_noops(self):
        repository = InMemoryRepository()
        controller = make_controller(repository)
        controller.add_habit("Read")
        saved = repository.read_raw()

        self.assertFalse(controller.delete_habit("missing"))
        self.assertIsNone(controller.toggle_habit_today("missing"))
        self.assertEqual(len(controller.habits), 1)
        self.assertEqual(repository.read_raw(), saved)

    def test_toggle_replaces_only_target_in_place(self):
        controller = make_controller()
        first = controller.add_habit("Exercise")
        second = controller.add_habit("Read")
        third = controller.add_habit("Meditate")

        updated = controller.toggle_habit_today(second.id)

        self.assertEqual([h.id for h in controller.habits], [first.id, second.id, third.id])
        self.assertEqual(updated.completed_dates, ["2026-02-07"])
        self.assertEqual(controller.get_habit(first.id).completed_dates, [])
        self.assertEqual(controller.get_habit(third.id).completed_dates, [])

    def test_every_mutation_is_persisted(self):
        repository = InMemoryRepository()
        controller = make_controller(repository)

        habit = controller.add_habit("Exercise")
        self.assertEqual([h.id for h in repository.load()], [habit.id])

        controller.toggle_habit_today(habit.id)
        self.assertEqual(repository.load()[0].completed_dates, ["2026-02-07"])

        controller.delete_habit(habit.id)
        self.assertEqual(repository.load(), [])

    def test_snapshot_is_read_only(self):
        controller = make_controller()
        controller.add_habit("Read")
        snapshot = controller.habits
        controller.add_habit("Write")
        self.assertEqual(len(snapshot), 1)


class ControllerStorageFailureTests(unittest.TestCase):
    def test_write_failure_is_logged_and_state_kept(self):
        controller = make_controller(FailingRepository())

        with self.assertLogs("core.controller", level="ERROR") as logs:
            habit = controller.add_habit("Exercise")

        self.assertIsNotNone(habit)
        self.assertEqual(len(controller.habits), 1)
        self.assertIn("disk full", controller.last_save_error)
        self.assertTrue(any("disk full" in line for line in logs.output))

    def test_successful_save_clears_error(self):
        repository = FailingRepository()
        controller = make_controller(repository)
        with self.assertLogs("core.controller", level="ERROR"):
            controller.add_habit("Exercise")

        controller.repository = InMemoryRepository()
        controller.add_habit("Read")
        self.assertIsNone(controller.last_save_error)


class ControllerStartupTests(unittest.TestCase):
    def test_loads_existing_list(self):
        repository = InMemoryRepository()
        repository.write_raw(json.dumps([
            {"id": "x1", "name": "Read", "completedDates": ["2026-02-07", "2026-02-06"], "createdAt": "2026-01-01T00:00:00.000Z"},
        ]))

        controller = HabitController.from_repository(repository, today_provider=lambda: TODAY)

        self.assertEqual([h.id for h in controller.habits], ["x1"])
        self.assertEqual(controller.overview().longest_streak, 2)
        self.assertEqual(controller.today(), TODAY)

    def test_corrupt_memory_value_starts_empty(self):
        store = {"discipline-habits": "{oops"}
        repository = InMemoryRepository(store=store)

        with self.assertLogs("core.controller", level="WARNING"):
            controller = HabitController.from_repository(repository)

        self.assertEqual(controller.habits, ())
        self.assertEqual(store["discipline-habits.corrupt"], "{oops")

    def test_corrupt_file_is_quarantined_and_not_overwritten(self):
        with tempfile.TemporaryDirectory() as tmp:
            data_dir = Path(tmp)
            (data_dir / "discipline-habits.json").write_text("not json", encoding="utf-8")
            repository = JsonFileRepository(data_dir)

            with self.assertLogs("core.controller", level="WARNING"):
                controller = HabitController.from_repository(repository, today_provider=lambda: TODAY)
            controller.add_habit("Exercise")

            quarantined = list(data_dir.glob("discipline-habits.corrupt-*.json"))
            self.assertEqual(len(quarantined), 1)
            self.assertEqual(quarantined[0].read_text(encoding="utf-8"), "not json")
            self.assertEqual([h.name for h in repository.load()], ["Exercise"])

    def test_non_utf8_file_is_quarantined(self):
        with tempfile.TemporaryDirectory() as tmp:
            data_dir = Path(tmp)
            (data_dir / "discipline-habits.json").write_bytes(b"\xff\xfe[]")

            with self.assertLogs("core.controller", level="WARNING"):
                controller = HabitController.from_repository(JsonFileRepository(data_dir))

            self.assertEqual(controller.habits, ())
            self.assertFalse((data_dir / "discipline-habits.json").exists())
            self.assertEqual(len(list(data_dir.glob("discipline-habits.corrupt-*.json"))), 1)

    def test_deeply_nested_document_starts_empty(self):
        store = {"discipline-habits": "[" * 100000 + "]" * 100000}

        with self.assertLogs("core.controller", level="WARNING"):
            controller = HabitController.from_repository(InMemoryRepository(store=store))

        self.assertEqual(controller.habits, ())
        self.assertIn("discipline-habits.corrupt", store)


if __name__ == "__main__":
    unittest.main()
