import unittest
from datetime import date

from fastapi.testclient import TestClient

from core.controller import HabitController
from dashboard.app import app
from dashboard.dependencies import get_controller, get_session_quote
from database.manager import InMemoryRepository
from ui.messages import EMPTY_STATE_MESSAGE, MOTIVATIONAL_QUOTES

TODAY = date(2026, 2, 7)
QUOTE = MOTIVATIONAL_QUOTES[1]


class DashboardTestCase(unittest.TestCase):
    def setUp(self):
        self.repository = InMemoryRepository()
        self.controller = HabitController(self.repository, today_provider=lambda: TODAY)
        app.dependency_overrides[get_controller] = lambda: self.controller
        app.dependency_overrides[get_session_quote] = lambda: QUOTE
        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.clear()


class DashboardPageTests(DashboardTestCase):
    def test_empty_dashboard(self):
        response = self.client.get("/")

        self.assertEqual(response.status_code, 200)
        self.assertIn(EMPTY_STATE_MESSAGE, response.text)
        self.assertIn('data-stat="today_completion_rate">0%<', response.text)
        self.assertIn('data-stat="active_habits">0<', response.text)
        self.assertIn(QUOTE.text, response.text)
        self.assertIn(QUOTE.author, response.text)

    def test_add_habit_redirects_and_renders(self):
        response = self.client.post("/habits", data={"name": "  Exercise "}, follow_redirects=False)
        self.assertEqual(response.status_code, 303)
        self.assertEqual(response.headers["location"], "/")

        page = self.client.get("/").text
        self.assertIn("Exercise", page)
        self.assertNotIn(EMPTY_STATE_MESSAGE, page)
        self.assertIn('data-stat="active_habits">1<', page)
        self.assertEqual(page.count('class="calendar-day'), 7)

    def test_blank_name_keeps_input(self):
        response = self.client.post("/habits", data={"name": "   "})

        self.assertEqual(response.status_code, 200)
        self.assertIn('value="   "', response.text)
        self.assertEqual(self.controller.habits, ())
        self.assertIsNone(self.repository.read_raw())

    def test_toggle_marks_today(self):
        habit = self.controller.add_habit("Read")

        response = self.client.post(f"/habits/{habit.id}/toggle", follow_redirects=False)
        self.assertEqual(response.status_code, 303)

        page = self.client.get("/").text
        self.assertIn('data-stat="today_completion_rate">100%<', page)
        self.assertIn('data-stat="total_completions">1<', page)
        self.assertIn('data-stat="longest_streak">1🔥<', page)
        self.assertIn("1 day streak 🔥", page)
        self.assertIn('title="2026-02-07"', page)

    def test_delete_returns_to_empty_state(self):
        habit = self.controller.add_habit("Read")

        response = self.client.post(f"/habits/{habit.id}/delete", follow_redirects=False)
        self.assertEqual(response.status_code, 303)

        page = self.client.get("/").text
        self.assertIn(EMPTY_STATE_MESSAGE, page)
        self.assertEqual(self.repository.load(), [])

    def test_unknown_id_is_ignored(self):
        self.controller.add_habit("Read")

        response = self.client.post("/habits/missing/toggle", follow_redirects=False)

        self.assertEqual(response.status_code, 303)
        self.assertEqual(self.controller.habits[0].completed_dates, [])

    def test_dashboard_alias_redirects(self):
        response = self.client.get("/dashboard", follow_redirects=False)
        self.assertEqual(response.status_code, 301)


class HabitsApiTests(DashboardTestCase):
    def test_list_is_empty(self):
        response = self.client.get("/api/habits")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), [])

    def test_create_and_list(self):
        response = self.client.post("/api/habits", json={"name": "Meditate"})
        body = response.json()

        self.assertTrue(body["ok"])
        self.assertEqual(body["habit"]["name"], "Meditate")
        self.assertFalse(body["habit"]["completed_today"])
        self.assertEqual(body["habit"]["streak"], 0)
        self.assertEqual(
            [d["date"] for d in body["habit"]["last_7_days"]],
            ["2026-02-01", "2026-02-02", "2026-02-03", "2026-02-04", "2026-02-05", "2026-02-06", "2026-02-07"],
        )

        listed = self.client.get("/api/habits").json()
        self.assertEqual([h["id"] for h in listed], [body["habit"]["id"]])

    def test_create_blank_name(self):
        response = self.client.post("/api/habits", json={"name": "  "})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"ok": False, "habit": None})
        self.assertEqual(self.client.get("/api/habits").json(), [])

    def test_long_name_accepted_like_form(self):
        name = "x" * 600

        api = self.client.post("/api/habits", json={"name": name})
        form = self.client.post("/habits", data={"name": name}, follow_redirects=False)

        self.assertEqual(api.status_code, 200)
        self.assertTrue(api.json()["ok"])
        self.assertEqual(form.status_code, 303)
        self.assertEqual([h.name for h in self.controller.habits], [name, name])

    def test_toggle_twice(self):
        habit = self.controller.add_habit("Exercise")

        first = self.client.post(f"/api/habits/{habit.id}/toggle").json()
        self.assertTrue(first["habit"]["completed_today"])
        self.assertEqual(first["habit"]["completed_dates"], ["2026-02-07"])
        self.assertEqual(first["habit"]["streak"], 1)

        second = self.client.post(f"/api/habits/{habit.id}/toggle").json()
        self.assertFalse(second["habit"]["completed_today"])
        self.assertEqual(second["habit"]["completed_dates"], [])

    def test_toggle_unknown(self):
        response = self.client.post("/api/habits/missing/toggle")
        self.assertEqual(response.json(), {"ok": False, "habit": None})

    def test_delete(self):
        habit = self.controller.add_habit("Exercise")

        self.assertTrue(self.client.delete(f"/api/habits/{habit.id}").json()["ok"])
        self.assertFalse(self.client.delete(f"/api/habits/{habit.id}").json()["ok"])
        self.assertEqual(self.controller.habits, ())


class StatsApiTests(DashboardTestCase):
    def test_overview(self):
        done = self.controller.add_habit("Exercise")
        self.controller.add_habit("Read")
        self.controller.toggle_habit_today(done.id)

        response = self.client.get("/api/stats/overview")

        self.assertEqual(response.json(), {
            "today_completion_rate": 50,
            "active_habits": 2,
            "total_completions": 1,
            "longest_streak": 1,
        })

    def test_quote(self):
        response = self.client.get("/api/quote")
        self.assertEqual(response.json(), {"text": QUOTE.text, "author": QUOTE.author})


class ServiceRoutesTests(DashboardTestCase):
    def test_health(self):
        body = self.client.get("/health").json()

        self.assertEqual(body["status"], "healthy")
        self.assertEqual(body["service"], "dashboard")
        self.assertEqual(body["data"]["habits_count"], 0)

    def test_health_degraded_after_failed_save(self):
        self.controller.last_save_error = "disk full"
        body = self.client.get("/health").json()
        self.assertEqual(body["status"], "degraded")

    def test_ping(self):
        self.assertEqual(self.client.get("/ping").json()["message"], "pong")

    def test_unknown_api_path(self):
        response = self.client.get("/api/nope")

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["detail"], "API endpoint not found")

    def test_process_time_header(self):
        response = self.client.get("/ping")
        self.assertIn("x-process-time", response.headers)


if __name__ == "__main__":
    unittest.main()
