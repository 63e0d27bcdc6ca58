"""
Tests for the HOS compliance API.
"""

from django.test import SimpleTestCase, override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from .factories import DRIVER_ID, at


def event(minute, duty_status, **extra):
    return {
        "ts_epoch_ms": at(minute),
        "driver_id": DRIVER_ID,
        "status": duty_status,
        **extra,
    }


class HOSEvaluationAPITests(SimpleTestCase):
    """Tests for POST /api/hos/evaluate/."""

    client_class = APIClient

    def setUp(self):
        self.url = reverse("hos-evaluate")

    def post(self, payload):
        return self.client.post(self.url, payload, format="json")

    def test_evaluate_returns_snapshot(self):
        response = self.post({
            "events": [
                event(0, "OFF_DUTY", source="manual"),
                event(600, "DRIVING", location={"lat": 41.8781, "lon": -87.6298}),
            ],
            "as_of_epoch_ms": at(1200),
        })

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        data = response.json()
        self.assertEqual(data["remaining_drive_min"], 60)
        self.assertEqual(data["remaining_duty_window_min"], 240)
        self.assertEqual(data["break_required_in_min"], 0)
        self.assertEqual(data["cycle_used_min"], 600)
        self.assertEqual(data["last_break_start_epoch_ms"], at(600))
        self.assertEqual(
            [(a["rule"], a["severity"]) for a in data["alerts"]],
            [("DRIVE_11", "WARNING"), ("BREAK_30", "VIOLATION")],
        )
        self.assertEqual([v["rule"] for v in data["violations"]], ["BREAK_30"])
        self.assertFalse(data["is_compliant"])

    def test_empty_history_is_compliant(self):
        response = self.post({"events": [], "as_of_epoch_ms": at(0)})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        data = response.json()
        self.assertEqual(data["cycle_remaining_min"], 4200)
        self.assertIsNone(data["last_break_start_epoch_ms"])
        self.assertTrue(data["is_compliant"])

    def test_config_overrides_settings(self):
        response = self.post({
            "events": [event(0, "ON_DUTY")],
            "as_of_epoch_ms": at(120),
            "config": {"cycle_limit_min": 120, "warning_threshold_min": 0},
        })

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        data = response.json()
        self.assertEqual(data["cycle_remaining_min"], 0)
        self.assertEqual([a["rule"] for a in data["alerts"]], ["CYCLE_70_8"])

    @override_settings(HOS_ENGINE={"WARNING_THRESHOLD_MIN": 300})
    def test_warning_threshold_comes_from_settings(self):
        response = self.post({
            "events": [event(0, "DRIVING")],
            "as_of_epoch_ms": at(400),
        })

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(
            [(a["rule"], a["severity"]) for a in response.json()["alerts"]],
            [("DRIVE_11", "WARNING"), ("BREAK_30", "WARNING")],
        )

    def test_out_of_order_events_are_rejected(self):
        response = self.post({
            "events": [event(60, "DRIVING"), event(0, "OFF_DUTY")],
            "as_of_epoch_ms": at(120),
        })

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.json()["error"], "HOS evaluation failed")
        self.assertIn("chronological order", response.json()["details"])

    def test_invalid_status_is_rejected(self):
        response = self.post({
            "events": [event(0, "NAPPING")],
            "as_of_epoch_ms": at(60),
        })

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("events", response.json())

    def test_unaligned_timestamp_is_rejected(self):
        response = self.post({
            "events": [event(0, "DRIVING")],
            "as_of_epoch_ms": at(60) + 1_000,
        })

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("as_of_epoch_ms", response.json())

    def test_events_from_multiple_drivers_are_rejected(self):
        response = self.post({
            "events": [event(0, "DRIVING"), {**event(30, "OFF_DUTY"), "driver_id": "DRV-002"}],
            "as_of_epoch_ms": at(60),
        })

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("events", response.json())

    def test_invalid_config_is_rejected(self):
        response = self.post({
            "events": [],
            "as_of_epoch_ms": at(0),
            "config": {"cycle_days": 0},
        })

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("config", response.json())

    def test_invalid_gps_point_is_rejected(self):
        response = self.post({
            "events": [event(0, "DRIVING", location={"lat": 95.0, "lon": 0.0})],
            "as_of_epoch_ms": at(60),
        })

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class HealthCheckAPITests(SimpleTestCase):

    client_class = APIClient

    def test_health(self):
        response = self.client.get(reverse("hos-health"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json()["status"], "ok")

    def test_api_root_lists_evaluate_endpoint(self):
        response = self.client.get(reverse("api-root"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn("hos_compliance", response.json()["endpoints"])
