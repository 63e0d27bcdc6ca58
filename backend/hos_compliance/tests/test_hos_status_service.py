"""
Tests for the driver-level HOS status service.
"""

from unittest.mock import MagicMock

from django.test import SimpleTestCase

from eld_logs.services import InMemoryEldProvider, TimeSource, VirtualClock
from hos_compliance.domain import DutyStatus, DutyStatusEvent, HosConfig
from hos_compliance.exceptions import HOSViolationError, NonMinuteAlignedDurationError
from hos_compliance.services import HOSStatusService

from .factories import DRIVER_ID, START


class HOSStatusServiceTests(SimpleTestCase):
    """Tests for HOS status lookups backed by the in-memory ELD provider."""

    def setUp(self):
        self.clock = VirtualClock(START)
        self.provider = InMemoryEldProvider(self.clock)
        self.provider.connect("TRUCK-42")
        self.service = HOSStatusService(
            eld_provider=self.provider,
            config=HosConfig(warning_threshold_min=60),
            time_source=self.clock,
        )

    def test_status_is_evaluated_at_clock_time(self):
        self.provider.simulate_off_duty(DRIVER_ID, 600)
        self.provider.simulate_driving(DRIVER_ID, 240)

        status = self.service.get_hos_status(DRIVER_ID)

        self.assertEqual(status.as_of_epoch_ms, self.clock.now_epoch_ms())
        self.assertEqual(status.remaining_drive_min, 420)
        self.assertEqual(status.break_required_in_min, 240)

    def test_warning_then_violation_as_driving_continues(self):
        self.provider.simulate_off_duty(DRIVER_ID, 600)
        self.provider.simulate_driving(DRIVER_ID, 600)

        status = self.service.get_hos_status(DRIVER_ID)

        self.assertTrue(
            any(str(a.rule) == "DRIVE_11" and str(a.severity) == "WARNING" for a in status.alerts)
        )
        self.assertEqual(status.remaining_drive_min, 60)

        self.clock.advance_minutes(60)
        status = self.service.get_hos_status(DRIVER_ID)

        self.assertIn("DRIVE_11", [str(v.rule) for v in status.violations])

    def test_assert_no_violations_passes_for_compliant_driver(self):
        self.provider.simulate_off_duty(DRIVER_ID, 600)
        self.provider.simulate_on_duty(DRIVER_ID, 30)
        self.provider.simulate_driving(DRIVER_ID, 120)

        status = self.service.assert_no_violations(DRIVER_ID)

        self.assertFalse(status.has_violations)

    def test_assert_no_violations_raises_with_details(self):
        self.provider.simulate_off_duty(DRIVER_ID, 600)
        self.provider.simulate_driving(DRIVER_ID, 480)

        with self.assertRaises(HOSViolationError) as ctx:
            self.service.assert_no_violations(DRIVER_ID)

        self.assertEqual(ctx.exception.driver_id, DRIVER_ID)
        self.assertEqual(
            str(ctx.exception),
            f"HOS violations detected for {DRIVER_ID}: BREAK_30: Break limit exceeded",
        )

    def test_unknown_driver_is_fully_rested(self):
        status = self.service.get_hos_status("DRV-UNKNOWN")

        self.assertEqual(status.remaining_drive_min, 660)
        self.assertEqual(status.alerts, ())

    def test_blank_driver_id_is_rejected(self):
        with self.assertRaises(ValueError):
            self.service.get_hos_status("   ")

    def test_evaluation_errors_propagate(self):
        time_source = MagicMock(spec=TimeSource)
        time_source.now_epoch_ms.return_value = START + 90_000
        provider = MagicMock()
        provider.get_events.return_value = [
            DutyStatusEvent(START, DRIVER_ID, DutyStatus.DRIVING),
        ]
        service = HOSStatusService(
            eld_provider=provider, config=HosConfig(), time_source=time_source
        )

        with self.assertRaises(NonMinuteAlignedDurationError):
            service.get_hos_status(DRIVER_ID)
        provider.get_events.assert_called_once_with(DRIVER_ID)
