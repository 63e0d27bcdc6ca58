"""
Tests for the segment builder.
"""

from django.test import SimpleTestCase

from hos_compliance.domain import DutyStatus, DutyStatusEvent, Segment
from hos_compliance.exceptions import (
    HOSCalculationError,
    InvalidOrderError,
    InvalidStatusError,
    InvalidTimestampError,
)
from hos_compliance.services.segment_builder import SegmentBuilderService, build_segments

from .factories import DRIVER_ID, at, timeline


class SegmentBuilderTests(SimpleTestCase):
    """Tests for duty status segment reconstruction."""

    def setUp(self):
        self.builder = SegmentBuilderService()

    def test_empty_events_produce_no_segments(self):
        self.assertEqual(self.builder.build_segments([], at(0)), [])

    def test_segments_cover_events_until_as_of(self):
        events, end = timeline(("OFF_DUTY", 60), ("DRIVING", 120), ("ON_DUTY", 30))

        segments = self.builder.build_segments(events, end)

        self.assertEqual(
            segments,
            [
                Segment(at(0), at(60), DutyStatus.OFF_DUTY),
                Segment(at(60), at(180), DutyStatus.DRIVING),
                Segment(at(180), at(210), DutyStatus.ON_DUTY),
            ],
        )

    def test_last_segment_ends_at_as_of(self):
        events, _ = timeline(("DRIVING", 10))

        segments = self.builder.build_segments(events, at(45))

        self.assertEqual(segments, [Segment(at(0), at(45), DutyStatus.DRIVING)])

    def test_events_after_as_of_are_excluded(self):
        events, _ = timeline(("DRIVING", 300), ("OFF_DUTY", 600))

        segments = self.builder.build_segments(events, at(120))

        self.assertEqual(segments, [Segment(at(0), at(120), DutyStatus.DRIVING)])

    def test_event_at_as_of_produces_no_segment(self):
        events, _ = timeline(("DRIVING", 60), ("OFF_DUTY", 60))

        segments = self.builder.build_segments(events, at(60))

        self.assertEqual(segments, [Segment(at(0), at(60), DutyStatus.DRIVING)])

    def test_same_timestamp_events_keep_the_later_status(self):
        events = [
            DutyStatusEvent(at(0), DRIVER_ID, DutyStatus.DRIVING),
            DutyStatusEvent(at(0), DRIVER_ID, DutyStatus.OFF_DUTY),
        ]

        segments = self.builder.build_segments(events, at(30))

        self.assertEqual(segments, [Segment(at(0), at(30), DutyStatus.OFF_DUTY)])

    def test_plain_string_status_is_normalized(self):
        events = [DutyStatusEvent(at(0), DRIVER_ID, "SLEEPER")]

        segments = build_segments(events, at(15))

        self.assertIs(segments[0].status, DutyStatus.SLEEPER)
        self.assertTrue(segments[0].status.is_resting)

    def test_out_of_order_events_are_rejected(self):
        events = [
            DutyStatusEvent(at(10), DRIVER_ID, DutyStatus.DRIVING),
            DutyStatusEvent(at(5), DRIVER_ID, DutyStatus.OFF_DUTY),
        ]

        with self.assertRaises(InvalidOrderError) as ctx:
            self.builder.build_segments(events, at(60))
        self.assertEqual(ctx.exception.index, 1)

    def test_out_of_order_events_after_as_of_are_still_rejected(self):
        events = [
            DutyStatusEvent(at(0), DRIVER_ID, DutyStatus.DRIVING),
            DutyStatusEvent(at(500), DRIVER_ID, DutyStatus.OFF_DUTY),
            DutyStatusEvent(at(400), DRIVER_ID, DutyStatus.ON_DUTY),
        ]

        with self.assertRaises(InvalidOrderError):
            self.builder.build_segments(events, at(60))

    def test_invalid_as_of_is_rejected(self):
        for as_of in (-1, float("nan"), float("inf"), None, True):
            with self.subTest(as_of=as_of):
                with self.assertRaises(InvalidTimestampError):
                    self.builder.build_segments([], as_of)

    def test_non_finite_event_timestamps_are_rejected(self):
        for ts in (float("nan"), float("inf"), float("-inf")):
            with self.subTest(ts=ts):
                events = [
                    DutyStatusEvent(at(0), DRIVER_ID, DutyStatus.OFF_DUTY),
                    DutyStatusEvent(ts, DRIVER_ID, DutyStatus.DRIVING),
                ]
                with self.assertRaises(InvalidTimestampError):
                    self.builder.build_segments(events, at(60))

    def test_negative_event_timestamp_is_rejected(self):
        events = [DutyStatusEvent(-60_000, DRIVER_ID, DutyStatus.OFF_DUTY)]

        with self.assertRaises(InvalidTimestampError):
            self.builder.build_segments(events, at(60))

    def test_nan_timestamp_does_not_hide_an_ordering_error(self):
        events = [
            DutyStatusEvent(at(600), DRIVER_ID, DutyStatus.DRIVING),
            DutyStatusEvent(float("nan"), DRIVER_ID, DutyStatus.ON_DUTY),
            DutyStatusEvent(at(0), DRIVER_ID, DutyStatus.OFF_DUTY),
        ]

        with self.assertRaises(InvalidTimestampError) as ctx:
            self.builder.build_segments(events, at(700))
        self.assertIn("event 1", str(ctx.exception))

    def test_unknown_status_is_a_calculation_error(self):
        events = [
            DutyStatusEvent(at(0), DRIVER_ID, DutyStatus.OFF_DUTY),
            DutyStatusEvent(at(10), DRIVER_ID, "NAPPING"),
        ]

        with self.assertRaises(InvalidStatusError) as ctx:
            self.builder.build_segments(events, at(60))
        self.assertIsInstance(ctx.exception, HOSCalculationError)
        self.assertIsNone(ctx.exception.__cause__)
