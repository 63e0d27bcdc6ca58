"""
HOS Rule Evaluator Service.

Deterministic Hours of Service calculator (FMCSA simplified) that converts
a driver's duty status history into a point-in-time compliance snapshot.

Rules implemented:
- 11-hour driving limit after 10 consecutive hours OFF_DUTY or SLEEPER
- 14-hour duty window starting at the first ON_DUTY/DRIVING after rest
- 30-minute break required after 8 hours of DRIVING since the last break
- 70-hour / 8-day (configurable) rolling cycle of ON_DUTY + DRIVING time
- 34-hour restart bounding the cycle lookback

A qualifying break is 30 minutes of non-driving time, which includes
ON_DUTY; only OFF_DUTY and SLEEPER count toward a qualifying rest.

Single Responsibility: HOS rule evaluation only.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..constants import (
    BREAK_AFTER_DRIVE_MIN,
    DAY_MS,
    DRIVE_LIMIT_MIN,
    DUTY_WINDOW_MIN,
    MINUTE_MS,
    QUALIFYING_BREAK_MIN,
    QUALIFYING_REST_MIN,
    RESTART_MIN,
    SUPPORTED_RULESETS,
)
from ..domain import (
    DutyStatus,
    DutyStatusEvent,
    HosAlert,
    HosConfig,
    HosRuleId,
    HosStatus,
    Segment,
    Severity,
)
from ..exceptions import InvalidConfigError, NonMinuteAlignedDurationError
from .segment_builder import SegmentBuilderService, validate_as_of

logger = logging.getLogger(__name__)


def to_minutes(duration_ms) -> int:
    """Convert a non-negative, minute-aligned duration to whole minutes."""
    if duration_ms < 0 or duration_ms % MINUTE_MS != 0:
        raise NonMinuteAlignedDurationError(duration_ms)
    return int(duration_ms // MINUTE_MS)


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass
class _RollingState:
    """Accumulators threaded through the single forward pass."""

    rest_streak_min: int = 0
    duty_window_start: Optional[int] = None
    driving_since_rest_min: int = 0
    driving_since_break_min: int = 0
    last_break_start: Optional[int] = None
    last_restart_end: Optional[int] = None


class HOSRuleEvaluatorService:
    """
    Service for evaluating HOS rules over a driver's duty history.

    Pure: holds no state between calls and is safe to share across threads.
    """

    def __init__(self, segment_builder: Optional[SegmentBuilderService] = None):
        self.segment_builder = segment_builder or SegmentBuilderService()
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def evaluate(
        self,
        config: HosConfig,
        events: Sequence[DutyStatusEvent],
        as_of_epoch_ms: int,
    ) -> HosStatus:
        """
        Calculate HOS status deterministically for a driver.

        Args:
            config: Ruleset, cycle limits and warning threshold
            events: Duty status events in chronological order
            as_of_epoch_ms: Evaluation time

        Returns:
            HosStatus snapshot with remaining budgets and alerts

        Raises:
            HOSCalculationError: any input-contract violation
        """
        validate_as_of(as_of_epoch_ms)
        self.validate_config(config)

        if not events:
            self.logger.debug("No duty history; driver is fully rested")
            return HosStatus(
                as_of_epoch_ms=as_of_epoch_ms,
                remaining_drive_min=DRIVE_LIMIT_MIN,
                remaining_duty_window_min=DUTY_WINDOW_MIN,
                break_required_in_min=BREAK_AFTER_DRIVE_MIN,
                cycle_remaining_min=config.cycle_limit_min,
            )

        segments = self.segment_builder.build_segments(events, as_of_epoch_ms)

        state = _RollingState()
        for segment in segments:
            self._apply_segment(state, segment)

        if state.duty_window_start is not None:
            duty_window_elapsed_min = to_minutes(
                as_of_epoch_ms - state.duty_window_start
            )
        else:
            duty_window_elapsed_min = 0

        remaining_drive_min = max(0, DRIVE_LIMIT_MIN - state.driving_since_rest_min)
        remaining_duty_window_min = max(0, DUTY_WINDOW_MIN - duty_window_elapsed_min)
        break_required_in_min = max(
            0, BREAK_AFTER_DRIVE_MIN - state.driving_since_break_min
        )

        # A completed restart takes precedence over the nominal lookback
        cycle_window_start = max(
            as_of_epoch_ms - config.cycle_days * DAY_MS,
            state.last_restart_end or 0,
        )
        cycle_used_min = self._compute_cycle_minutes(
            segments, cycle_window_start, as_of_epoch_ms
        )
        cycle_remaining_min = max(0, config.cycle_limit_min - cycle_used_min)

        alerts: List[HosAlert] = []
        for rule, remaining_min, label in (
            (HosRuleId.DRIVE_11, remaining_drive_min, "Driving time"),
            (HosRuleId.DUTY_14, remaining_duty_window_min, "Duty window"),
            (HosRuleId.BREAK_30, break_required_in_min, "Break"),
            (HosRuleId.CYCLE_70_8, cycle_remaining_min, "Cycle"),
        ):
            alert = self._build_alert(
                rule, remaining_min, label, config.warning_threshold_min, as_of_epoch_ms
            )
            if alert is not None:
                alerts.append(alert)

        violations = [a for a in alerts if a.severity == Severity.VIOLATION]
        if violations:
            self.logger.warning(
                f"HOS violations as of {as_of_epoch_ms}: "
                f"{', '.join(str(v.rule) for v in violations)}"
            )

        self.logger.debug(
            f"HOS evaluation completed: drive={remaining_drive_min} "
            f"duty={remaining_duty_window_min} break={break_required_in_min} "
            f"cycle={cycle_remaining_min}"
        )

        return HosStatus(
            as_of_epoch_ms=as_of_epoch_ms,
            remaining_drive_min=remaining_drive_min,
            remaining_duty_window_min=remaining_duty_window_min,
            break_required_in_min=break_required_in_min,
            cycle_remaining_min=cycle_remaining_min,
            cycle_used_min=cycle_used_min,
            last_break_start_epoch_ms=state.last_break_start,
            alerts=tuple(alerts),
            violations=tuple(violations),
        )

    def validate_config(self, config: HosConfig) -> None:
        """Validate configuration values are in range."""
        if not _is_int(config.warning_threshold_min) or config.warning_threshold_min < 0:
            raise InvalidConfigError(
                f"Invalid warning_threshold_min: {config.warning_threshold_min!r}"
            )
        if not _is_int(config.cycle_limit_min) or config.cycle_limit_min <= 0:
            raise InvalidConfigError(
                f"Invalid cycle_limit_min: {config.cycle_limit_min!r}"
            )
        if not _is_int(config.cycle_days) or config.cycle_days <= 0:
            raise InvalidConfigError(f"Invalid cycle_days: {config.cycle_days!r}")
        if config.ruleset not in SUPPORTED_RULESETS:
            raise InvalidConfigError(f"Unsupported ruleset: {config.ruleset!r}")

    def _apply_segment(self, state: _RollingState, segment: Segment) -> None:
        duration_min = to_minutes(segment.duration_ms)

        if segment.status.is_resting:
            state.rest_streak_min += duration_min

            if duration_min >= QUALIFYING_BREAK_MIN:
                state.last_break_start = segment.start_epoch_ms
                state.driving_since_break_min = 0

            if state.rest_streak_min >= QUALIFYING_REST_MIN:
                state.duty_window_start = None
                state.driving_since_rest_min = 0
                state.driving_since_break_min = 0

            if state.rest_streak_min >= RESTART_MIN:
                state.last_restart_end = segment.end_epoch_ms
            return

        if state.rest_streak_min >= QUALIFYING_REST_MIN:
            state.duty_window_start = segment.start_epoch_ms
            state.driving_since_rest_min = 0
            state.driving_since_break_min = 0
            state.last_break_start = segment.start_epoch_ms
        elif state.duty_window_start is None:
            state.duty_window_start = segment.start_epoch_ms
            state.driving_since_rest_min = 0
            state.driving_since_break_min = 0

        state.rest_streak_min = 0

        # On-duty-not-driving time counts toward the break, never toward rest
        if segment.status == DutyStatus.ON_DUTY and duration_min >= QUALIFYING_BREAK_MIN:
            state.last_break_start = segment.start_epoch_ms
            state.driving_since_break_min = 0

        if segment.status == DutyStatus.DRIVING:
            state.driving_since_rest_min += duration_min
            state.driving_since_break_min += duration_min

    def _compute_cycle_minutes(
        self, segments: Sequence[Segment], window_start: int, as_of_epoch_ms: int
    ) -> int:
        """Sum working minutes clipped to [window_start, as_of)."""
        total_min = 0
        for segment in segments:
            if not segment.status.is_working:
                continue
            start = max(segment.start_epoch_ms, window_start)
            end = min(segment.end_epoch_ms, as_of_epoch_ms)
            if end <= start:
                continue
            total_min += to_minutes(end - start)
        return total_min

    def _build_alert(
        self,
        rule: HosRuleId,
        remaining_min: int,
        label: str,
        warning_threshold_min: int,
        at_epoch_ms: int,
    ) -> Optional[HosAlert]:
        if remaining_min <= 0:
            return HosAlert(
                rule=rule,
                severity=Severity.VIOLATION,
                message=f"{label} limit exceeded",
                at_epoch_ms=at_epoch_ms,
            )
        if remaining_min <= warning_threshold_min:
            return HosAlert(
                rule=rule,
                severity=Severity.WARNING,
                message=f"{label} low ({remaining_min} min left)",
                at_epoch_ms=at_epoch_ms,
            )
        return None


def evaluate(
    config: HosConfig, events: Sequence[DutyStatusEvent], as_of_epoch_ms: int
) -> HosStatus:
    """Evaluate HOS compliance for one driver at as_of_epoch_ms."""
    return HOSRuleEvaluatorService().evaluate(config, events, as_of_epoch_ms)
