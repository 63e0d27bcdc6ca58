"""
HOS compliance domain types.

Contains the immutable records exchanged with the HOS engine: duty status
events going in, compliance snapshots and alerts coming out, and the
evaluation configuration supplied by the caller.

All timestamps are integer milliseconds since the epoch; all durations and
budgets are integer minutes.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from django.db import models

from .constants import SUPPORTED_RULESETS


class DutyStatus(models.TextChoices):
    """Driver duty status (matches grid rows on a log sheet)."""

    OFF_DUTY = "OFF_DUTY", "Off Duty"
    ON_DUTY = "ON_DUTY", "On Duty (Not Driving)"
    DRIVING = "DRIVING", "Driving"
    SLEEPER = "SLEEPER", "Sleeper Berth"

    @property
    def is_resting(self) -> bool:
        return self in (DutyStatus.OFF_DUTY, DutyStatus.SLEEPER)

    @property
    def is_working(self) -> bool:
        return self in (DutyStatus.ON_DUTY, DutyStatus.DRIVING)


class EventSource(models.TextChoices):
    ELD = "eld", "ELD"
    MANUAL = "manual", "Manual"


class Severity(models.TextChoices):
    WARNING = "WARNING", "Warning"
    VIOLATION = "VIOLATION", "Violation"


class HosRuleId(models.TextChoices):
    """Identifiers of the HOS rules tracked by the engine."""

    DRIVE_11 = "DRIVE_11", "11-hour driving limit"
    DUTY_14 = "DUTY_14", "14-hour duty window"
    BREAK_30 = "BREAK_30", "30-minute break"
    CYCLE_70_8 = "CYCLE_70_8", "70-hour/8-day cycle"
    RESTART_34 = "RESTART_34", "34-hour restart"


@dataclass(frozen=True)
class GpsPoint:
    lat: float
    lon: float
    accuracy_m: Optional[float] = None


@dataclass(frozen=True)
class DutyStatusEvent:
    """
    A point-in-time duty status assertion for one driver.

    Telemetry fields (location, odometer, engine hours) are carried for
    downstream consumers and are never interpreted by the engine.
    """

    ts_epoch_ms: int
    driver_id: str
    status: DutyStatus
    source: EventSource = EventSource.ELD
    location: Optional[GpsPoint] = None
    odometer_miles: Optional[float] = None
    engine_hours: Optional[float] = None

    def to_dict(self) -> Dict:
        data = {
            "ts_epoch_ms": self.ts_epoch_ms,
            "driver_id": self.driver_id,
            "status": str(self.status),
            "source": str(self.source),
        }
        if self.location is not None:
            data["location"] = {
                "lat": self.location.lat,
                "lon": self.location.lon,
                "accuracy_m": self.location.accuracy_m,
            }
        if self.odometer_miles is not None:
            data["odometer_miles"] = self.odometer_miles
        if self.engine_hours is not None:
            data["engine_hours"] = self.engine_hours
        return data


@dataclass(frozen=True)
class HosConfig:
    """
    Evaluation parameters supplied by the caller.

    Attributes:
        warning_threshold_min: Alerts fire once a remaining budget falls
            at or below this many minutes
        ruleset: Ruleset identifier (only FMCSA is supported)
        cycle_limit_min: Rolling on-duty budget (4200 = 70 hours)
        cycle_days: Rolling cycle window length in days
        timezone: Home terminal timezone, carried for callers
    """

    warning_threshold_min: int = 60
    ruleset: str = SUPPORTED_RULESETS[0]
    cycle_limit_min: int = 70 * 60
    cycle_days: int = 8
    timezone: str = "UTC"


@dataclass(frozen=True)
class Segment:
    """Half-open interval [start, end) spent in a single duty status."""

    start_epoch_ms: int
    end_epoch_ms: int
    status: DutyStatus

    @property
    def duration_ms(self) -> int:
        return self.end_epoch_ms - self.start_epoch_ms


@dataclass(frozen=True)
class HosAlert:
    rule: HosRuleId
    severity: Severity
    message: str
    at_epoch_ms: int

    def to_dict(self) -> Dict:
        return {
            "rule": str(self.rule),
            "severity": str(self.severity),
            "message": self.message,
            "at_epoch_ms": self.at_epoch_ms,
        }


@dataclass(frozen=True)
class HosStatus:
    """
    Point-in-time HOS compliance snapshot for one driver.

    Attributes:
        as_of_epoch_ms: Evaluation time
        remaining_drive_min: Driving minutes left under the 11-hour limit
        remaining_duty_window_min: Minutes left in the 14-hour window
        break_required_in_min: Driving minutes until a 30-minute break is due
        cycle_remaining_min: Minutes left in the rolling cycle
        cycle_used_min: Working minutes counted against the rolling cycle
        last_break_start_epoch_ms: Start of the most recent qualifying break
        alerts: Warnings and violations in evaluation order
        violations: Violation-severity alerts only
    """

    as_of_epoch_ms: int
    remaining_drive_min: int
    remaining_duty_window_min: int
    break_required_in_min: int
    cycle_remaining_min: int
    cycle_used_min: int = 0
    last_break_start_epoch_ms: Optional[int] = None
    alerts: Tuple[HosAlert, ...] = field(default_factory=tuple)
    violations: Tuple[HosAlert, ...] = field(default_factory=tuple)

    @property
    def has_violations(self) -> bool:
        return len(self.violations) > 0

    def to_dict(self) -> Dict:
        return {
            "as_of_epoch_ms": self.as_of_epoch_ms,
            "remaining_drive_min": self.remaining_drive_min,
            "remaining_duty_window_min": self.remaining_duty_window_min,
            "break_required_in_min": self.break_required_in_min,
            "cycle_remaining_min": self.cycle_remaining_min,
            "cycle_used_min": self.cycle_used_min,
            "last_break_start_epoch_ms": self.last_break_start_epoch_ms,
            "alerts": [alert.to_dict() for alert in self.alerts],
            "violations": [alert.to_dict() for alert in self.violations],
        }
