"""
ELD Provider Service.

Pluggable Electronic Logging Device integrations that produce the duty
status event stream consumed by the HOS engine.

This module provides:
- EldProvider: the interface every ELD integration implements
- InMemoryEldProvider: deterministic in-memory provider driven by a clock
- get_eld_provider: factory selecting the provider from settings

Single Responsibility: duty status event sourcing only.
"""

import json
import logging
import math
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass
from typing import Dict, List, Optional

from django.core.exceptions import ImproperlyConfigured

from hos_compliance.conf import get_eld_mode
from hos_compliance.domain import DutyStatus, DutyStatusEvent, EventSource

from .time_source import TimeSource

logger = logging.getLogger(__name__)

MALFUNCTION_TYPES = ("POWER", "ENGINE_SYNC", "POSITIONING", "DATA_DIAGNOSTIC")
DAY_MS = 24 * 60 * 60 * 1000


@dataclass(frozen=True)
class EldMalfunctionEvent:
    ts_epoch_ms: int
    driver_id: str
    type: str


class EldProvider(ABC):
    """Interface for pluggable ELD integrations."""

    @abstractmethod
    def connect(self, vehicle_id: str) -> None:
        """Connect the provider for a vehicle."""

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect and release any resources."""

    @abstractmethod
    def emit_duty_status(self, event: DutyStatusEvent) -> None:
        """Record a duty status event."""

    @abstractmethod
    def simulate_driving(self, driver_id: str, minutes: int) -> None:
        """Simulate driving for a number of minutes."""

    @abstractmethod
    def simulate_off_duty(self, driver_id: str, minutes: int) -> None:
        """Simulate off-duty time for a number of minutes."""

    @abstractmethod
    def simulate_on_duty(self, driver_id: str, minutes: int) -> None:
        """Simulate on-duty-not-driving time for a number of minutes."""

    @abstractmethod
    def get_events(self, driver_id: str) -> List[DutyStatusEvent]:
        """Get all duty status events for a driver, oldest first."""

    @abstractmethod
    def inject_malfunction(self, driver_id: str, malfunction_type: str) -> None:
        """Record a malfunction event."""

    @abstractmethod
    def generate_dot_inspection_data(self, driver_id: str, days: int) -> Dict:
        """Generate DOT inspection data for a driver."""


class InMemoryEldProvider(EldProvider):
    """
    Deterministic in-memory ELD provider.

    Events are stamped with the injected clock. simulate_* calls advance
    it by the simulated duration, so a non-zero duration needs a clock
    with advance_minutes (VirtualClock).
    """

    def __init__(self, clock: TimeSource):
        self.clock = clock
        self._events_by_driver: Dict[str, List[DutyStatusEvent]] = {}
        self._malfunctions: List[EldMalfunctionEvent] = []
        self._connected_vehicle_id: Optional[str] = None
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def connect(self, vehicle_id: str) -> None:
        if not vehicle_id or not vehicle_id.strip():
            raise ELDProviderError("vehicle_id is required to connect the ELD provider")
        self._connected_vehicle_id = vehicle_id
        self.logger.info(f"ELD provider connected to vehicle {vehicle_id}")

    def disconnect(self) -> None:
        self._connected_vehicle_id = None

    def emit_duty_status(self, event: DutyStatusEvent) -> None:
        self._ensure_connected()
        self._validate_event(event)

        events = self._events_by_driver.setdefault(event.driver_id, [])
        if events and event.ts_epoch_ms < events[-1].ts_epoch_ms:
            raise ELDProviderError(
                "Duty status events must be emitted in chronological order"
            )

        events.append(event)
        self.logger.debug(
            f"Duty status {event.status} recorded for driver {event.driver_id} "
            f"at {event.ts_epoch_ms}"
        )

    def simulate_driving(self, driver_id: str, minutes: int) -> None:
        self._simulate(driver_id, DutyStatus.DRIVING, minutes, "simulate_driving")

    def simulate_off_duty(self, driver_id: str, minutes: int) -> None:
        self._simulate(driver_id, DutyStatus.OFF_DUTY, minutes, "simulate_off_duty")

    def simulate_on_duty(self, driver_id: str, minutes: int) -> None:
        self._simulate(driver_id, DutyStatus.ON_DUTY, minutes, "simulate_on_duty")

    def get_events(self, driver_id: str) -> List[DutyStatusEvent]:
        return list(self._events_by_driver.get(driver_id, []))

    def inject_malfunction(self, driver_id: str, malfunction_type: str) -> None:
        self._ensure_connected()
        if not driver_id or not driver_id.strip():
            raise ELDProviderError("driver_id is required for ELD malfunction injection")
        if malfunction_type not in MALFUNCTION_TYPES:
            raise ELDProviderError(f"Unsupported malfunction type: {malfunction_type}")

        self._malfunctions.append(
            EldMalfunctionEvent(
                ts_epoch_ms=self.clock.now_epoch_ms(),
                driver_id=driver_id,
                type=malfunction_type,
            )
        )
        self.logger.warning(f"ELD malfunction {malfunction_type} for driver {driver_id}")

    def generate_dot_inspection_data(self, driver_id: str, days: int) -> Dict:
        """
        Generate DOT inspection data for a driver.

        Args:
            driver_id: Driver identifier
            days: Lookback window in days

        Returns:
            Dict with the transfer format and a JSON payload containing the
            driver's events and malfunctions within the lookback window
        """
        if isinstance(days, bool) or not isinstance(days, int) or days <= 0:
            raise ELDProviderError(f"Invalid days: {days!r}")

        now_ms = self.clock.now_epoch_ms()
        cutoff_ms = now_ms - days * DAY_MS

        export_payload = {
            "driver_id": driver_id,
            "generated_at_epoch_ms": now_ms,
            "days": days,
            "events": [
                e.to_dict()
                for e in self._events_by_driver.get(driver_id, [])
                if e.ts_epoch_ms >= cutoff_ms
            ],
            "malfunctions": [
                asdict(m)
                for m in self._malfunctions
                if m.driver_id == driver_id and m.ts_epoch_ms >= cutoff_ms
            ],
            "vehicle_id": self._connected_vehicle_id or "UNKNOWN",
        }

        self.logger.info(f"Generated {days}-day DOT inspection data for {driver_id}")
        return {"format": "USB", "payload": json.dumps(export_payload, indent=2)}

    def _simulate(
        self, driver_id: str, status: DutyStatus, minutes: int, label: str
    ) -> None:
        self._ensure_connected()
        if isinstance(minutes, bool) or not isinstance(minutes, int) or minutes < 0:
            raise ELDProviderError(f"Invalid minutes for {label}: {minutes!r}")
        if minutes and not hasattr(self.clock, "advance_minutes"):
            raise ELDProviderError(
                f"Clock does not support advance_minutes; use VirtualClock for {label}"
            )

        self.emit_duty_status(
            DutyStatusEvent(
                ts_epoch_ms=self.clock.now_epoch_ms(),
                driver_id=driver_id,
                status=status,
                source=EventSource.ELD,
            )
        )

        if minutes:
            self.clock.advance_minutes(minutes)

    def _ensure_connected(self) -> None:
        if not self._connected_vehicle_id:
            raise ELDProviderError(
                "ELD provider not connected. Call connect(vehicle_id) first."
            )

    def _validate_event(self, event: DutyStatusEvent) -> None:
        if not event.driver_id or not event.driver_id.strip():
            raise ELDProviderError("DutyStatusEvent.driver_id is required")
        ts = event.ts_epoch_ms
        if (
            isinstance(ts, bool)
            or not isinstance(ts, (int, float))
            or not math.isfinite(ts)
            or ts < 0
        ):
            raise ELDProviderError(
                "DutyStatusEvent.ts_epoch_ms must be a non-negative number"
            )


def get_eld_provider(clock: TimeSource, mode: Optional[str] = None) -> EldProvider:
    """
    Build the ELD provider configured for this deployment.

    Args:
        clock: Time source used to stamp simulated events
        mode: Provider mode; defaults to the HOS_ENGINE ELD_MODE setting
    """
    if mode is None:
        mode = get_eld_mode()

    if mode == "mock":
        return InMemoryEldProvider(clock)

    raise ImproperlyConfigured(f"Unsupported ELD mode: {mode}")


class ELDProviderError(Exception):
    """Exception raised when an ELD provider operation fails."""

    pass
