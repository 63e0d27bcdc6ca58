"""
HOS compliance exceptions.

Every engine failure is an input-contract error: the call cannot determine
compliance and must not be treated as compliant.
"""


class HOSCalculationError(Exception):
    """Exception raised when HOS calculations fail."""

    pass


class InvalidOrderError(HOSCalculationError):
    """Raised when duty status events are not in chronological order."""

    def __init__(self, index: int, previous_ts: int, current_ts: int):
        self.index = index
        self.previous_ts = previous_ts
        self.current_ts = current_ts
        super().__init__(
            f"Duty events must be in chronological order "
            f"(event {index} at {current_ts} precedes {previous_ts})"
        )


class InvalidTimestampError(HOSCalculationError):
    """Raised when an evaluation timestamp is negative or not finite."""

    pass


class InvalidStatusError(HOSCalculationError):
    """Raised when an event carries an unknown duty status."""

    pass


class NonMinuteAlignedDurationError(HOSCalculationError):
    """Raised when a derived duration is not a whole number of minutes."""

    def __init__(self, duration_ms):
        self.duration_ms = duration_ms
        super().__init__(f"Duration must be minute-aligned (ms={duration_ms})")


class InvalidConfigError(HOSCalculationError):
    """Raised when an HOS configuration value is out of range."""

    pass


class HOSViolationError(Exception):
    """Raised when a compliance assertion finds HOS violations."""

    def __init__(self, driver_id: str, violations):
        self.driver_id = driver_id
        self.violations = list(violations)
        details = "; ".join(f"{v.rule}: {v.message}" for v in self.violations)
        super().__init__(f"HOS violations detected for {driver_id}: {details}")
