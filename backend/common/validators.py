"""
Common validators for the HOS compliance application.

This module contains shared validation logic used across the
hos_compliance and eld_logs apps.
"""

from django.core.validators import BaseValidator

MINUTE_MS = 60 * 1000


class GPSCoordinateValidator(BaseValidator):
    """
    Validator for GPS coordinates (latitude/longitude).

    Ensures coordinates are within valid ranges:
    - Latitude: -90 to 90 degrees
    - Longitude: -180 to 180 degrees
    """

    def __init__(self, coordinate_type="latitude"):
        self.coordinate_type = coordinate_type

        if coordinate_type == "latitude":
            self.limit_value = (-90, 90)
            self.message = "Latitude must be between -90 and 90 degrees."
        elif coordinate_type == "longitude":
            self.limit_value = (-180, 180)
            self.message = "Longitude must be between -180 and 180 degrees."
        else:
            raise ValueError("coordinate_type must be 'latitude' or 'longitude'")

    def compare(self, value, limit_value):
        min_val, max_val = limit_value
        return not (min_val <= float(value) <= max_val)

    def clean(self, value):
        return float(value)


def validate_latitude(value):
    """Validate latitude coordinate."""
    validator = GPSCoordinateValidator("latitude")
    validator(value)


def validate_longitude(value):
    """Validate longitude coordinate."""
    validator = GPSCoordinateValidator("longitude")
    validator(value)


class MinuteAlignedEpochValidator(BaseValidator):
    """
    Validator for epoch millisecond timestamps.

    HOS durations must be whole minutes, so timestamps have to fall on
    minute boundaries.
    """

    message = "Timestamp must be aligned to a whole minute (multiple of %(limit_value)s ms)."
    code = "minute_aligned"

    def __init__(self):
        super().__init__(limit_value=MINUTE_MS)

    def compare(self, value, limit_value):
        return value % limit_value != 0


def validate_minute_aligned_epoch_ms(value):
    """Validate an epoch millisecond timestamp falls on a minute boundary."""
    validator = MinuteAlignedEpochValidator()
    validator(value)


class MinutesValidator(BaseValidator):
    """
    Validator for minute budgets in HOS context.

    Ensures minutes are non-negative and within reasonable limits.
    """

    def __init__(self, max_minutes=None):
        self.limit_value = max_minutes
        if max_minutes is None:
            self.message = "Minutes must be zero or greater."
        else:
            self.message = f"Minutes must be between 0 and {max_minutes}."

    def compare(self, value, limit_value):
        if value < 0:
            return True
        return limit_value is not None and value > limit_value


def validate_warning_threshold_minutes(value):
    """Validate an alert warning threshold (at most one 14-hour window)."""
    validator = MinutesValidator(max_minutes=14 * 60)
    validator(value)


def validate_cycle_limit_minutes(value):
    """Validate a rolling cycle limit (at most 8 days of minutes)."""
    validator = MinutesValidator(max_minutes=8 * 24 * 60)
    validator(value)
