"""
HOS Compliance API Serializers.

Provides serialization and validation for the HOS evaluation endpoint.
Handles input validation of duty status events and configuration, and
response serialization of compliance snapshots.
"""

from rest_framework import serializers

from common.validators import (
    validate_cycle_limit_minutes,
    validate_latitude,
    validate_longitude,
    validate_minute_aligned_epoch_ms,
    validate_warning_threshold_minutes,
)
from .constants import SUPPORTED_RULESETS
from .domain import (
    DutyStatus,
    DutyStatusEvent,
    EventSource,
    GpsPoint,
    HosRuleId,
    Severity,
)


class GpsPointSerializer(serializers.Serializer):
    lat = serializers.FloatField(validators=[validate_latitude])
    lon = serializers.FloatField(validators=[validate_longitude])
    accuracy_m = serializers.FloatField(min_value=0, required=False, allow_null=True)


class DutyStatusEventSerializer(serializers.Serializer):
    """
    Serializer for duty status events.

    Validates a single point-in-time duty status assertion and converts
    it into a DutyStatusEvent.
    """

    ts_epoch_ms = serializers.IntegerField(
        min_value=0,
        validators=[validate_minute_aligned_epoch_ms],
        help_text="Event time in milliseconds since the epoch",
    )
    driver_id = serializers.CharField(max_length=100)
    status = serializers.ChoiceField(choices=DutyStatus.choices)
    source = serializers.ChoiceField(choices=EventSource.choices, default=EventSource.ELD)
    location = GpsPointSerializer(required=False, allow_null=True)
    odometer_miles = serializers.FloatField(min_value=0, required=False, allow_null=True)
    engine_hours = serializers.FloatField(min_value=0, required=False, allow_null=True)

    def to_event(self, data) -> DutyStatusEvent:
        location = data.get("location")
        return DutyStatusEvent(
            ts_epoch_ms=data["ts_epoch_ms"],
            driver_id=data["driver_id"],
            status=DutyStatus(data["status"]),
            source=EventSource(data.get("source", EventSource.ELD)),
            location=GpsPoint(**location) if location else None,
            odometer_miles=data.get("odometer_miles"),
            engine_hours=data.get("engine_hours"),
        )


class HosConfigSerializer(serializers.Serializer):
    """
    Serializer for HOS configuration overrides.

    Omitted fields fall back to the HOS_ENGINE settings.
    """

    warning_threshold_min = serializers.IntegerField(
        required=False, validators=[validate_warning_threshold_minutes]
    )
    ruleset = serializers.ChoiceField(
        choices=[(r, r) for r in SUPPORTED_RULESETS], required=False
    )
    cycle_limit_min = serializers.IntegerField(
        min_value=1, required=False, validators=[validate_cycle_limit_minutes]
    )
    cycle_days = serializers.IntegerField(min_value=1, max_value=14, required=False)
    timezone = serializers.CharField(max_length=64, required=False)


class HOSEvaluationRequestSerializer(serializers.Serializer):
    """
    Serializer for HOS evaluation requests.

    Validates the event history and evaluation time for one driver.
    """

    events = DutyStatusEventSerializer(many=True)
    as_of_epoch_ms = serializers.IntegerField(
        min_value=0,
        validators=[validate_minute_aligned_epoch_ms],
        help_text="Evaluation time in milliseconds since the epoch",
    )
    config = HosConfigSerializer(required=False)

    def validate_events(self, value):
        """Events must belong to a single driver."""
        driver_ids = {event["driver_id"] for event in value}
        if len(driver_ids) > 1:
            raise serializers.ValidationError(
                "Events must belong to a single driver"
            )
        return value

    def get_events(self):
        event_serializer = DutyStatusEventSerializer()
        return [
            event_serializer.to_event(data)
            for data in self.validated_data["events"]
        ]


class HosAlertSerializer(serializers.Serializer):
    rule = serializers.ChoiceField(choices=HosRuleId.choices)
    severity = serializers.ChoiceField(choices=Severity.choices)
    message = serializers.CharField()
    at_epoch_ms = serializers.IntegerField()


class HosStatusSerializer(serializers.Serializer):
    """
    Serializer for HOS compliance snapshots.

    Formats HosStatus results from HOSRuleEvaluatorService for API response.
    """

    as_of_epoch_ms = serializers.IntegerField()
    remaining_drive_min = serializers.IntegerField()
    remaining_duty_window_min = serializers.IntegerField()
    break_required_in_min = serializers.IntegerField()
    cycle_remaining_min = serializers.IntegerField()
    cycle_used_min = serializers.IntegerField()
    last_break_start_epoch_ms = serializers.IntegerField(allow_null=True)
    alerts = HosAlertSerializer(many=True)
    violations = HosAlertSerializer(many=True)
    is_compliant = serializers.SerializerMethodField()

    def get_is_compliant(self, obj):
        return not obj.has_violations
