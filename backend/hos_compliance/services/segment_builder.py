"""
Segment Builder Service.

Turns a chronological list of duty status change events into contiguous
time intervals ("segments"), each carrying a single duty status and
covering [event time, next event time or evaluation time).

Every downstream HOS rule needs durations rather than instants, so the
intervals are reconstructed once, up front, and consumed by the rule
evaluator in a single forward pass.

Single Responsibility: segment reconstruction only.
"""

import logging
import math
from typing import List, Sequence

from ..domain import DutyStatus, DutyStatusEvent, Segment
from ..exceptions import InvalidOrderError, InvalidStatusError, InvalidTimestampError

logger = logging.getLogger(__name__)


def _is_finite_number(value) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def validate_as_of(as_of_epoch_ms) -> None:
    """Reject evaluation timestamps that are not finite, non-negative numbers."""
    if not _is_finite_number(as_of_epoch_ms) or as_of_epoch_ms < 0:
        raise InvalidTimestampError(f"Invalid as_of_epoch_ms: {as_of_epoch_ms!r}")


def validate_event(index: int, event: DutyStatusEvent) -> DutyStatus:
    """Check one event's timestamp and status; return the normalized status."""
    ts = event.ts_epoch_ms
    if not _is_finite_number(ts) or ts < 0:
        raise InvalidTimestampError(f"Invalid ts_epoch_ms for event {index}: {ts!r}")
    try:
        return DutyStatus(event.status)
    except ValueError:
        raise InvalidStatusError(
            f"Invalid duty status for event {index}: {event.status!r}"
        ) from None


def ensure_chronological(events: Sequence[DutyStatusEvent]) -> None:
    """
    Validate every event, then raise InvalidOrderError on the first pair
    of decreasing timestamps.
    """
    for index, event in enumerate(events):
        validate_event(index, event)
        if index == 0:
            continue
        previous_ts = events[index - 1].ts_epoch_ms
        if event.ts_epoch_ms < previous_ts:
            raise InvalidOrderError(index, previous_ts, event.ts_epoch_ms)


class SegmentBuilderService:
    """
    Service for reconstructing duty status segments from sparse events.

    Stateless; one instance may be shared between threads.
    """

    def __init__(self):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def build_segments(
        self, events: Sequence[DutyStatusEvent], as_of_epoch_ms: int
    ) -> List[Segment]:
        """
        Build the ordered segment list covering [events[0], as_of).

        Args:
            events: Duty status events, ascending by timestamp
            as_of_epoch_ms: Evaluation time; nothing extends past it

        Returns:
            List of non-empty segments in time order

        Raises:
            InvalidTimestampError: as_of or an event time is negative or not finite
            InvalidStatusError: an event carries an unknown duty status
            InvalidOrderError: events are not in chronological order
        """
        validate_as_of(as_of_epoch_ms)
        ensure_chronological(events)

        # Events after as_of are excluded entirely
        visible = [e for e in events if e.ts_epoch_ms <= as_of_epoch_ms]

        segments: List[Segment] = []
        for index, event in enumerate(visible):
            start = event.ts_epoch_ms
            if index + 1 < len(visible):
                end = min(visible[index + 1].ts_epoch_ms, as_of_epoch_ms)
            else:
                end = as_of_epoch_ms

            if end < start:
                raise InvalidOrderError(index + 1, start, end)

            # Same-timestamp events: the later one replaces the status
            if end == start:
                continue

            segments.append(
                Segment(
                    start_epoch_ms=start,
                    end_epoch_ms=end,
                    status=DutyStatus(event.status),
                )
            )

        self.logger.debug(
            f"Built {len(segments)} segments from {len(visible)} of "
            f"{len(events)} events as of {as_of_epoch_ms}"
        )
        return segments


def build_segments(
    events: Sequence[DutyStatusEvent], as_of_epoch_ms: int
) -> List[Segment]:
    return SegmentBuilderService().build_segments(events, as_of_epoch_ms)
