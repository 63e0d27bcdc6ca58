"""
HOS Status Service.

Orchestrates an ELD event provider, a time source and the rule evaluator
to answer "what is this driver's HOS status right now?".

Single Responsibility: driver-level HOS status lookups only.
"""

import logging
from typing import Optional

from eld_logs.services.eld_provider import EldProvider
from eld_logs.services.time_source import TimeSource

from ..domain import HosConfig, HosStatus
from ..exceptions import HOSCalculationError, HOSViolationError
from .rule_evaluator import HOSRuleEvaluatorService

logger = logging.getLogger(__name__)


class HOSStatusService:
    """
    Service for computing HOS status for drivers at the current time.

    Any failure is surfaced to the caller; a failed lookup must never be
    read as "compliant".
    """

    def __init__(
        self,
        eld_provider: EldProvider,
        config: HosConfig,
        time_source: TimeSource,
        evaluator: Optional[HOSRuleEvaluatorService] = None,
    ):
        self.eld_provider = eld_provider
        self.config = config
        self.time_source = time_source
        self.evaluator = evaluator or HOSRuleEvaluatorService()
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def get_hos_status(self, driver_id: str) -> HosStatus:
        """
        Compute HOS status for a driver at the current time.

        Args:
            driver_id: Driver identifier

        Returns:
            HosStatus snapshot as of the time source's current time
        """
        if not driver_id or not driver_id.strip():
            raise ValueError("driver_id is required for HOS status")

        events = self.eld_provider.get_events(driver_id)
        as_of_epoch_ms = self.time_source.now_epoch_ms()

        try:
            status = self.evaluator.evaluate(self.config, events, as_of_epoch_ms)
        except HOSCalculationError as e:
            self.logger.error(f"HOS status failed for driver {driver_id}: {str(e)}")
            raise

        self.logger.info(
            f"HOS status for driver {driver_id}: {len(status.alerts)} alerts, "
            f"{len(status.violations)} violations"
        )
        return status

    def assert_no_violations(self, driver_id: str) -> HosStatus:
        """
        Assert that no HOS violations are present for the driver.

        Raises:
            HOSViolationError: one or more violations are present
        """
        status = self.get_hos_status(driver_id)
        if status.has_violations:
            raise HOSViolationError(driver_id, status.violations)
        return status
