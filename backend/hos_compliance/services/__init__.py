"""
HOS Compliance Services Package.

This package contains the business logic services for Hours of Service
compliance evaluation.

Services:
- SegmentBuilderService: Duty status segment reconstruction
- HOSRuleEvaluatorService: Core HOS rule evaluation
- HOSStatusService: Driver-level HOS status lookups
"""

from .segment_builder import SegmentBuilderService, build_segments
from .rule_evaluator import HOSRuleEvaluatorService, evaluate
from .hos_status_service import HOSStatusService

__all__ = [
    'SegmentBuilderService',
    'HOSRuleEvaluatorService',
    'HOSStatusService',
    'build_segments',
    'evaluate',
]
