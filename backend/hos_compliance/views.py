"""
HOS Compliance API Views.

Provides REST API endpoints for HOS compliance evaluation. The engine is
stateless, so nothing is persisted: callers post a driver's duty history
and receive a point-in-time compliance snapshot.
"""

import logging

from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from .conf import get_hos_config
from .exceptions import HOSCalculationError
from .serializers import HOSEvaluationRequestSerializer, HosStatusSerializer
from .services.rule_evaluator import HOSRuleEvaluatorService

logger = logging.getLogger(__name__)


class HealthCheckView(APIView):
    permission_classes = [AllowAny]

    def get(self, request):
        return Response({"status": "ok", "service": "hos_compliance"})


class HOSEvaluationViewSet(viewsets.ViewSet):
    """
    ViewSet for HOS evaluations.

    Provides endpoints for evaluating HOS compliance
    without persisting data to database.
    """

    permission_classes = [AllowAny]

    @action(detail=False, methods=['post'])
    def evaluate(self, request):
        """
        Evaluate HOS compliance for a driver's duty history.

        Request Body:
            events (list): Duty status events in chronological order
            as_of_epoch_ms (int): Evaluation time
            config (object, optional): HosConfig overrides
        """
        serializer = HOSEvaluationRequestSerializer(data=request.data)

        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        validated_data = serializer.validated_data

        try:
            config = get_hos_config(validated_data.get('config'))
            evaluator = HOSRuleEvaluatorService()
            hos_status = evaluator.evaluate(
                config,
                serializer.get_events(),
                validated_data['as_of_epoch_ms'],
            )
        except HOSCalculationError as e:
            logger.warning(f"HOS evaluation rejected: {str(e)}")
            return Response(
                {'error': 'HOS evaluation failed', 'details': str(e)},
                status=status.HTTP_400_BAD_REQUEST,
            )
        except Exception as e:
            logger.error(f"HOS evaluation failed: {str(e)}")
            return Response(
                {'error': 'HOS evaluation failed', 'details': str(e)},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        logger.info(
            f"HOS evaluation completed with {len(hos_status.violations)} violations"
        )
        return Response(HosStatusSerializer(hos_status).data)
