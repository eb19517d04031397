"""
ViewSets for the money API v1.
"""

from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from apps.money.api.v1.serializers import (
    ConversionRequestSerializer,
    ConversionResultSerializer,
)
from apps.money.domain.exceptions import MoneyError, MoneyErrorKind, RateProviderError
from apps.money.domain.services import MoneyConversionService
from apps.money.infrastructure.providers.registry import get_default_provider


@extend_schema(tags=['Rates'])
class ConversionViewSet(viewsets.ViewSet):

    @extend_schema(
        parameters=[
            OpenApiParameter("source_currency", OpenApiTypes.STR, required=True, description="Source currency code (e.g. USD)"),
            OpenApiParameter("exchanged_currency", OpenApiTypes.STR, required=True, description="Target currency code (e.g. EUR)"),
            OpenApiParameter("amount", OpenApiTypes.STR, required=True, description="Amount to convert (e.g. 34.98)"),
        ],
        responses=ConversionResultSerializer,
        description="Convert an amount from one currency to another. Extra digits are truncated, not rounded."
    )
    @action(detail=False, methods=['get'], url_path='convert')
    def convert(self, request):
        serializer = ConversionRequestSerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)
        conversion = serializer.to_dto()

        try:
            provider = get_default_provider()
        except RateProviderError as e:
            return Response({"error": str(e)}, status=status.HTTP_503_SERVICE_UNAVAILABLE)

        try:
            result = MoneyConversionService.convert_amount(
                conversion.amount,
                conversion.source_currency,
                conversion.exchanged_currency,
                provider,
            )
        except MoneyError as e:
            if e.kind == MoneyErrorKind.RATE_FETCH_FAILED:
                response_status = status.HTTP_502_BAD_GATEWAY
            else:
                response_status = status.HTTP_400_BAD_REQUEST
            return Response({"error": str(e), "kind": e.kind.name}, status=response_status)

        return Response(ConversionResultSerializer(result.as_dict()).data)
