"""
Serializers for the money API.
Handles validation of query parameters before they reach the domain layer.
"""

from rest_framework import serializers

from apps.money.application.dto import ConversionRequestDTO


class ConversionRequestSerializer(serializers.Serializer):
    amount = serializers.CharField(max_length=32)
    source_currency = serializers.CharField(min_length=3, max_length=3)
    exchanged_currency = serializers.CharField(min_length=3, max_length=3)

    def to_dto(self) -> ConversionRequestDTO:
        return ConversionRequestDTO(**self.validated_data)


class ConversionResultSerializer(serializers.Serializer):
    source_currency = serializers.CharField()
    exchanged_currency = serializers.CharField()
    amount = serializers.CharField()
    rate = serializers.CharField()
    converted_amount = serializers.CharField()
