"""Serializers for the reservation domain."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.offices.serializers import OfficeSummarySerializer

from .models import Reservation


class ReservationCreateSerializer(serializers.Serializer):
    """Guest input; eligibility and availability are checked by the booking engine."""

    office_id = serializers.IntegerField()
    start_date = serializers.DateField()
    end_date = serializers.DateField()


class ReservationSerializer(serializers.ModelSerializer):
    """Reservation with a summary of its office."""

    office = OfficeSummarySerializer(read_only=True)
    user_id = serializers.ReadOnlyField()
    office_id = serializers.ReadOnlyField()

    class Meta:
        model = Reservation
        fields = [
            "id",
            "office_id",
            "user_id",
            "office",
            "start_date",
            "end_date",
            "status",
            "price",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
