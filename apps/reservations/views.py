"""API views for the reservation domain."""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import generics, mixins, permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.users.capabilities import Capability, actor_from_request

from . import repository, services
from .filters import HostReservationFilterSet, ReservationFilterSet
from .models import Reservation
from .serializers import ReservationCreateSerializer, ReservationSerializer


class ReservationViewSet(mixins.ListModelMixin, viewsets.GenericViewSet):
    """Reservations of the signed-in guest: list, create and cancel."""

    permission_classes = [permissions.IsAuthenticated]
    filter_backends = [DjangoFilterBackend]
    filterset_class = ReservationFilterSet
    lookup_value_regex = r"\d+"

    def get_serializer_class(self):  # type: ignore
        if self.action == "create":
            return ReservationCreateSerializer
        return ReservationSerializer

    def get_queryset(self):  # type: ignore
        if getattr(self, "swagger_fake_view", False):
            return Reservation.objects.none()
        return repository.list_guest_reservations(actor_from_request(self.request))

    def create(self, request):  # type: ignore
        actor = actor_from_request(request)
        actor.require(Capability.RESERVATION_CREATE)

        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        reservation = services.create_reservation(actor, **serializer.validated_data)

        read_serializer = ReservationSerializer(reservation, context=self.get_serializer_context())
        return Response(read_serializer.data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=["post"])
    def cancel(self, request, pk=None):  # type: ignore
        reservation = services.cancel_reservation(actor_from_request(request), int(pk))
        return Response(ReservationSerializer(reservation, context=self.get_serializer_context()).data)


class HostReservationListView(generics.ListAPIView):
    """Reservations made on the signed-in host's offices."""

    serializer_class = ReservationSerializer
    permission_classes = [permissions.IsAuthenticated]
    filter_backends = [DjangoFilterBackend]
    filterset_class = HostReservationFilterSet

    def get_queryset(self):  # type: ignore
        if getattr(self, "swagger_fake_view", False):
            return Reservation.objects.none()
        return repository.list_host_reservations(actor_from_request(self.request))
