"""Office API views."""

from __future__ import annotations

from rest_framework import generics, permissions, status, viewsets  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.users.capabilities import Capability, actor_from_request

from . import policies, repository, services
from .serializers import (
    OfficeImageSerializer,
    OfficeImageUploadSerializer,
    OfficeListParamsSerializer,
    OfficeSerializer,
    OfficeWriteSerializer,
    TagSerializer,
)
from .models import Tag


class OfficeViewSet(viewsets.GenericViewSet):
    """
    Public office listing plus host management of their offices.

    Reads go through ``apps.offices.repository`` so the visibility rule
    applies everywhere; writes go through ``apps.offices.services``.
    """

    serializer_class = OfficeSerializer
    lookup_value_regex = r"\d+"

    def get_permissions(self):  # type: ignore
        if self.action in {"list", "retrieve"}:
            return [permissions.AllowAny()]
        return [permissions.IsAuthenticated()]

    def get_serializer_class(self):  # type: ignore
        if self.action in {"create", "update", "partial_update"}:
            return OfficeWriteSerializer
        return OfficeSerializer

    def _read_response(self, office_id: int, actor, status_code: int = status.HTTP_200_OK) -> Response:  # type: ignore
        office = repository.get_office(office_id, actor)
        return Response(OfficeSerializer(office, context=self.get_serializer_context()).data, status=status_code)

    def list(self, request):  # type: ignore
        params = OfficeListParamsSerializer(data=request.query_params)
        params.is_valid(raise_exception=True)
        filters = repository.OfficeFilters(**params.validated_data)

        queryset = repository.list_offices(filters, actor_from_request(request))
        page = self.paginate_queryset(queryset)
        serializer = OfficeSerializer(page, many=True, context=self.get_serializer_context())
        return self.get_paginated_response(serializer.data)

    def retrieve(self, request, pk=None):  # type: ignore
        return self._read_response(int(pk), actor_from_request(request))

    def create(self, request):  # type: ignore
        actor = actor_from_request(request)
        actor.require(Capability.OFFICE_CREATE)

        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        office = services.create_office(actor, serializer.validated_data)
        return self._read_response(office.pk, actor, status.HTTP_201_CREATED)

    def update(self, request, pk=None, partial=True):  # type: ignore
        actor = actor_from_request(request)
        office = repository.get_office_for_change(int(pk))
        policies.ensure_can_manage(actor, office)

        # Every field is optional on update, for PUT as well as PATCH.
        serializer = self.get_serializer(office, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        services.update_office(actor, office, serializer.validated_data)
        return self._read_response(office.pk, actor)

    def partial_update(self, request, pk=None):  # type: ignore
        return self.update(request, pk=pk, partial=True)

    def destroy(self, request, pk=None):  # type: ignore
        actor = actor_from_request(request)
        office = repository.get_office_for_change(int(pk))
        services.delete_office(actor, office)
        return Response(status=status.HTTP_204_NO_CONTENT)


class OfficeImageViewSet(viewsets.GenericViewSet):
    """Upload and removal of an office's images by its host."""

    serializer_class = OfficeImageUploadSerializer
    permission_classes = [permissions.IsAuthenticated]

    def create(self, request, office_id=None):  # type: ignore
        actor = actor_from_request(request)
        office = repository.get_office_for_change(int(office_id))
        policies.ensure_can_manage(actor, office)

        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        image = services.add_image(actor, office, serializer.validated_data["image"])
        return Response(OfficeImageSerializer(image).data, status=status.HTTP_201_CREATED)

    def destroy(self, request, office_id=None, pk=None):  # type: ignore
        actor = actor_from_request(request)
        office = repository.get_office_for_change(int(office_id))
        policies.ensure_can_manage(actor, office)
        image = repository.get_image(int(pk))
        services.delete_image(actor, office, image)
        return Response(status=status.HTTP_204_NO_CONTENT)


class TagListView(generics.ListAPIView):
    """All tags, unpaginated."""

    queryset = Tag.objects.all()
    serializer_class = TagSerializer
    permission_classes = [permissions.AllowAny]
    pagination_class = None
