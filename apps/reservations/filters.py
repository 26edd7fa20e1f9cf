"""FilterSet definitions for reservation listings."""

from __future__ import annotations

import django_filters  # type: ignore
from django import forms  # type: ignore

from .models import Reservation


class ReservationFilterForm(forms.Form):
    """Validates the date window as a pair."""

    def clean(self):  # type: ignore
        cleaned_data = super().clean()
        from_date = cleaned_data.get("from_date")
        to_date = cleaned_data.get("to_date")
        if (from_date is None) != (to_date is None):
            missing = "to_date" if to_date is None else "from_date"
            if missing not in self.errors:
                self.add_error(missing, "from_date and to_date must be given together.")
        elif from_date is not None and to_date is not None and from_date >= to_date:
            self.add_error("to_date", "to_date must be a date after from_date.")
        return cleaned_data


class ReservationFilterSet(django_filters.FilterSet):
    """Filters shared by the guest and host reservation listings."""

    office_id = django_filters.NumberFilter(field_name="office_id", lookup_expr="exact")
    status = django_filters.ChoiceFilter(field_name="status", choices=Reservation.Status.choices)
    from_date = django_filters.DateFilter(method="filter_date_window")
    to_date = django_filters.DateFilter(method="filter_date_window")

    class Meta:
        model = Reservation
        fields = ["office_id", "status"]
        form = ReservationFilterForm

    def filter_date_window(self, queryset, name, value):  # type: ignore
        # Both bounds are applied once, from the from_date pass.
        if name != "from_date":
            return queryset
        to_date = self.form.cleaned_data.get("to_date")
        if value is None or to_date is None:
            return queryset
        return queryset.touching_window(value, to_date)


class HostReservationFilterSet(ReservationFilterSet):
    """The host view can also narrow down to one guest."""

    user_id = django_filters.NumberFilter(field_name="user_id", lookup_expr="exact")

    class Meta(ReservationFilterSet.Meta):
        fields = ["office_id", "user_id", "status"]
