"""Office domain models.

Hosts publish offices that administrators approve before they become
publicly listed. Offices carry their images and tags; reservations
live in ``apps.reservations`` and reference offices by foreign key.
"""

from __future__ import annotations

from decimal import Decimal

from django.apps import apps as django_apps  # type: ignore
from django.conf import settings  # type: ignore
from django.core.validators import MaxValueValidator, MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.db.models import Count, Exists, ExpressionWrapper, F, FloatField, OuterRef, Q, Value  # type: ignore
from django.db.models.functions import ASin, Cast, Cos, Power, Radians, Sin, Sqrt  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from shared.domain.value_objects import EARTH_RADIUS_KM, GeoPoint

COORDINATE_PLACES = Decimal("0.0000001")
MIN_PRICE_PER_DAY = 100
MAX_MONTHLY_DISCOUNT = 90


def quantize_coordinate(value) -> Decimal:  # type: ignore
    """Round a coordinate to the precision stored in the database."""
    return Decimal(str(value)).quantize(COORDINATE_PLACES)


def haversine_distance(origin: GeoPoint) -> ExpressionWrapper:
    """Great-circle distance in kilometres from ``origin`` to each office."""

    office_lat = Radians(Cast("lat", FloatField()))
    office_lng = Radians(Cast("lng", FloatField()))
    origin_lat = Radians(Value(float(origin.lat), output_field=FloatField()))
    origin_lng = Radians(Value(float(origin.lng), output_field=FloatField()))
    half_chord = ExpressionWrapper(
        Power(Sin((office_lat - origin_lat) / Value(2.0)), 2)
        + Cos(origin_lat) * Cos(office_lat) * Power(Sin((office_lng - origin_lng) / Value(2.0)), 2),
        output_field=FloatField(),
    )
    return ExpressionWrapper(
        Value(2.0 * EARTH_RADIUS_KM) * ASin(Sqrt(half_chord)),
        output_field=FloatField(),
    )


class Tag(models.Model):
    """Free-form label attached to offices (e.g. "wifi", "parking")."""

    name = models.CharField(max_length=100, unique=True)

    class Meta:
        verbose_name = _("Tag")
        verbose_name_plural = _("Tags")
        ordering = ["id"]

    def __str__(self) -> str:
        return self.name


class OfficeQuerySet(models.QuerySet):
    """Query building blocks of the office repository."""

    def listed(self):
        return self.filter(approval_status=Office.ApprovalStatus.APPROVED, hidden=False)

    def owned_by(self, user_id: int):
        return self.filter(owner_id=user_id)

    def visited_by(self, user_id: int):
        """Offices with at least one reservation made by ``user_id``."""
        Reservation = django_apps.get_model("reservations", "Reservation")
        return self.filter(
            Exists(Reservation.objects.filter(office_id=OuterRef("pk"), user_id=user_id))
        )

    def nearest_to(self, origin: GeoPoint):
        return self.annotate(distance=haversine_distance(origin)).order_by("distance", "id")

    def with_active_reservations_count(self):
        Reservation = django_apps.get_model("reservations", "Reservation")
        return self.annotate(
            reservations_count=Count(
                "reservations",
                filter=Q(reservations__status=Reservation.Status.ACTIVE),
                distinct=True,
            )
        )

    def with_listing_relations(self):
        return self.select_related("owner", "featured_image").prefetch_related("images", "tags")


class OfficeManager(models.Manager.from_queryset(OfficeQuerySet)):  # type: ignore
    """Default manager: hides soft-deleted offices."""

    def get_queryset(self):  # type: ignore
        return super().get_queryset().filter(deleted_at__isnull=True)


class Office(models.Model):
    """Bookable office listed by a host."""

    class ApprovalStatus(models.TextChoices):
        PENDING = "pending", _("Pending approval")
        APPROVED = "approved", _("Approved")
        REJECTED = "rejected", _("Rejected")

    # Changing any of these sends the office back to moderation.
    REVIEWED_FIELDS = ("lat", "lng", "price_per_day")

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="offices",
    )
    title = models.CharField(max_length=255)
    description = models.TextField()
    lat = models.DecimalField(max_digits=10, decimal_places=7)
    lng = models.DecimalField(max_digits=10, decimal_places=7)
    address_line1 = models.CharField(max_length=255, blank=True)
    address_line2 = models.CharField(max_length=255, blank=True)
    approval_status = models.CharField(
        max_length=20,
        choices=ApprovalStatus.choices,
        default=ApprovalStatus.PENDING,
    )
    hidden = models.BooleanField(default=False)
    price_per_day = models.PositiveIntegerField(
        validators=[MinValueValidator(MIN_PRICE_PER_DAY)],
        help_text=_("Price per day in the smallest currency unit."),
    )
    monthly_discount = models.PositiveSmallIntegerField(
        default=0,
        validators=[MinValueValidator(0), MaxValueValidator(MAX_MONTHLY_DISCOUNT)],
        help_text=_("Discount percentage for stays of 28 days or more."),
    )
    featured_image = models.ForeignKey(
        "OfficeImage",
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="+",
    )
    tags = models.ManyToManyField(Tag, blank=True, related_name="offices")
    deleted_at = models.DateTimeField(null=True, blank=True, editable=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = OfficeManager()
    all_objects = OfficeQuerySet.as_manager()

    class Meta:
        verbose_name = _("Office")
        verbose_name_plural = _("Offices")
        ordering = ["id"]
        base_manager_name = "all_objects"
        constraints = [
            models.CheckConstraint(
                condition=models.Q(monthly_discount__lte=MAX_MONTHLY_DISCOUNT),
                name="office_monthly_discount_range",
            ),
            models.CheckConstraint(
                condition=models.Q(price_per_day__gte=MIN_PRICE_PER_DAY),
                name="office_min_price_per_day",
            ),
        ]
        indexes = [
            models.Index(fields=["approval_status", "hidden"], name="offices_off_approva_5d1c2e_idx"),
            models.Index(fields=["owner", "approval_status"], name="offices_off_owner_i_8a7f31_idx"),
        ]

    def __str__(self) -> str:
        return self.title

    @property
    def is_listed(self) -> bool:
        return (
            self.deleted_at is None
            and self.approval_status == self.ApprovalStatus.APPROVED
            and not self.hidden
        )

    def is_owned_by(self, user_id) -> bool:  # type: ignore
        return user_id is not None and self.owner_id == user_id

    def approve(self) -> None:
        self.approval_status = self.ApprovalStatus.APPROVED
        self.save(update_fields=["approval_status", "updated_at"])

    def reject(self) -> None:
        self.approval_status = self.ApprovalStatus.REJECTED
        self.save(update_fields=["approval_status", "updated_at"])

    def soft_delete(self) -> None:
        self.deleted_at = timezone.now()
        self.save(update_fields=["deleted_at", "updated_at"])


class OfficeImage(models.Model):
    """Image stored for an office; ``path`` is relative to the storage root."""

    office = models.ForeignKey(Office, on_delete=models.CASCADE, related_name="images")
    path = models.CharField(max_length=255)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("Office image")
        verbose_name_plural = _("Office images")
        ordering = ["id"]

    def __str__(self) -> str:
        return f"{self.office_id}: {self.path}"
