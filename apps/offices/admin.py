"""Admin registrations for the offices domain."""

from __future__ import annotations

from django.contrib import admin, messages  # type: ignore

from .models import Office, OfficeImage, Tag


@admin.register(Tag)
class TagAdmin(admin.ModelAdmin):
    list_display = ("name",)
    search_fields = ("name",)


class OfficeImageInline(admin.TabularInline):
    model = OfficeImage
    extra = 0
    fields = ("path", "created_at")
    readonly_fields = ("created_at",)


@admin.register(Office)
class OfficeAdmin(admin.ModelAdmin):
    list_display = (
        "title",
        "owner",
        "approval_status",
        "hidden",
        "price_per_day",
        "monthly_discount",
        "deleted_at",
    )
    list_filter = ("approval_status", "hidden")
    search_fields = ("title", "address_line1", "owner__email")
    inlines = (OfficeImageInline,)
    filter_horizontal = ("tags",)
    readonly_fields = ("created_at", "updated_at", "deleted_at")
    actions = ("approve_offices", "reject_offices")

    def get_queryset(self, request):  # type: ignore
        return Office.all_objects.select_related("owner")

    @admin.action(description="Approve selected offices")
    def approve_offices(self, request, queryset):  # type: ignore
        for office in queryset:
            office.approve()
        self.message_user(request, f"{queryset.count()} office(s) approved.", messages.SUCCESS)

    @admin.action(description="Reject selected offices")
    def reject_offices(self, request, queryset):  # type: ignore
        for office in queryset:
            office.reject()
        self.message_user(request, f"{queryset.count()} office(s) rejected.", messages.SUCCESS)


@admin.register(OfficeImage)
class OfficeImageAdmin(admin.ModelAdmin):
    list_display = ("office", "path", "created_at")
    search_fields = ("office__title", "path")
