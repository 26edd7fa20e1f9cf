from django.apps import AppConfig  # type: ignore


class NotificationsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.notifications"

    def ready(self):  # type: ignore
        from apps.offices.events import OfficePendingApproval
        from shared.application.message_bus import message_bus

        from .handlers import on_office_pending_approval

        message_bus.register_event_handler(OfficePendingApproval, on_office_pending_approval)
