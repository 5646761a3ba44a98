from django.apps import AppConfig


class ProductionConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "modules.production"
    label = "production"

    def ready(self) -> None:
        from modules.production.events import OrderAssigned, QualityCheckRecorded
        from modules.production.handlers import (
            order_assigned_handler,
            quality_check_recorded_handler,
        )
        from shared.infrastructure.bus import event_bus

        event_bus.subscribe(OrderAssigned, order_assigned_handler)
        event_bus.subscribe(QualityCheckRecorded, quality_check_recorded_handler)
