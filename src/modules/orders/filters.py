import django_filters

from modules.orders.constants import OrderPriority, OrderStatus, OrderType, WorkflowStage
from modules.orders.models import Order


class OrderFilter(django_filters.FilterSet):
    status = django_filters.ChoiceFilter(choices=OrderStatus.choices)
    workflow_stage = django_filters.ChoiceFilter(choices=WorkflowStage.choices)
    unassigned = django_filters.BooleanFilter(
        field_name="workflow_stage", lookup_expr="isnull"
    )
    priority = django_filters.ChoiceFilter(choices=OrderPriority.choices)
    order_type = django_filters.ChoiceFilter(choices=OrderType.choices)
    customer = django_filters.UUIDFilter(field_name="customer_id")
    store = django_filters.CharFilter(field_name="store__code", lookup_expr="iexact")
    tailor = django_filters.UUIDFilter(field_name="assigned_tailor_id")
    start_date = django_filters.DateFilter(field_name="order_date", lookup_expr="date__gte")
    end_date = django_filters.DateFilter(field_name="order_date", lookup_expr="date__lte")
    due_before = django_filters.DateFilter(
        field_name="expected_delivery_date", lookup_expr="date__lte"
    )

    class Meta:
        model = Order
        fields = [
            "status",
            "workflow_stage",
            "unassigned",
            "priority",
            "order_type",
            "customer",
            "store",
            "tailor",
            "start_date",
            "end_date",
            "due_before",
        ]
