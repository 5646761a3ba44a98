from rest_framework import serializers

from modules.orders.serializers import OrderListSerializer


class DailySalesSerializer(serializers.Serializer):
    date = serializers.DateField()
    order_count = serializers.IntegerField()
    advance_total = serializers.DecimalField(max_digits=12, decimal_places=2)


class DashboardStatsSerializer(serializers.Serializer):
    total_orders = serializers.IntegerField()
    pending_orders = serializers.IntegerField()
    total_customers = serializers.IntegerField()
    today_revenue = serializers.DecimalField(max_digits=12, decimal_places=2)
    recent_orders = OrderListSerializer(many=True)
    orders_by_status = serializers.DictField(child=serializers.IntegerField())
    orders_by_workflow_stage = serializers.DictField(child=serializers.IntegerField())
    daily_sales = DailySalesSerializer(many=True)
