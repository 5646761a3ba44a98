from rest_framework import serializers

from modules.tailors.constants import SkillLevel
from modules.tailors.models import Tailor, TailorPerformance


class TailorSerializer(serializers.ModelSerializer):
    username = serializers.CharField(source="user.username", read_only=True)

    class Meta:
        model = Tailor
        fields = [
            "id",
            "tailor_code",
            "user",
            "username",
            "specializations",
            "skill_level",
            "hourly_rate",
            "is_available",
            "max_concurrent_orders",
            "current_order_count",
            "total_orders_completed",
            "quality_rating",
            "rated_checks_count",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class TailorPerformanceSerializer(serializers.ModelSerializer):
    class Meta:
        model = TailorPerformance
        fields = [
            "id",
            "tailor",
            "month_year",
            "orders_completed",
            "orders_rejected",
            "quality_score",
            "efficiency_rating",
            "total_earnings",
            "updated_at",
        ]
        read_only_fields = fields


class TailorInputSerializer(serializers.Serializer):
    user_id = serializers.UUIDField(required=False)
    specializations = serializers.ListField(child=serializers.CharField(), required=False)
    skill_level = serializers.ChoiceField(choices=SkillLevel.choices, required=False)
    hourly_rate = serializers.DecimalField(
        max_digits=8, decimal_places=2, min_value=0, required=False
    )
    max_concurrent_orders = serializers.IntegerField(min_value=1, required=False)
    is_available = serializers.BooleanField(required=False)
