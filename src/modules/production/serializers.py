"""Production DRF serializers."""

from __future__ import annotations

from rest_framework import serializers

from modules.production.constants import MAX_RATING, MIN_RATING, AssignmentStatus, OverallQuality
from modules.production.models import OrderAssignment, QualityCheck


class AssignmentSerializer(serializers.ModelSerializer):
    order_number = serializers.CharField(source="order.order_number", read_only=True)
    tailor_code = serializers.CharField(source="tailor.tailor_code", read_only=True)

    class Meta:
        model = OrderAssignment
        fields = [
            "id",
            "order",
            "order_number",
            "tailor",
            "tailor_code",
            "status",
            "assigned_at",
            "started_at",
            "completed_at",
            "assigned_by",
            "estimated_completion_time",
            "notes",
            "released",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class QualityCheckSerializer(serializers.ModelSerializer):
    order_number = serializers.CharField(source="order.order_number", read_only=True)
    score = serializers.DecimalField(max_digits=3, decimal_places=2, read_only=True)

    class Meta:
        model = QualityCheck
        fields = [
            "id",
            "order",
            "order_number",
            "tailor",
            "checked_by",
            "overall_quality",
            "stitching_quality",
            "finishing_quality",
            "measurement_accuracy",
            "design_adherence",
            "score",
            "passed",
            "defects_found",
            "corrective_actions",
            "notes",
            "check_date",
        ]
        read_only_fields = fields


class AssignOrderSerializer(serializers.Serializer):
    order_id = serializers.UUIDField()
    tailor_id = serializers.UUIDField()
    estimated_completion_time = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, max_length=100
    )
    notes = serializers.CharField(required=False, allow_blank=True, default="")


class CompleteAssignmentSerializer(serializers.Serializer):
    notes = serializers.CharField(required=False, allow_blank=True, default="")


class QualityCheckInputSerializer(serializers.Serializer):
    order_id = serializers.UUIDField()
    overall_quality = serializers.ChoiceField(choices=OverallQuality.choices)
    stitching_quality = serializers.IntegerField(min_value=MIN_RATING, max_value=MAX_RATING)
    finishing_quality = serializers.IntegerField(min_value=MIN_RATING, max_value=MAX_RATING)
    measurement_accuracy = serializers.IntegerField(min_value=MIN_RATING, max_value=MAX_RATING)
    design_adherence = serializers.IntegerField(min_value=MIN_RATING, max_value=MAX_RATING)
    defects_found = serializers.ListField(
        child=serializers.CharField(max_length=100), required=False, default=list
    )
    corrective_actions = serializers.CharField(required=False, allow_blank=True, default="")
    notes = serializers.CharField(required=False, allow_blank=True, default="")


class AssignmentFilterSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=AssignmentStatus.choices, required=False)
    tailor = serializers.UUIDField(required=False)
    order = serializers.UUIDField(required=False)
