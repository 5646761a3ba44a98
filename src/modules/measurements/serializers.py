from rest_framework import serializers

from modules.measurements.constants import MEASUREMENT_FIELDS, MeasurementUnit
from modules.measurements.models import CustomerMeasurement


class MeasurementSerializer(serializers.ModelSerializer):
    class Meta:
        model = CustomerMeasurement
        fields = ["id", "customer", "unit", *MEASUREMENT_FIELDS, "notes", "created_at", "updated_at"]
        read_only_fields = fields


class MeasurementInputSerializer(serializers.Serializer):
    unit = serializers.ChoiceField(choices=MeasurementUnit.choices, required=False)
    notes = serializers.CharField(required=False, allow_blank=True)

    def get_fields(self):
        fields = super().get_fields()
        for name in MEASUREMENT_FIELDS:
            fields[name] = serializers.DecimalField(
                max_digits=6,
                decimal_places=2,
                min_value=0,
                required=False,
                allow_null=True,
            )
        return fields
