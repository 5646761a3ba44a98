from rest_framework import serializers

from modules.staff.models import StaffRole, StaffUser


class StaffUserSerializer(serializers.ModelSerializer):
    store_code = serializers.CharField(source="store.code", read_only=True, default=None)

    class Meta:
        model = StaffUser
        fields = [
            "id",
            "username",
            "email",
            "phone",
            "role",
            "store",
            "store_code",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class CreateStaffUserSerializer(serializers.Serializer):
    username = serializers.CharField(max_length=150)
    email = serializers.EmailField(required=False, allow_blank=True)
    phone = serializers.CharField(max_length=20, required=False, allow_blank=True)
    role = serializers.ChoiceField(choices=StaffRole.choices, default=StaffRole.SALES_STAFF)
    store_id = serializers.UUIDField(required=False, allow_null=True)


class UpdateStaffUserSerializer(serializers.Serializer):
    email = serializers.EmailField(required=False, allow_blank=True)
    phone = serializers.CharField(max_length=20, required=False, allow_blank=True)
    role = serializers.ChoiceField(choices=StaffRole.choices, required=False)
    store_id = serializers.UUIDField(required=False, allow_null=True)
    is_active = serializers.BooleanField(required=False)
