from rest_framework import serializers

from modules.stores.models import Store


class StoreSerializer(serializers.ModelSerializer):
    class Meta:
        model = Store
        fields = [
            "id",
            "code",
            "name",
            "address_street",
            "address_city",
            "address_state",
            "address_pin_code",
            "phone",
            "email",
            "manager",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class CreateStoreSerializer(serializers.Serializer):
    code = serializers.CharField(max_length=6)
    name = serializers.CharField(max_length=255)
    address_street = serializers.CharField(required=False, allow_blank=True, default="")
    address_city = serializers.CharField(required=False, allow_blank=True, default="")
    address_state = serializers.CharField(required=False, allow_blank=True, default="")
    address_pin_code = serializers.CharField(required=False, allow_blank=True, default="")
    phone = serializers.CharField(required=False, allow_blank=True, default="")
    email = serializers.EmailField(required=False, allow_blank=True)
    manager_id = serializers.UUIDField(required=False, allow_null=True)
