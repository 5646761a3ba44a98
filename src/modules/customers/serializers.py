"""Customer DRF serializers for API input/output.

Serializers handle HTTP-level concerns (request parsing and response
rendering).  Business logic lives in the service layer, which receives
Pydantic DTOs from ``dtos.py``.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.customers.models import Customer


class CustomerSerializer(serializers.ModelSerializer):
    address = serializers.SerializerMethodField()
    preferences = serializers.SerializerMethodField()

    class Meta:
        model = Customer
        fields = [
            "id",
            "customer_code",
            "name",
            "phone",
            "email",
            "address",
            "preferences",
            "order_history",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_address(self, obj: Customer) -> dict:
        return {
            "street": obj.address_street,
            "city": obj.address_city,
            "state": obj.address_state,
            "pin_code": obj.address_pin_code,
            "country": obj.address_country,
        }

    def get_preferences(self, obj: Customer) -> dict:
        return {
            "email": obj.notify_email,
            "sms": obj.notify_sms,
            "whatsapp": obj.notify_whatsapp,
        }


class AddressSerializer(serializers.Serializer):
    street = serializers.CharField(required=False, allow_blank=True, default="")
    city = serializers.CharField(required=False, allow_blank=True, default="")
    state = serializers.CharField(required=False, allow_blank=True, default="")
    pin_code = serializers.CharField(required=False, allow_blank=True, default="")
    country = serializers.CharField(required=False, allow_blank=True, default="India")


class PreferencesSerializer(serializers.Serializer):
    email = serializers.BooleanField(required=False, default=True)
    sms = serializers.BooleanField(required=False, default=True)
    whatsapp = serializers.BooleanField(required=False, default=False)


class CustomerInputSerializer(serializers.Serializer):
    """Shape check for create/update payloads.

    Field-level rules (required name, phone format) live in the DTOs.
    """

    name = serializers.CharField(required=False, allow_blank=True)
    phone = serializers.CharField(required=False, allow_blank=True)
    email = serializers.EmailField(required=False, allow_blank=True, allow_null=True)
    address = AddressSerializer(required=False)
    preferences = PreferencesSerializer(required=False)


class CustomerSummarySerializer(serializers.ModelSerializer):
    order_count = serializers.IntegerField(read_only=True)
    last_order_date = serializers.DateTimeField(read_only=True, allow_null=True)
    total_spent = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)

    class Meta:
        model = Customer
        fields = [
            "id",
            "customer_code",
            "name",
            "phone",
            "order_count",
            "last_order_date",
            "total_spent",
        ]
        read_only_fields = fields
