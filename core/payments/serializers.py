"""
Payment Serializers

Request validation for purchase initiation and serialization of ledger
entries for the reporting endpoints.

Serializers:
- PurchaseRequestSerializer: ``{userId, courseId, amount, email}`` body
- PaymentRecordSerializer: Read-only ledger entry
"""

from decimal import Decimal

from rest_framework import serializers

from .models import PaymentRecord


class PurchaseRequestSerializer(serializers.Serializer):
    """
    Body of ``POST /api/payments/purchase/``.

    Keys are camelCase on the wire and snake_case in ``validated_data``.
    """

    userId = serializers.IntegerField(source="user_id", min_value=1)
    courseId = serializers.IntegerField(source="course_id", min_value=1)
    amount = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=Decimal("0.01")
    )
    email = serializers.EmailField()


class PaymentRecordSerializer(serializers.ModelSerializer):
    course_id = serializers.IntegerField(read_only=True, allow_null=True)
    user_id = serializers.IntegerField(read_only=True, allow_null=True)

    class Meta:
        model = PaymentRecord
        fields = (
            "reference",
            "user_id",
            "course_id",
            "amount",
            "currency",
            "email",
            "full_name",
            "status",
            "created_at",
            "updated_at",
        )
        read_only_fields = fields
