"""
Payment Views (core.payments)
=============================

REST API endpoints of the payment core.

Endpoints
---------

1. PurchaseCourseView
   - URL: /api/payments/purchase/
   - Method: POST
   - Auth: Required
   - Body: {"userId": 1, "courseId": 42, "amount": "100.00", "email": "buyer@example.com"}
   - Purpose:
       Starts a purchase: asks Paystack for a transaction reference and
       stores a pending ledger entry. Returns the gateway's initialization
       payload (authorization URL and reference) for the frontend redirect.

2. PaystackWebhookView
   - URL: /api/payments/webhook/
   - Method: POST
   - Auth: None (optionally HMAC-signed by Paystack)
   - Purpose:
       Receives gateway events and reconciles the ledger. Any non-200
       answer makes Paystack re-deliver the event later.

3. CourseBuyersView
   - URL: /api/payments/courses/<course_id>/buyers/
   - Method: GET
   - Auth: Admin roles
   - Purpose:
       Lists successful payments for a course with their total amount.

4. PaymentStatsView
   - URL: /api/payments/stats/
   - Method: GET
   - Auth: Admin roles
   - Purpose:
       Returns distinct paying users, total revenue and course count.

Author: Course Payments Team
Date: 2026-10-19
"""

import logging

from django.conf import settings
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from .exceptions import InvalidSignature, PaymentServiceException
from .permissions import IsPrivilegedRole
from .serializers import PaymentRecordSerializer, PurchaseRequestSerializer
from .services import (
    PurchaseInitiator,
    WebhookReconciler,
    course_buyers,
    payment_stats,
    translate_event,
)
from .services.gateway import is_valid_signature

logger = logging.getLogger(__name__)

SIGNATURE_HEADER = "HTTP_X_PAYSTACK_SIGNATURE"


class PurchaseCourseView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = PurchaseRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        result = PurchaseInitiator().initiate(
            user_id=data["user_id"],
            course_id=data["course_id"],
            amount=data["amount"],
            email=data["email"],
        )
        return Response({"success": True, "data": result.payload}, status=status.HTTP_200_OK)


class PaystackWebhookView(APIView):
    """
    Gateway event sink.

    Recognized, idempotent and ignored events are all acknowledged with 200.
    Missing users, courses and (not yet visible) payments answer 404 so the
    gateway retries; unexpected failures answer 500.
    """

    authentication_classes = []
    permission_classes = [AllowAny]

    def post(self, request):
        secret = settings.PAYSTACK_WEBHOOK_SECRET
        if secret and not is_valid_signature(request.body, request.META.get(SIGNATURE_HEADER), secret):
            logger.warning("Rejected webhook with invalid signature.")
            raise InvalidSignature()

        try:
            event = translate_event(request.data)
            outcome = WebhookReconciler().reconcile(event)
        except (PaymentServiceException, APIException):
            raise
        except Exception as exc:
            logger.exception("Error handling webhook: %s", exc)
            return Response(
                {"success": False, "message": "Webhook processing failed"},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        return Response(outcome.to_dict(), status=status.HTTP_200_OK)


class CourseBuyersView(APIView):
    permission_classes = [IsAuthenticated, IsPrivilegedRole]

    def get(self, request, course_id: int):
        report = course_buyers(course_id)
        return Response(
            {
                "success": True,
                "count": report["count"],
                "data": PaymentRecordSerializer(report["records"], many=True).data,
                "total_amount": report["total_amount"],
            },
            status=status.HTTP_200_OK,
        )


class PaymentStatsView(APIView):
    permission_classes = [IsAuthenticated, IsPrivilegedRole]

    def get(self, request):
        return Response({"success": True, "data": payment_stats()}, status=status.HTTP_200_OK)
