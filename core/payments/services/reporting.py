"""
Reporting Aggregator

Read-only rollups over successful ledger entries. Access control is the
caller's concern (see ``permissions.IsPrivilegedRole``).
"""

from typing import Any, Dict

from academy.models import Course

from ..exceptions import NotFound
from ..models import PaymentRecord


def course_buyers(course_id) -> Dict[str, Any]:
    """
    Successful payments for one course and their running total.

    Returns:
        ``{"count", "records", "total_amount"}``; records is a queryset
    """
    records = PaymentRecord.objects.successful().for_course(course_id).order_by("created_at")
    totals = records.totals()
    return {
        "count": totals["count"],
        "records": records,
        "total_amount": totals["total_amount"],
    }


def payment_stats() -> Dict[str, Any]:
    """
    Global totals: distinct paying users, revenue and course count.

    Raises:
        NotFound: If there is no successful payment yet
    """
    totals = PaymentRecord.objects.successful().totals()
    if totals["count"] == 0:
        raise NotFound("No payment details found", resource="payment")
    return {
        "total_users": totals["total_users"],
        "total_amount": totals["total_amount"],
        "total_payments": totals["count"],
        "total_courses": Course.objects.count(),
    }
