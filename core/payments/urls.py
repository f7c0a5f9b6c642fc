from django.urls import path
from .views import (
    CourseBuyersView,
    PaystackWebhookView,
    PaymentStatsView,
    PurchaseCourseView,
)

app_name = "payments"

urlpatterns = [
    path("purchase/", PurchaseCourseView.as_view(), name="purchase"),
    path("webhook/", PaystackWebhookView.as_view(), name="webhook"),
    path("courses/<int:course_id>/buyers/", CourseBuyersView.as_view(), name="course-buyers"),
    path("stats/", PaymentStatsView.as_view(), name="stats"),
]
