import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("academy", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="PaymentRecord",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("reference", models.CharField(editable=False, help_text="Transaction reference issued by the payment gateway", max_length=100, unique=True, verbose_name="Reference")),
                ("amount", models.DecimalField(decimal_places=2, max_digits=12, verbose_name="Amount")),
                ("currency", models.CharField(default="NGN", max_length=3, verbose_name="Currency")),
                ("email", models.EmailField(max_length=254, verbose_name="Buyer Email")),
                ("full_name", models.CharField(blank=True, max_length=200, verbose_name="Buyer Name")),
                ("status", models.CharField(choices=[("pending", "Pending"), ("success", "Success"), ("failed", "Failed")], db_index=True, default="pending", max_length=10, verbose_name="Status")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("course", models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="payment_records", to="academy.course", verbose_name="Course")),
                ("user", models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="payment_records", to=settings.AUTH_USER_MODEL, verbose_name="User")),
            ],
            options={
                "verbose_name": "Payment Record",
                "verbose_name_plural": "Payment Records",
                "db_table": "payments_payment_record",
                "ordering": ["-created_at"],
                "indexes": [models.Index(fields=["course", "status"], name="payment_course_status_idx")],
            },
        ),
    ]
