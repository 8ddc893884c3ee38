import datetime
import django.utils.timezone
from decimal import Decimal

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="PricingUnit",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("room_type", models.CharField(default="Standard", max_length=100)),
                ("morning_base_price", models.DecimalField(decimal_places=2, default=Decimal("100.00"), max_digits=10)),
                ("night_base_price", models.DecimalField(decimal_places=2, default=Decimal("75.00"), max_digits=10)),
                ("current_price", models.DecimalField(decimal_places=2, max_digits=10)),
                ("available_count", models.PositiveIntegerField()),
                ("total_count", models.PositiveIntegerField()),
                (
                    "pricing_period",
                    models.CharField(
                        choices=[("morning", "Morning (06:00-18:00)"), ("night", "Night (18:00-06:00)")],
                        default="morning",
                        max_length=20,
                    ),
                ),
                ("period_start", models.TimeField(default=datetime.time(6, 0))),
                ("period_end", models.TimeField(default=datetime.time(18, 0))),
                (
                    "status",
                    models.CharField(
                        choices=[("active", "Active"), ("inactive", "Inactive")],
                        default="active",
                        max_length=20,
                    ),
                ),
                ("last_price_update", models.DateTimeField(default=django.utils.timezone.now)),
                (
                    "demand_signal",
                    models.PositiveIntegerField(
                        default=0,
                        help_text="Views recorded since the last recompute; used as the traffic proxy.",
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "verbose_name": "Pricing unit",
                "verbose_name_plural": "Pricing units",
                "ordering": ["current_price", "id"],
                "indexes": [
                    models.Index(fields=["status", "pricing_period"], name="unit_status_period_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("available_count__lte", models.F("total_count"))),
                        name="unit_available_within_total",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("total_count__gt", 0)),
                        name="unit_total_positive",
                    ),
                ],
            },
        ),
    ]
