import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("inventory", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Hold",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("customer_identifier", models.CharField(max_length=255)),
                (
                    "locked_price",
                    models.DecimalField(
                        decimal_places=2,
                        help_text="Unit price at the moment the hold was created.",
                        max_digits=10,
                    ),
                ),
                ("check_in_date", models.DateField()),
                (
                    "status",
                    models.CharField(
                        choices=[("active", "Active"), ("expired", "Expired"), ("cancelled", "Cancelled")],
                        default="active",
                        max_length=20,
                    ),
                ),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("expires_at", models.DateTimeField()),
                ("status_changed_at", models.DateTimeField(blank=True, null=True)),
                (
                    "unit",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="holds",
                        to="inventory.pricingunit",
                    ),
                ),
            ],
            options={
                "verbose_name": "Hold",
                "verbose_name_plural": "Holds",
                "ordering": ["expires_at", "id"],
                "indexes": [
                    models.Index(fields=["status", "expires_at"], name="hold_status_expires_idx"),
                    models.Index(fields=["customer_identifier", "status"], name="hold_customer_status_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("expires_at__gt", models.F("created_at"))),
                        name="hold_expires_after_creation",
                    ),
                ],
            },
        ),
    ]
