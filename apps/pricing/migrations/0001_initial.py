import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("inventory", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="PriceChange",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "source",
                    models.CharField(
                        choices=[("recompute", "Recompute sweep"), ("override", "Manual override")],
                        max_length=20,
                    ),
                ),
                ("old_price", models.DecimalField(decimal_places=2, max_digits=10)),
                ("new_price", models.DecimalField(decimal_places=2, max_digits=10)),
                ("reason", models.CharField(blank=True, max_length=255)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "unit",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="price_changes",
                        to="inventory.pricingunit",
                    ),
                ),
            ],
            options={
                "verbose_name": "Price change",
                "verbose_name_plural": "Price changes",
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(fields=["unit", "created_at"], name="price_change_unit_created_idx"),
                ],
            },
        ),
    ]
