# Generated manually - Initial handle reservation schema

import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="HandleReservation",
            fields=[
                (
                    "handle",
                    models.CharField(
                        help_text="Normalized handle (lowercase)",
                        max_length=20,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "reserved_at",
                    models.DateTimeField(
                        default=django.utils.timezone.now,
                        help_text="When the handle was reserved by its current owner",
                    ),
                ),
                (
                    "account",
                    models.ForeignKey(
                        help_text="Account that owns this handle",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="handle_reservations",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "handle reservation",
                "verbose_name_plural": "handle reservations",
                "db_table": "handles_reservation",
                "ordering": ["handle"],
            },
        ),
    ]
