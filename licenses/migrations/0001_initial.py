import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="License",
            fields=[
                ("key", models.CharField(max_length=19, primary_key=True, serialize=False)),
                ("owner_email", models.EmailField(db_index=True, max_length=254)),
                (
                    "owner_email_normalized",
                    models.EmailField(
                        db_index=True,
                        help_text="Lowercased email for case-insensitive lookup",
                        max_length=254,
                    ),
                ),
                ("owner_name", models.CharField(max_length=255)),
                (
                    "license_type",
                    models.CharField(
                        choices=[
                            ("trial", "Trial"),
                            ("monthly", "Monthly"),
                            ("annual", "Annual"),
                            ("lifetime", "Lifetime"),
                        ],
                        default="annual",
                        max_length=20,
                    ),
                ),
                ("issued_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("expires_at", models.DateTimeField()),
                (
                    "activation_state",
                    models.CharField(
                        choices=[("not_activated", "Not activated"), ("activated", "Activated")],
                        default="not_activated",
                        max_length=20,
                    ),
                ),
                ("admin_enabled", models.BooleanField(default=True)),
                ("bound_device_id", models.CharField(blank=True, max_length=255, null=True)),
                ("bound_device_name", models.CharField(blank=True, max_length=255, null=True)),
                ("activation_count", models.PositiveIntegerField(default=0)),
                ("activated_at", models.DateTimeField(blank=True, null=True)),
                ("device_released_at", models.DateTimeField(blank=True, null=True)),
                (
                    "revision",
                    models.PositiveIntegerField(
                        default=0,
                        help_text="Bumped on every write; used for conditional updates",
                    ),
                ),
            ],
            options={
                "db_table": "licenses",
                "ordering": ["-issued_at"],
                "indexes": [
                    models.Index(
                        fields=["owner_email_normalized", "issued_at"],
                        name="licenses_owner_e_5c1d2a_idx",
                    ),
                    models.Index(fields=["expires_at"], name="licenses_expires_8f4b61_idx"),
                ],
            },
        ),
    ]
