import uuid

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="ActivationEvent",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4, editable=False, primary_key=True, serialize=False
                    ),
                ),
                ("license_key", models.CharField(db_index=True, max_length=19)),
                ("email", models.EmailField(max_length=254)),
                ("device_id", models.CharField(max_length=255)),
                ("device_name", models.CharField(blank=True, max_length=255, null=True)),
                ("timestamp", models.DateTimeField(db_index=True)),
            ],
            options={
                "db_table": "activation_events",
                "ordering": ["-timestamp"],
                "indexes": [
                    models.Index(
                        fields=["license_key", "timestamp"],
                        name="activation__license_3e9a70_idx",
                    ),
                ],
            },
        ),
    ]
