from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="DailyUsage",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("email", models.EmailField(max_length=254)),
                ("date", models.DateField()),
                ("sessions", models.PositiveIntegerField(default=0)),
                ("total_uses", models.PositiveIntegerField(default=0)),
                (
                    "plugins",
                    models.JSONField(blank=True, default=dict, help_text="Use count per plugin"),
                ),
                ("device_id", models.CharField(blank=True, max_length=255, null=True)),
                ("last_activity", models.DateTimeField(blank=True, null=True)),
            ],
            options={
                "db_table": "daily_usage",
                "ordering": ["-date"],
                "unique_together": {("email", "date")},
                "indexes": [
                    models.Index(fields=["date"], name="daily_usage_date_4b0c2e_idx"),
                ],
            },
        ),
    ]
