from __future__ import annotations

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="CalendarConnection",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "provider",
                    models.CharField(
                        choices=[
                            ("google", "Google Calendar"),
                            ("microsoft", "Microsoft Outlook"),
                        ],
                        max_length=20,
                    ),
                ),
                ("access_token", models.TextField()),
                ("scope", models.TextField(blank=True, default="")),
                (
                    "expires_at",
                    models.BigIntegerField(help_text="토큰 만료 시각 (epoch ms)"),
                ),
                ("connected_at", models.DateTimeField()),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="calendar_connections",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "calendar_connection",
                "ordering": ["provider"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("user", "provider"),
                        name="uniq_calendar_user_provider",
                    )
                ],
            },
        ),
    ]
