import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models

import teams.models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Team",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "team_id",
                    models.CharField(default=teams.models.generate_team_id, editable=False, max_length=64, unique=True),
                ),
                ("leader_email", models.EmailField(db_index=True, max_length=254)),
                ("members", models.JSONField(blank=True, default=list)),
                (
                    "status",
                    models.CharField(
                        choices=[("Active", "Active"), ("Disbanded", "Disbanded")],
                        default="Active",
                        max_length=16,
                    ),
                ),
                ("team_name", models.CharField(max_length=50)),
                ("created", models.DateTimeField(auto_now_add=True)),
                ("updated", models.DateTimeField(auto_now=True)),
            ],
            options={
                "indexes": [models.Index(fields=["status", "created"], name="team_status_created_idx")],
            },
        ),
        migrations.CreateModel(
            name="TeamInvite",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("invited_by", models.EmailField(max_length=254)),
                ("invited_at", models.DateTimeField()),
                ("team_name", models.CharField(max_length=50)),
                (
                    "team",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="invites",
                        to="teams.team",
                        to_field="team_id",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="pending_invites",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["invited_at", "id"],
                "unique_together": {("user", "team")},
                "indexes": [models.Index(fields=["team", "invited_at"], name="invite_team_invited_idx")],
            },
        ),
    ]
