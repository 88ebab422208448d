import django.utils.timezone
from django.db import migrations, models

import users.models
import users.roles


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("auth", "0012_alter_user_first_name_max_length"),
    ]

    operations = [
        migrations.CreateModel(
            name="User",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("password", models.CharField(max_length=128, verbose_name="password")),
                ("last_login", models.DateTimeField(blank=True, null=True, verbose_name="last login")),
                (
                    "is_superuser",
                    models.BooleanField(
                        default=False,
                        help_text="Designates that this user has all permissions without explicitly assigning them.",
                        verbose_name="superuser status",
                    ),
                ),
                ("first_name", models.CharField(blank=True, max_length=150, verbose_name="first name")),
                ("last_name", models.CharField(blank=True, max_length=150, verbose_name="last name")),
                (
                    "is_staff",
                    models.BooleanField(
                        default=False,
                        help_text="Designates whether the user can log into this admin site.",
                        verbose_name="staff status",
                    ),
                ),
                (
                    "is_active",
                    models.BooleanField(
                        default=True,
                        help_text="Designates whether this user should be treated as active. Unselect this instead of deleting accounts.",
                        verbose_name="active",
                    ),
                ),
                ("date_joined", models.DateTimeField(default=django.utils.timezone.now, verbose_name="date joined")),
                ("email", models.EmailField(max_length=254, unique=True)),
                ("role", models.JSONField(blank=True, default=users.roles.default_roles)),
                (
                    "registration_status",
                    models.CharField(
                        choices=[
                            ("unregistered", "Unregistered"),
                            ("registered", "Registered"),
                            ("rejected", "Rejected"),
                            ("confirmation", "Confirmation"),
                            ("waitlist", "Waitlist"),
                            ("coming", "Coming"),
                            ("not_coming", "Not Coming"),
                            ("confirmed", "Confirmed"),
                            ("checked_in", "Checked In"),
                        ],
                        default="unregistered",
                        max_length=20,
                    ),
                ),
                ("confirmed_team", models.BooleanField(default=False)),
                ("team_id", models.CharField(blank=True, db_index=True, max_length=64, null=True)),
                (
                    "team_role",
                    models.CharField(
                        blank=True,
                        choices=[("leader", "Leader"), ("member", "Member")],
                        max_length=10,
                        null=True,
                    ),
                ),
                ("phone_number", models.CharField(blank=True, default="", max_length=20)),
                ("date_of_birth", models.CharField(blank=True, default="", max_length=20)),
                ("gender", models.CharField(blank=True, default="", max_length=50)),
                ("ethnicity", models.CharField(blank=True, default="", max_length=100)),
                ("level_of_study", models.CharField(blank=True, default="", max_length=100)),
                ("school", models.CharField(blank=True, default="", max_length=255)),
                ("major", models.CharField(blank=True, default="", max_length=255)),
                ("grad_year", models.CharField(blank=True, default="", max_length=10)),
                ("shirt_size", models.CharField(blank=True, default="", max_length=10)),
                ("dietary_restrictions", models.CharField(blank=True, default="", max_length=255)),
                ("special_needs", models.TextField(blank=True, default="")),
                ("github", models.CharField(blank=True, default="", max_length=255)),
                ("short_answer", models.TextField(blank=True, default="")),
                ("email_verified", models.BooleanField(default=False)),
                ("discord", models.JSONField(blank=True, default=dict)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("registered_at", models.DateTimeField(blank=True, null=True)),
                (
                    "groups",
                    models.ManyToManyField(
                        blank=True,
                        help_text="The groups this user belongs to. A user will get all permissions granted to each of their groups.",
                        related_name="user_set",
                        related_query_name="user",
                        to="auth.group",
                        verbose_name="groups",
                    ),
                ),
                (
                    "user_permissions",
                    models.ManyToManyField(
                        blank=True,
                        help_text="Specific permissions for this user.",
                        related_name="user_set",
                        related_query_name="user",
                        to="auth.permission",
                        verbose_name="user permissions",
                    ),
                ),
            ],
            options={
                "indexes": [models.Index(fields=["registration_status"], name="user_reg_status_idx")],
            },
            managers=[
                ("objects", users.models.UserManager()),
            ],
        ),
    ]
