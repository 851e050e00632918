import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("sites", "0001_initial"),
        ("buildings", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Patient",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("first_name", models.CharField(max_length=128)),
                ("last_name", models.CharField(max_length=128)),
                ("birthdate", models.DateField(blank=True, null=True)),
                (
                    "gender",
                    models.CharField(
                        blank=True,
                        choices=[("M", "Male"), ("F", "Female"), ("O", "Other")],
                        default="",
                        max_length=1,
                    ),
                ),
                ("phone_number", models.CharField(blank=True, default="", max_length=32)),
                ("contact_name", models.CharField(blank=True, default="", max_length=255)),
                ("contact_phone_number", models.CharField(blank=True, default="", max_length=32)),
                ("insurance", models.CharField(blank=True, default="", max_length=255)),
                ("is_active", models.BooleanField(db_index=True, default=True)),
                (
                    "site",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="patients",
                        to="sites.site",
                    ),
                ),
                (
                    "building",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="patients",
                        to="buildings.building",
                    ),
                ),
            ],
            options={
                "db_table": "patients_patient",
                "indexes": [
                    models.Index(fields=["site", "is_active"], name="idx_patient_site_active"),
                    models.Index(fields=["last_name", "first_name"], name="idx_patient_name"),
                ],
            },
        ),
    ]
