import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("patients", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="MedicalRecord",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("records_reviewed", models.BooleanField(default=False)),
                ("bp_at_goal", models.BooleanField(default=False)),
                ("hospital_visit_since_last_review", models.BooleanField(default=False)),
                ("a1c_at_goal", models.BooleanField(default=False)),
                ("benzodiazepines", models.BooleanField(default=False)),
                ("antipsychotics", models.BooleanField(default=False)),
                ("opioids", models.BooleanField(default=False)),
                ("fall_since_last_visit", models.BooleanField(default=False)),
                (
                    "patient",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="medical_records",
                        to="patients.patient",
                    ),
                ),
            ],
            options={
                "db_table": "medical_records_medical_record",
                "indexes": [
                    models.Index(fields=["patient", "created_at"], name="idx_medrec_patient_created"),
                ],
            },
        ),
    ]
