from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="CustomerModel",
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
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("name", models.CharField(blank=True, max_length=255, null=True)),
                ("tax_id", models.CharField(max_length=14, unique=True)),
                ("birth_date", models.DateField(blank=True, null=True)),
                (
                    "address_street",
                    models.CharField(blank=True, max_length=255, null=True),
                ),
                (
                    "address_number",
                    models.CharField(blank=True, max_length=20, null=True),
                ),
                (
                    "address_postal_code",
                    models.CharField(blank=True, max_length=20, null=True),
                ),
                (
                    "address_city",
                    models.CharField(blank=True, max_length=120, null=True),
                ),
                (
                    "address_state",
                    models.CharField(blank=True, max_length=60, null=True),
                ),
            ],
            options={
                "db_table": "customers",
                "ordering": ["id"],
            },
        ),
    ]
