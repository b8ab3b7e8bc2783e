from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="DocumentSequence",
            fields=[
                (
                    "doc_type",
                    models.CharField(max_length=32, primary_key=True, serialize=False),
                ),
                ("period_key", models.CharField(blank=True, default="", max_length=32)),
                ("next_sequence", models.PositiveIntegerField(default=1)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "erp_document_sequences",
                "ordering": ["doc_type"],
            },
        ),
    ]
