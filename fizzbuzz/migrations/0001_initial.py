from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Statistic",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("limit", models.PositiveBigIntegerField()),
                ("int1", models.PositiveBigIntegerField()),
                ("int2", models.PositiveBigIntegerField()),
                ("str1", models.CharField(max_length=64)),
                ("str2", models.CharField(max_length=64)),
                ("hits", models.PositiveBigIntegerField(db_index=True, default=1)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "statistic",
            },
        ),
        migrations.AddConstraint(
            model_name="statistic",
            constraint=models.UniqueConstraint(
                fields=("limit", "int1", "int2", "str1", "str2"),
                name="uq_statistic_params",
            ),
        ),
    ]
