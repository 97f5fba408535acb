from __future__ import annotations

from django.db import migrations, models


class Migration(migrations.Migration):
    dependencies = [
        ("notifications", "0001_initial"),
    ]

    operations = [
        migrations.AlterField(
            model_name="notification",
            name="type",
            field=models.CharField(
                choices=[
                    ("match_request", "Match request"),
                    ("match_accepted", "Match accepted"),
                    ("report_update", "Report update"),
                    ("system", "System"),
                ],
                max_length=32,
            ),
        ),
    ]
