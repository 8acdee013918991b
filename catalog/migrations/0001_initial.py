import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Product",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=200)),
                ("company", models.CharField(max_length=200)),
                ("description", models.TextField()),
                ("featured", models.BooleanField(default=False)),
                ("image", models.CharField(blank=True, default="", help_text="Public URL of the product image", max_length=500)),
                ("price", models.PositiveIntegerField(help_text="Price in cents", validators=[django.core.validators.MinValueValidator(0)])),
                ("owner_id", models.CharField(help_text="Identity id of the admin who created the product", max_length=64)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["featured"], name="catalog_pro_feature_2d1c4e_idx"),
                    models.Index(fields=["-created_at"], name="catalog_pro_created_8f3a1b_idx"),
                ],
            },
        ),
    ]
