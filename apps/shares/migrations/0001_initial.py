# Generated manually for shares app

import uuid
from decimal import Decimal
from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='SharePurchase',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('quantity', models.DecimalField(decimal_places=4, max_digits=14, validators=[MinValueValidator(Decimal('1'))])),
                ('price_per_share', models.DecimalField(decimal_places=2, max_digits=12, validators=[MinValueValidator(Decimal('0.01'))])),
                ('total_amount', models.DecimalField(decimal_places=2, max_digits=14)),
                ('payment_method', models.CharField(choices=[('paypal', 'PayPal'), ('bank transfer', 'Bank transfer'), ('skrill', 'Skrill'), ('cash', 'Cash'), ('check', 'Check'), ('other', 'Other')], max_length=20)),
                ('purchase_date', models.DateTimeField()),
                ('month', models.CharField(db_index=True, max_length=7)),
                ('notes', models.TextField(blank=True, max_length=500)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('recorded_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='recorded_share_purchases', to=settings.AUTH_USER_MODEL)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='share_purchases', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'share_purchases',
                'ordering': ['-purchase_date', '-created_at'],
                'indexes': [
                    models.Index(fields=['user', 'purchase_date'], name='share_user_date_idx'),
                    models.Index(fields=['month'], name='share_month_idx'),
                ],
            },
        ),
    ]
