import uuid

import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='PickupPoint',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('registration_date', models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ('city', models.CharField(choices=[('Москва', 'Moscow'), ('Санкт-Петербург', 'Saint-Petersburg'), ('Казань', 'Kazan')], max_length=32)),
            ],
            options={
                'db_table': 'pickup_points',
                'ordering': ['registration_date', 'id'],
            },
        ),
        migrations.CreateModel(
            name='Reception',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('date_time', models.DateTimeField(default=django.utils.timezone.now)),
                ('status', models.CharField(choices=[('in_progress', 'In progress'), ('close', 'Closed')], default='in_progress', max_length=20)),
                ('pickup_point', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='receptions', to='pvz.pickuppoint')),
            ],
            options={
                'db_table': 'receptions',
                'ordering': ['date_time', 'id'],
                'indexes': [
                    models.Index(fields=['pickup_point', 'status', 'date_time'], name='reception_point_status_idx'),
                    models.Index(fields=['date_time'], name='reception_date_time_idx'),
                ],
                'constraints': [
                    models.UniqueConstraint(condition=models.Q(('status', 'in_progress')), fields=('pickup_point',), name='one_active_reception_per_pickup_point'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Product',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('date_time', models.DateTimeField(default=django.utils.timezone.now)),
                ('type', models.CharField(choices=[('электроника', 'Electronics'), ('одежда', 'Clothes'), ('обувь', 'Shoes')], max_length=32)),
                ('sequence', models.PositiveIntegerField(editable=False)),
                ('reception', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='products', to='pvz.reception')),
            ],
            options={
                'db_table': 'products',
                'ordering': ['sequence'],
                'constraints': [
                    models.UniqueConstraint(fields=('reception', 'sequence'), name='unique_product_sequence_per_reception'),
                ],
            },
        ),
    ]
