import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Hostel',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255)),
                ('address', models.TextField(blank=True)),
                ('contact_number', models.CharField(blank=True, max_length=20)),
                ('email', models.EmailField(blank=True, max_length=254)),
                ('is_active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'ordering': ['name', 'id'],
                'indexes': [models.Index(fields=['is_active'], name='hostel_active_idx')],
            },
        ),
        migrations.CreateModel(
            name='Block',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('block_name', models.CharField(max_length=120)),
                ('location', models.CharField(blank=True, max_length=255)),
                ('manager_name', models.CharField(blank=True, max_length=120)),
                ('manager_contact', models.CharField(blank=True, max_length=20)),
                ('remarks', models.TextField(blank=True)),
                ('block_attachment', models.ImageField(blank=True, null=True, upload_to='hostels/blocks/')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('hostel', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='blocks', to='hostels.hostel')),
            ],
            options={
                'ordering': ['block_name', 'id'],
                'constraints': [
                    models.UniqueConstraint(fields=('hostel', 'block_name'), name='unique_block_name_per_hostel'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Room',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('room_number', models.CharField(max_length=30)),
                ('capacity', models.PositiveIntegerField(default=1)),
                ('room_type', models.CharField(choices=[('single', 'Single'), ('double', 'Double'), ('triple', 'Triple'), ('dormitory', 'Dormitory')], default='double', max_length=20)),
                ('floor_number', models.IntegerField(blank=True, null=True)),
                ('status', models.CharField(choices=[('available', 'Available'), ('occupied', 'Occupied'), ('maintenance', 'Under Maintenance')], default='available', max_length=20)),
                ('room_attachment', models.ImageField(blank=True, null=True, upload_to='hostels/rooms/')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('block', models.ForeignKey(on_delete=django.db.models.deletion.RESTRICT, related_name='rooms', to='hostels.block')),
                ('hostel', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='rooms', to='hostels.hostel')),
            ],
            options={
                'ordering': ['block__block_name', 'room_number', 'id'],
                'indexes': [models.Index(fields=['hostel', 'status'], name='room_hostel_status_idx')],
                'constraints': [
                    models.UniqueConstraint(fields=('block', 'room_number'), name='unique_room_number_per_block'),
                ],
            },
        ),
    ]
