import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('hostels', '0001_initial'),
        ('staff', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Inquiry',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255)),
                ('email', models.EmailField(blank=True, max_length=254)),
                ('phone', models.CharField(max_length=20)),
                ('seater_type', models.PositiveSmallIntegerField(choices=[(1, 'Single Seater'), (2, 'Double Seater'), (3, 'Triple Seater'), (4, 'Four Seater')], default=1)),
                ('description', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('block', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='inquiries', to='hostels.block')),
                ('hostel', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='inquiries', to='hostels.hostel')),
                ('recorded_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='inquiries', to='staff.staff')),
            ],
            options={
                'verbose_name_plural': 'inquiries',
                'ordering': ['-created_at', '-id'],
                'indexes': [
                    models.Index(fields=['hostel', 'created_at'], name='inquiry_hostel_created_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='InquirySeater',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('seater_type', models.PositiveSmallIntegerField(choices=[(1, 'Single Seater'), (2, 'Double Seater'), (3, 'Triple Seater'), (4, 'Four Seater')])),
                ('notes', models.CharField(blank=True, max_length=500)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('inquiry', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='seaters', to='inquiries.inquiry')),
                ('room', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='inquiry_seaters', to='hostels.room')),
            ],
            options={
                'ordering': ['inquiry_id', 'id'],
                'constraints': [
                    models.UniqueConstraint(fields=('inquiry', 'room'), name='unique_room_per_inquiry'),
                ],
            },
        ),
    ]
