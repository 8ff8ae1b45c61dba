import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('staff', '0001_initial'),
        ('students', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='StudentAmenity',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255)),
                ('description', models.CharField(blank=True, max_length=500)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('student', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='amenities', to='students.student')),
            ],
            options={
                'verbose_name_plural': 'student amenities',
                'ordering': ['name', 'id'],
                'abstract': False,
                'constraints': [
                    models.UniqueConstraint(fields=('student', 'name'), name='unique_amenity_per_student'),
                ],
            },
        ),
        migrations.CreateModel(
            name='StaffAmenity',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255)),
                ('description', models.CharField(blank=True, max_length=500)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('staff', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='amenities', to='staff.staff')),
            ],
            options={
                'verbose_name_plural': 'staff amenities',
                'ordering': ['name', 'id'],
                'abstract': False,
                'constraints': [
                    models.UniqueConstraint(fields=('staff', 'name'), name='unique_amenity_per_staff'),
                ],
            },
        ),
    ]
